"""Domain models for taxonomy terms and the nested link output."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Vocabulary:
    """A taxonomy vocabulary."""

    vid: str
    name: str
    description: str = ""
    weight: int = 0


@dataclass(frozen=True)
class TermRecord:
    """A term as returned by a tree query, tagged with its depth."""

    tid: int
    name: str
    depth: int
    vid: str = ""
    weight: int = 0
    description: str = ""
    parents: tuple[int, ...] = (0,)


@dataclass(frozen=True)
class Term:
    """A stored term with all of its parents."""

    tid: int
    vid: str
    name: str
    description: str = ""
    weight: int = 0
    parents: tuple[int, ...] = (0,)


@dataclass(frozen=True)
class LinkItem:
    """A renderable link to a term."""

    title: str
    url: str
    type: str = "link"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "title": self.title, "url": self.url}


@dataclass(frozen=True)
class Leaf:
    """A term without children in the nested output."""

    item: LinkItem


@dataclass(frozen=True)
class Group:
    """A term whose children are rendered as a sub-list."""

    item: LinkItem
    children: tuple["Leaf | Group", ...]


Slot = Leaf | Group

# Reserved key holding a group's children in the dict form.
SUBLIST_KEY = "sublist"


def slot_to_dict(slot: Slot) -> dict[str, Any]:
    """Convert a slot to plain data, children under ``SUBLIST_KEY``."""
    data: dict[str, Any] = slot.item.to_dict()
    if isinstance(slot, Group):
        data[SUBLIST_KEY] = items_to_dicts(slot.children)
    return data


def items_to_dicts(items: tuple[Slot, ...]) -> list[dict[str, Any]]:
    return [slot_to_dict(slot) for slot in items]

