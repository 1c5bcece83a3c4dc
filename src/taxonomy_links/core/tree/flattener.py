"""Turn a depth-tagged pre-order term listing into nested link items.

Tree queries return terms as a flat list where each record carries its depth
relative to the query root. ``flatten_terms`` rebuilds the hierarchy in a
single forward pass: it keeps one sibling counter per open level and, when the
walk climbs back up, turns the item that opened the level into a group holding
everything collected below it.

>>> from taxonomy_links.models.term import TermRecord
>>> items = flatten_terms([
...     TermRecord(tid=1, name="Fruit", depth=0),
...     TermRecord(tid=2, name="Apple", depth=1),
...     TermRecord(tid=3, name="Veg", depth=0),
... ])
>>> [type(slot).__name__ for slot in items]
['Group', 'Leaf']
"""

from collections.abc import Callable, Iterable, Iterator

from loguru import logger

from taxonomy_links.links import build_term_item
from taxonomy_links.models.term import Group, Leaf, LinkItem, Slot, TermRecord


class MalformedTreeError(ValueError):
    """Raised when record depths do not describe a pre-order walk."""


def _close_level(open_levels: list[list[Slot]], level_index: list[int]) -> int:
    """Wrap the parent of the innermost open level into a group.

    Returns the parent's slot index, which becomes the current index again.
    """
    children = open_levels.pop()
    index = level_index.pop()
    siblings = open_levels[-1]
    parent = siblings[index]
    siblings[index] = Group(item=parent.item, children=tuple(children))
    return index


def flatten_terms(
    records: Iterable[TermRecord],
    *,
    base_depth: int | None = None,
    item_builder: Callable[[TermRecord], LinkItem] = build_term_item,
) -> tuple[Slot, ...]:
    """Build nested link items from terms listed in pre-order.

    Args:
        records: Terms in depth-first pre-order, each with its depth.
        base_depth: Depth treated as the top level. Defaults to the depth of
            the first record.
        item_builder: Turns a term into the link item placed in the output.

    Returns:
        Top-level slots; terms with children are ``Group`` slots.

    Raises:
        MalformedTreeError: If a record goes more than one level deeper than
            the previous one, or above the top level.
    """
    root: list[Slot] = []
    open_levels: list[list[Slot]] = [root]
    level_index: list[int] = []
    current_index = -1
    previous_depth: int | None = None
    count = 0

    for record in records:
        if base_depth is None:
            base_depth = record.depth
        depth = record.depth - base_depth

        if previous_depth is None:
            if depth != 0:
                msg = f"First term {record.tid} is at depth {depth}, expected the top level"
                raise MalformedTreeError(msg)
            previous_depth = depth

        if depth > previous_depth:
            if depth - previous_depth > 1:
                msg = (
                    f"Term {record.tid} jumps from depth {previous_depth} to {depth}; "
                    "a term can only be one level below the previous one"
                )
                raise MalformedTreeError(msg)
            level_index.append(current_index)
            open_levels.append([])
            current_index = 0
        elif depth < previous_depth:
            if depth < 0:
                msg = f"Term {record.tid} at depth {depth} is above the top level"
                raise MalformedTreeError(msg)
            # One level closes per step of decrease.
            for _ in range(previous_depth - depth):
                current_index = _close_level(open_levels, level_index)
            current_index += 1
        else:
            current_index += 1

        # The new leaf lands at current_index, the end of the open level.
        open_levels[-1].append(Leaf(item=item_builder(record)))

        previous_depth = depth
        count += 1

    while level_index:
        _close_level(open_levels, level_index)

    logger.debug("Flattened {} terms into {} top-level items", count, len(root))
    return tuple(root)


def iter_items(items: Iterable[Slot], *, depth: int = 0) -> Iterator[tuple[int, LinkItem]]:
    """Yield ``(depth, item)`` for every slot in pre-order."""
    for slot in items:
        yield depth, slot.item
        if isinstance(slot, Group):
            yield from iter_items(slot.children, depth=depth + 1)


def count_items(items: Iterable[Slot]) -> int:
    return sum(1 for _ in iter_items(items))
