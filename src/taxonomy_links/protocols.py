"""Protocols for dependency injection in the links block."""

from typing import Protocol, runtime_checkable

from taxonomy_links.models.term import LinkItem, TermRecord


@runtime_checkable
class TermStorageProtocol(Protocol):
    """Protocol for term sources that answer tree queries."""

    def load_tree(
        self, vid: str, parent: int = 0, max_depth: int | None = None
    ) -> list[TermRecord]:
        """Return the terms below ``parent`` in pre-order, tagged with depth."""
        ...


@runtime_checkable
class ItemBuilderProtocol(Protocol):
    """Protocol for turning a term into a renderable link item."""

    def __call__(self, record: TermRecord) -> LinkItem:
        """Build the link item for a term."""
        ...
