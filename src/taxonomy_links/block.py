"""Taxonomy indented links block.

The block shows one vocabulary, or the subtree below one of its terms, as a
nested list of links. Its configuration is two settings: the vocabulary
machine name and an optional parent term id.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from taxonomy_links.core.tree.flattener import flatten_terms
from taxonomy_links.links import build_term_item
from taxonomy_links.models.term import Slot, items_to_dicts
from taxonomy_links.protocols import ItemBuilderProtocol, TermStorageProtocol

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_tid(value: Any) -> int:
    """Coerce a submitted form value to a term id.

    Leading digits are used and anything unparsable becomes 0, so ``"12abc"``
    is 12 and ``""`` is 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class BlockSettings:
    """Persisted block configuration."""

    vocabulary_vid: str = ""
    term_tid: int = 0

    @classmethod
    def from_form(cls, values: Mapping[str, Any]) -> "BlockSettings":
        """Build settings from submitted form values."""
        return cls(
            vocabulary_vid=str(values.get("vocabulary_vid") or "").strip(),
            term_tid=coerce_tid(values.get("term_tid")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"vocabulary_vid": self.vocabulary_vid, "term_tid": self.term_tid}


class TaxonomyIndentedLinks:
    """Build an item list of term links nested by hierarchy."""

    def __init__(
        self,
        storage: TermStorageProtocol,
        settings: BlockSettings,
        *,
        item_builder: ItemBuilderProtocol = build_term_item,
    ) -> None:
        self.storage = storage
        self.settings = settings
        self.item_builder = item_builder

    def get_indented_items(self, vid: str, tid: int = 0) -> tuple[Slot, ...]:
        """Return the nested link items for a vocabulary or a term's subtree.

        Args:
            vid: Vocabulary machine name.
            tid: Optional term to use as the parent of the tree (0 = whole vocabulary).
        """
        tree = self.storage.load_tree(vid, parent=tid)
        if not tree:
            logger.debug("No terms in {} below {}", vid, tid)
            return ()
        return flatten_terms(tree, base_depth=tree[0].depth, item_builder=self.item_builder)

    def build(self) -> dict[str, Any]:
        """Return the ``item_list`` render structure, or ``{}`` when empty."""
        if not self.settings.vocabulary_vid:
            return {}
        items = self.get_indented_items(self.settings.vocabulary_vid, self.settings.term_tid)
        if not items:
            return {}
        return {"theme": "item_list", "items": items_to_dicts(items)}
