"""Render taxonomy vocabularies as nested lists of term links."""

from taxonomy_links.block import BlockSettings, TaxonomyIndentedLinks
from taxonomy_links.core.storage.term_storage import SqliteTermStorage, load_tree
from taxonomy_links.core.tree.flattener import MalformedTreeError, flatten_terms
from taxonomy_links.links import TermLinkBuilder, build_term_item
from taxonomy_links.protocols import ItemBuilderProtocol, TermStorageProtocol

__all__ = [
    "BlockSettings",
    "ItemBuilderProtocol",
    "MalformedTreeError",
    "SqliteTermStorage",
    "TaxonomyIndentedLinks",
    "TermLinkBuilder",
    "TermStorageProtocol",
    "build_term_item",
    "flatten_terms",
    "load_tree",
]
