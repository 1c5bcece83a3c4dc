"""Render nested link items as markdown."""

import io
from collections.abc import Iterable
from urllib.parse import quote

from taxonomy_links.core.tree.flattener import iter_items
from taxonomy_links.models.term import Slot


def _escape_label(text: str) -> str:
    return text.replace("[", r"\[").replace("]", r"\]")


def _escape_url(url: str) -> str:
    # Spaces, parentheses and angle brackets would end the link target.
    return quote(url, safe="/:?#[]@!$&'*+,;=%~")


def render_items_as_markdown(items: Iterable[Slot], *, indent: str = "    ") -> str:
    """Render nested link items as an indented bullet list.

    Args:
        items: Top-level slots as returned by ``flatten_terms``.
        indent: Indentation added per nesting level.

    Returns:
        Markdown string with one ``- [title](url)`` line per item, or an
        empty string when there are no items.
    """
    out = io.StringIO()
    for depth, item in iter_items(items):
        out.write(f"{indent * depth}- [{_escape_label(item.title)}]({_escape_url(item.url)})\n")
    return out.getvalue()
