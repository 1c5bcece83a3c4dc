"""Render nested link items as an HTML item list."""

from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from taxonomy_links.models.term import Group, Slot

_TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"


class ItemListRenderer:
    """Render nested link items with the ``item_list.jinja`` template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or _TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.tests["group"] = lambda slot: isinstance(slot, Group)
        self.template = self.env.get_template("item_list.jinja")

    def render(self, items: Iterable[Slot], *, css_class: str = "taxonomy-indented-links") -> str:
        """Return nested ``<ul>`` markup, or an empty string for no items."""
        slots = tuple(items)
        if not slots:
            return ""
        return self.template.render(items=slots, css_class=css_class)


def render_items_as_html(items: Iterable[Slot], *, css_class: str = "taxonomy-indented-links") -> str:
    return ItemListRenderer().render(items, css_class=css_class)
