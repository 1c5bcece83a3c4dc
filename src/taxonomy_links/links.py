"""Build link items for taxonomy terms."""

from taxonomy_links.config import TERM_URL_TEMPLATE
from taxonomy_links.models.term import LinkItem, TermRecord


class TermLinkBuilder:
    """Build a link item pointing at a term's canonical page."""

    def __init__(self, url_template: str = TERM_URL_TEMPLATE) -> None:
        self.url_template = url_template

    def term_url(self, record: TermRecord) -> str:
        return self.url_template.format(tid=record.tid, vid=record.vid)

    def __call__(self, record: TermRecord) -> LinkItem:
        return LinkItem(title=record.name, url=self.term_url(record))


build_term_item = TermLinkBuilder()
