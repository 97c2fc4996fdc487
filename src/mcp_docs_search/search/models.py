"""Search data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """An indexed documentation page.

    ``index_title`` is the search-oriented title (display title plus variants)
    and may differ from ``display_title``. ``content`` is raw markup and may be
    empty for pages that have not been fetched yet.
    """

    uri: str
    display_title: str
    content: str = ""
    index_title: str = ""


@dataclass(frozen=True)
class SearchHit:
    """A scored document returned by the ranker."""

    score: float
    document: Document
