"""Process-wide documentation cache that owns the search index.

Startup only parses llms.txt and indexes curated titles with empty content so
the server is ready quickly; page bodies are fetched on demand and kept in an
in-memory URL cache. The index itself is never mutated after a build:
``rebuild()`` constructs a fresh instance (re-indexing any cached content) and
swaps the reference, so readers always see a consistent snapshot.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging

from ..config import Settings
from ..search.analyzers import DocsAnalyzer
from ..search.bm25_engine import BM25Params
from ..search.models import Document
from ..search.search_index import SearchIndex
from ..search.stopwords import DEFAULT_VOCABULARY
from ..utils.doc_fetcher import DocFetcher
from ..utils.models import DocPage
from ..utils.text_processor import format_display_title, index_title_variants, normalize
from ..utils.url_validator import UrlValidator


logger = logging.getLogger(__name__)


class DocsCache:
    """Owns the index, the URL to page cache and curated titles."""

    def __init__(
        self,
        settings: Settings,
        fetcher_factory: Callable[[], DocFetcher] | None = None,
    ) -> None:
        self.settings = settings
        self.validator = UrlValidator(settings.get_allowed_url_prefixes(), settings.default_base_url)
        self._fetcher_factory = fetcher_factory or self._default_fetcher
        self._fetcher: DocFetcher | None = None
        self._analyzer = DocsAnalyzer(DEFAULT_VOCABULARY.with_preserve_terms(settings.get_extra_preserve_terms()))
        self._params = BM25Params(k1=settings.bm25_k1, b=settings.bm25_b)
        self._ready_lock = asyncio.Lock()
        self.reset()

    def _default_fetcher(self) -> DocFetcher:
        return DocFetcher(self.settings, self.validator)

    @property
    def fetcher(self) -> DocFetcher:
        if self._fetcher is None:
            self._fetcher = self._fetcher_factory()
        return self._fetcher

    def new_index(self) -> SearchIndex:
        return SearchIndex(analyzer=self._analyzer, params=self._params)

    def reset(self) -> None:
        """Drop all cached state; the next ensure_ready() reloads llms.txt."""
        self.index: SearchIndex | None = None
        self.url_cache: dict[str, DocPage | None] = {}
        self.url_titles: dict[str, str] = {}
        self.links_loaded = False

    def _document_for(self, url: str, title: str, content: str = "") -> Document:
        display_title = normalize(title)
        return Document(
            uri=url,
            display_title=display_title,
            content=content,
            index_title=index_title_variants(display_title, url),
        )

    async def load_links_only(self) -> None:
        """Parse llms.txt and index curated titles without fetching page bodies."""
        links = await self.fetcher.parse_llms_txt(self.settings.llms_txt_url)
        index = self.index if self.index is not None else self.new_index()

        for title, url in links:
            self.url_titles[url] = title
            self.url_cache.setdefault(url, None)
            index.add(self._document_for(url, title))

        self.index = index
        self.links_loaded = True
        logger.info("Indexed %d documentation links from %s", index.size, self.settings.llms_txt_url)

    async def ensure_ready(self) -> None:
        """Load the link index once; concurrent callers wait for the same load."""
        if self.links_loaded:
            return
        async with self._ready_lock:
            if not self.links_loaded:
                await self.load_links_only()

    async def ensure_page(self, url: str) -> DocPage | None:
        """Return the cached page, fetching it on a miss.

        Relative URLs are keyed by their absolute form. Failures are cached as
        None and logged; they never propagate.
        """
        url = self.validator.absolutize(url)
        cached = self.url_cache.get(url)
        if cached is not None:
            return cached

        try:
            raw = await self.fetcher.fetch_and_clean(url)
        except Exception as exc:
            logger.warning("Failed to fetch %s: %s", url, exc, exc_info=True)
            self.url_cache[url] = None
            return None

        page = DocPage(
            url=raw.url,
            title=format_display_title(raw.url, raw.title, self.url_titles),
            content=raw.content,
        )
        self.url_cache[url] = page
        return page

    async def rebuild(self) -> SearchIndex:
        """Build a fresh index from curated links plus any cached page content."""
        await self.ensure_ready()
        index = self.new_index()
        for url, title in self.url_titles.items():
            page = self.url_cache.get(url)
            content = page.content if page is not None else ""
            index.add(self._document_for(url, title, content))
        self.index = index
        logger.info("Rebuilt search index with %d documents", index.size)
        return index

    async def close(self) -> None:
        if self._fetcher is not None:
            await self._fetcher.close()
            self._fetcher = None
