"""Documentation fetcher for llms.txt listings and individual pages.

Architecture:
- Transport: httpx AsyncClient with a fixed User-Agent and timeout
- Discovery: Markdown links in llms.txt, filtered through the URL allow-list
- Cleaning: lxml for HTML pages (scripts/styles dropped, text per line);
  Markdown and plain text are kept verbatim
"""

from __future__ import annotations

import logging
import re

import httpx
from lxml import etree  # type: ignore[import-untyped]
import lxml.html  # type: ignore[import-untyped]

from ..config import Settings
from .models import DocPage
from .url_validator import URLValidationError, UrlValidator


logger = logging.getLogger(__name__)

MD_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
HTML_MARKERS = ("<html", "<head", "<body")
DROPPED_ELEMENTS = "//script|//style|//noscript"


def looks_like_html(raw: str) -> bool:
    lower = raw.lower()
    return any(marker in lower for marker in HTML_MARKERS)


def html_to_text(tree: lxml.html.HtmlElement) -> str:
    """Flatten an HTML tree to one trimmed, non-empty line per source line."""
    for element in tree.xpath(DROPPED_ELEMENTS):
        element.drop_tree()
    text = " ".join(tree.itertext())
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def extract_html_title(tree: lxml.html.HtmlElement) -> str | None:
    """Return <title>, then og:title, then the first <h1> text."""
    title = tree.findtext(".//title")
    if title and title.strip():
        return title.strip()

    og_titles = tree.xpath('//meta[@property="og:title"]/@content')
    if og_titles and og_titles[0].strip():
        return og_titles[0].strip()

    headings = tree.xpath("//h1")
    if headings:
        heading = " ".join("".join(headings[0].itertext()).split())
        if heading:
            return heading
    return None


def _last_segment(url: str) -> str:
    return url.split("/")[-1] or url


class DocFetcher:
    """Async fetcher bound to one httpx client.

    Use as an async context manager; an injected client is left open on exit
    so callers (and tests) keep ownership of it.
    """

    def __init__(
        self,
        settings: Settings,
        validator: UrlValidator,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.validator = validator
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> DocFetcher:
        if self._client is None:
            self._client = self._create_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _create_client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self.settings.http_timeout)
        headers = {"User-Agent": self.settings.user_agent}
        return httpx.AsyncClient(timeout=timeout, follow_redirects=True, headers=headers)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch_text(self, url: str) -> str:
        """GET ``url`` and return the body; raises httpx.HTTPError on failure."""
        if self._client is None:
            self._client = self._create_client()
            self._owns_client = True
        response = await self._client.get(url)
        response.raise_for_status()
        return response.text

    async def parse_llms_txt(self, url: str) -> list[tuple[str, str]]:
        """Return ``(title, url)`` pairs for every allowed link in an llms.txt file."""
        body = await self.fetch_text(url)
        links: list[tuple[str, str]] = []
        for match in MD_LINK_PATTERN.finditer(body):
            target = match.group(2).strip()
            title = match.group(1).strip() or target
            try:
                links.append((title, self.validator.validate(target)))
            except URLValidationError as exc:
                logger.debug("Skipping llms.txt link: %s", exc)
        logger.info("Parsed %d links from %s", len(links), url)
        return links

    async def fetch_and_clean(self, url: str) -> DocPage:
        """Fetch a page and return its cleaned content.

        Raises:
            URLValidationError: if the URL is outside the allow-list
            httpx.HTTPError: on network or HTTP status failures
        """
        validated = self.validator.validate(url)
        raw = await self.fetch_text(validated)

        if looks_like_html(raw):
            try:
                tree = lxml.html.document_fromstring(raw)
            except (etree.ParserError, ValueError) as exc:
                logger.debug("Falling back to raw text for %s: %s", validated, exc)
            else:
                title = extract_html_title(tree) or _last_segment(validated)
                return DocPage(url=validated, title=title, content=html_to_text(tree))

        return DocPage(url=validated, title=_last_segment(validated), content=raw)
