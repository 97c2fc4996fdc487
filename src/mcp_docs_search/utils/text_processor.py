"""Title normalization helpers.

Display titles come from the curated llms.txt listing when available; the
index title adds search-friendly variants so a page is also found by its URL
slug or by a spelled-out form of names like ``Agent2Agent``.
"""

from __future__ import annotations

from collections.abc import Mapping
import re


WHITESPACE_PATTERN = re.compile(r"\s+")
DIGIT_TWO_PATTERN = re.compile(r"(\w)2(\w)", re.IGNORECASE)
GENERIC_TITLES = frozenset({"index", "index.md"})


def normalize(text: str) -> str:
    """Collapse runs of whitespace and trim."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def title_from_url(url: str) -> str:
    """Derive a human-readable title from the last path segment of ``url``."""
    path = url.split("://", 1)[1] if "://" in url else url
    parts = [part for part in path.split("/") if part]
    if parts and parts[-1].startswith("index."):
        parts.pop()

    slug = parts[-1] if parts else path
    title = re.sub(r"[-_]", " ", slug).strip()
    words = [word[:1].upper() + word[1:] for word in title.split(" ")]
    return " ".join(words) or "Documentation"


def format_display_title(url: str, extracted: str | None, url_titles: Mapping[str, str]) -> str:
    """Pick the best display title for a page.

    Curated titles win, then the URL-derived title when the extracted one is
    missing or generic (``index``, ``*.md``), then the extracted title.
    """
    curated = url_titles.get(url)
    if curated:
        return normalize(curated)

    if not extracted:
        return title_from_url(url)

    title = extracted.strip()
    if not title or title.lower() in GENERIC_TITLES or title.endswith(".md"):
        return title_from_url(url)
    return normalize(title)


def index_title_variants(display_title: str, url: str) -> str:
    """Space-join distinct title variants used for title-boosted matching."""
    variants: list[str] = []
    seen: set[str] = set()
    for candidate in (display_title, DIGIT_TWO_PATTERN.sub(r"\1 to \2", display_title), title_from_url(url)):
        normalized = normalize(candidate)
        if normalized and normalized.lower() not in seen:
            seen.add(normalized.lower())
            variants.append(normalized)
    return " ".join(variants)
