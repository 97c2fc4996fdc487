"""Snippet extraction for search result previews.

Picks the first prose paragraph of a page, skipping the title line, headings,
list items and fenced code, so results read like a short summary.
"""

from __future__ import annotations

import re


WHITESPACE_PATTERN = re.compile(r"\s+")
CODE_FENCE_PATTERN = re.compile(r"```[\s\S]*?```")
NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9 ]+")
NUMBERED_ITEM_PATTERN = re.compile(r"^\d+\.")

ELLIPSIS = "…"
MIN_PARAGRAPH_CHARS = 120


def _comparable(text: str) -> str:
    lowered = NON_ALNUM_PATTERN.sub(" ", text.lower())
    return WHITESPACE_PATTERN.sub(" ", lowered).strip()


def _is_structural_line(line: str) -> bool:
    stripped = line.lstrip()
    return stripped.startswith(("#", "-", "*")) or bool(NUMBERED_ITEM_PATTERN.match(stripped))


def make_snippet(content: str | None, display_title: str, max_chars: int = 300) -> str:
    """Return a short plain-text preview of ``content``.

    Args:
        content: Page markup, or None when the page was never fetched.
        display_title: Fallback text when no paragraph can be found.
        max_chars: Hard cap on snippet length, ellipsis included.
    """
    if not content:
        return display_title

    text = CODE_FENCE_PATTERN.sub("", content.strip())
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    if lines:
        first = _comparable(lines[0])
        title = _comparable(display_title)
        if lines[0].startswith("#") or first == title or first.startswith(title):
            lines.pop(0)

    paragraph: list[str] = []
    for line in lines:
        if _is_structural_line(line):
            if paragraph:
                break
            continue
        paragraph.append(line)
        if len(" ".join(paragraph)) >= MIN_PARAGRAPH_CHARS or line.endswith("."):
            break

    snippet = " ".join(paragraph) if paragraph else display_title
    snippet = WHITESPACE_PATTERN.sub(" ", snippet).strip()

    if len(snippet) > max_chars:
        snippet = snippet[: max_chars - 1].rstrip() + ELLIPSIS
    return snippet
