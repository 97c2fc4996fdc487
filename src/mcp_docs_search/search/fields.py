"""Markdown-aware field extraction.

Splits a document into the text fields that carry extra ranking weight
(headings, link labels, code) and builds the merged haystack that feeds the
inverted index.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from mcp_docs_search.search.models import Document


MD_HEADING_PATTERN = re.compile(r"^#{1,6}\s+(.+)$", re.MULTILINE)
MD_CODE_BLOCK_PATTERN = re.compile(r"```\w*\n([\s\S]*?)```")
MD_INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
MD_LINK_TEXT_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]+\)")


def extract_matches(text: str, pattern: re.Pattern[str]) -> str:
    """Return the first capture group of every match, space-joined."""
    if not text:
        return ""
    return " ".join(match.group(1) or match.group(0) for match in pattern.finditer(text))


def extract_headings(text: str) -> str:
    return extract_matches(text, MD_HEADING_PATTERN)


def extract_code_blocks(text: str) -> str:
    return extract_matches(text, MD_CODE_BLOCK_PATTERN)


def extract_inline_code(text: str) -> str:
    return extract_matches(text, MD_INLINE_CODE_PATTERN)


def extract_link_text(text: str) -> str:
    return extract_matches(text, MD_LINK_TEXT_PATTERN)


@dataclass(frozen=True)
class DocumentFields:
    """Lower-cased text fields of a single document."""

    title: str
    headings: str
    links: str
    code_blocks: str
    inline_code: str
    content: str

    def haystack(self) -> str:
        """Join non-empty fields in ranking order with single spaces."""
        parts = (self.title, self.headings, self.links, self.code_blocks, self.inline_code, self.content)
        return " ".join(part for part in parts if part)


def extract_fields(document: Document) -> DocumentFields:
    content = document.content or ""
    return DocumentFields(
        title=(document.index_title or "").lower(),
        headings=extract_headings(content).lower(),
        links=extract_link_text(content).lower(),
        code_blocks=extract_code_blocks(content).lower(),
        inline_code=extract_inline_code(content).lower(),
        content=content.lower(),
    )


def build_haystack(document: Document) -> str:
    return extract_fields(document).haystack()
