"""Field-weighted BM25 scoring for documentation pages."""

from __future__ import annotations

from dataclasses import dataclass

from mcp_docs_search.search.fields import DocumentFields, extract_fields
from mcp_docs_search.search.models import Document
from mcp_docs_search.search.stats import bm25, calculate_idf, count_occurrences


@dataclass(frozen=True)
class BM25Params:
    """Tuning constants for the scorer.

    Title boost depends on how much body text a page has: pages without
    content (only a curated title) lean on the title entirely.
    """

    k1: float = 1.5
    b: float = 0.75
    title_boost_empty: float = 8.0
    title_boost_short: float = 5.0
    title_boost_long: float = 3.0
    short_page_threshold: int = 800
    heading_weight: float = 4.0
    code_block_weight: float = 2.0
    link_weight: float = 2.0

    def title_boost(self, content_length: int) -> float:
        if content_length == 0:
            return self.title_boost_empty
        if content_length < self.short_page_threshold:
            return self.title_boost_short
        return self.title_boost_long


DEFAULT_BM25_PARAMS = BM25Params()


@dataclass(frozen=True)
class CorpusStats:
    """Snapshot of the corpus-level numbers a single score needs."""

    total_docs: int
    doc_freq: int
    doc_length: int
    avg_doc_length: float


class BM25Scorer:
    """Score a (document, token) pair with field-weighted term frequency."""

    def __init__(self, params: BM25Params = DEFAULT_BM25_PARAMS) -> None:
        self.params = params

    def weighted_term_frequency(self, fields: DocumentFields, token: str, content_length: int) -> float:
        params = self.params
        # Inline code is part of the haystack but carries no extra weight here.
        return (
            count_occurrences(fields.content, token)
            + count_occurrences(fields.title, token) * params.title_boost(content_length)
            + count_occurrences(fields.headings, token) * params.heading_weight
            + count_occurrences(fields.code_blocks, token) * params.code_block_weight
            + count_occurrences(fields.links, token) * params.link_weight
        )

    def score(
        self,
        document: Document,
        token: str,
        stats: CorpusStats,
        *,
        fields: DocumentFields | None = None,
    ) -> float:
        if fields is None:
            fields = extract_fields(document)
        weighted_tf = self.weighted_term_frequency(fields, token, len(document.content or ""))
        idf = calculate_idf(stats.doc_freq, stats.total_docs)
        doc_length = stats.doc_length or 1
        return idf * bm25(weighted_tf, doc_length, stats.avg_doc_length, k1=self.params.k1, b=self.params.b)
