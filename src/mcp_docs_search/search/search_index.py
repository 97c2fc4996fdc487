"""In-memory inverted index with BM25 ranking.

The index is append-only: documents get a stable position at insertion time
and are never edited or removed. Owners that need a different corpus build a
new instance and swap it in. There is no internal locking; a single writer
builds the index and readers query it afterwards.
"""

from __future__ import annotations

from collections import defaultdict
import logging

from mcp_docs_search.search.analyzers import DocsAnalyzer, generate_bigrams, get_default_analyzer
from mcp_docs_search.search.bm25_engine import DEFAULT_BM25_PARAMS, BM25Params, BM25Scorer, CorpusStats
from mcp_docs_search.search.fields import DocumentFields, build_haystack, extract_fields
from mcp_docs_search.search.models import Document, SearchHit


logger = logging.getLogger(__name__)

DEFAULT_RESULT_COUNT = 8


class SearchIndex:
    """Inverted index over documentation pages.

    Usage::

        index = SearchIndex().add(doc_a).add(doc_b)
        hits = index.search("stdio transport", k=5)
    """

    def __init__(self, analyzer: DocsAnalyzer | None = None, params: BM25Params = DEFAULT_BM25_PARAMS) -> None:
        self.analyzer = analyzer or get_default_analyzer()
        self.scorer = BM25Scorer(params)
        self._docs: list[Document] = []
        self._postings: dict[str, list[int]] = defaultdict(list)
        self._doc_freq: dict[str, int] = defaultdict(int)
        self._doc_lengths: list[int] = []
        self._total_length = 0
        self._avg_doc_length = 0.0

    def _terms(self, text: str) -> list[str]:
        unigrams = self.analyzer(text)
        return unigrams + generate_bigrams(unigrams)

    def add(self, document: Document) -> SearchIndex:
        """Index a document and return the index for chaining."""
        position = len(self._docs)
        self._docs.append(document)

        terms = self._terms(build_haystack(document))
        seen: set[str] = set()
        for term in terms:
            self._postings[term].append(position)
            if term not in seen:
                self._doc_freq[term] += 1
                seen.add(term)

        self._doc_lengths.append(len(terms))
        self._total_length += len(terms)
        self._avg_doc_length = self._total_length / len(self._doc_lengths)
        logger.debug("Indexed %s at position %d (%d terms)", document.uri, position, len(terms))
        return self

    def score(self, document: Document, token: str, position: int) -> float:
        """BM25 score of ``token`` for the document stored at ``position``."""
        return self.scorer.score(document, token, self._corpus_stats(token, position))

    def _corpus_stats(self, token: str, position: int) -> CorpusStats:
        return CorpusStats(
            total_docs=len(self._docs),
            doc_freq=self._doc_freq.get(token, 0),
            doc_length=self._doc_lengths[position] if 0 <= position < len(self._doc_lengths) else 0,
            avg_doc_length=self._avg_doc_length,
        )

    def search(self, query: str, k: int = DEFAULT_RESULT_COUNT) -> list[SearchHit]:
        """Return at most ``k`` hits sorted by descending score.

        Ties keep insertion order. Empty queries, empty indexes and queries with
        no indexed terms all return an empty list.
        """
        if not self._docs or k <= 0 or not query:
            return []

        scores: dict[int, float] = {}
        fields_cache: dict[int, DocumentFields] = {}
        for term in self._terms(query):
            postings = self._postings.get(term)
            if not postings:
                continue
            for position in postings:
                document = self._docs[position]
                fields = fields_cache.get(position)
                if fields is None:
                    fields = fields_cache[position] = extract_fields(document)
                contribution = self.scorer.score(
                    document,
                    term,
                    self._corpus_stats(term, position),
                    fields=fields,
                )
                scores[position] = scores.get(position, 0.0) + contribution

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [SearchHit(score=score, document=self._docs[position]) for position, score in ranked[:k]]

    @property
    def size(self) -> int:
        return len(self._docs)

    def __len__(self) -> int:
        return len(self._docs)

    @property
    def documents(self) -> tuple[Document, ...]:
        return tuple(self._docs)

    @property
    def average_document_length(self) -> float:
        return self._avg_doc_length

    def document_length(self, position: int) -> int:
        return self._doc_lengths[position]

    def document_frequency(self, token: str) -> int:
        return self._doc_freq.get(token, 0)

    def postings(self, token: str) -> tuple[int, ...]:
        return tuple(self._postings.get(token, ()))

    @property
    def vocabulary_size(self) -> int:
        return len(self._postings)
