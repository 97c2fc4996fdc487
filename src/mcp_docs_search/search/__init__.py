"""
Search indexing and ranking package.

This package provides the in-memory retrieval engine:
- stopwords: Default stopword and preserve-term vocabulary
- analyzers: Tokenizer (hyphen/camel-case splitting, Porter stemming) and bigrams
- fields: Markdown field extraction and the indexing haystack
- stats: BM25 IDF and term-weight helpers
- bm25_engine: Field-weighted BM25 scorer
- search_index: Inverted index and ranker
- snippet: Result previews
"""

from mcp_docs_search.search.analyzers import DocsAnalyzer, generate_bigrams, tokenize
from mcp_docs_search.search.bm25_engine import BM25Params, BM25Scorer
from mcp_docs_search.search.models import Document, SearchHit
from mcp_docs_search.search.search_index import SearchIndex
from mcp_docs_search.search.stopwords import Vocabulary


__all__ = [
    "BM25Params",
    "BM25Scorer",
    "DocsAnalyzer",
    "Document",
    "SearchHit",
    "SearchIndex",
    "Vocabulary",
    "generate_bigrams",
    "tokenize",
]
