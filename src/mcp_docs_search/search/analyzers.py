"""Analyzer for documentation text.

Turns raw text into the normalized terms stored in the inverted index:
hyphenated words are split into parts, camel-case identifiers are split into
their words, stopwords are dropped, protocol acronyms are kept verbatim and
everything else goes through the Porter stemmer.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from functools import lru_cache
import re

from nltk.stem.porter import PorterStemmer

from mcp_docs_search.search.stopwords import DEFAULT_VOCABULARY, Vocabulary


BIGRAM_SEPARATOR = " "
STEM_CACHE_SIZE = 8192

_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_]+(?:-[A-Za-z0-9_]+)*")
_CAMELCASE_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")
_HAS_CAMELCASE = re.compile(r"[a-z][A-Z]")


class RegexTokenizer:
    """Yields raw word matches, keeping internal hyphens and underscores."""

    def __init__(self, pattern: re.Pattern[str] = _TOKEN_PATTERN) -> None:
        self.pattern = pattern

    def __call__(self, text: str) -> Iterator[str]:
        for match in self.pattern.finditer(text):
            yield match.group(0)


class DocsAnalyzer:
    """Stopword, preserve-term and stemming pipeline over raw word matches."""

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY, stem_cache_size: int = STEM_CACHE_SIZE) -> None:
        self.vocabulary = vocabulary
        self.tokenizer = RegexTokenizer()
        # MARTIN_EXTENSIONS is the reference Porter implementation (leaves
        # words of two letters or fewer untouched).
        stemmer = PorterStemmer(mode=PorterStemmer.MARTIN_EXTENSIONS)

        @lru_cache(maxsize=stem_cache_size)
        def cached_stem(word: str) -> str:
            return stemmer.stem(word, to_lowercase=False)

        self._cached_stem = cached_stem

    def stem(self, word: str) -> str:
        return self._cached_stem(word)

    def __call__(self, text: str) -> list[str]:
        if not text:
            return []
        tokens: list[str] = []
        for raw in self.tokenizer(text):
            for part in raw.split("-"):
                tokens.extend(self._analyze_part(part))
        return tokens

    def _analyze_part(self, part: str) -> list[str]:
        stopwords = self.vocabulary.stopwords
        preserve = self.vocabulary.preserve_terms
        lower = part.lower()

        if not lower or lower in stopwords:
            return []
        if lower in preserve:
            return [lower]

        if not _HAS_CAMELCASE.search(part):
            stemmed = self.stem(lower)
            return [] if stemmed in stopwords else [stemmed]

        emitted: list[str] = []
        for sub_part in _CAMELCASE_BOUNDARY.split(part):
            sub_lower = sub_part.lower()
            if not sub_lower or sub_lower in stopwords:
                continue
            if sub_lower in preserve:
                emitted.append(sub_lower)
                continue
            stemmed = self.stem(sub_lower)
            if stemmed not in stopwords:
                emitted.append(stemmed)

        # The whole identifier is indexed as well so "fastmcp" still matches
        # a query written without camel case.
        whole = self.stem(lower)
        if whole not in stopwords and whole not in emitted:
            emitted.append(whole)
        return emitted


def generate_bigrams(tokens: Sequence[str]) -> list[str]:
    """Join every adjacent pair of tokens into a single phrase term."""
    return [f"{left}{BIGRAM_SEPARATOR}{right}" for left, right in zip(tokens, tokens[1:])]


_default_analyzer: DocsAnalyzer | None = None


def get_default_analyzer() -> DocsAnalyzer:
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = DocsAnalyzer()
    return _default_analyzer


def tokenize(text: str) -> list[str]:
    """Tokenize text with the default vocabulary."""
    return get_default_analyzer()(text)
