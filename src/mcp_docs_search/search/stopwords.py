"""Default vocabulary for the documentation analyzer.

Stopwords are dropped before anything else happens to a token. Preserve terms
are protocol and tooling acronyms that must reach the index unstemmed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


DEFAULT_STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "about",
        "above",
        "after",
        "again",
        "against",
        "all",
        "am",
        "an",
        "and",
        "any",
        "are",
        "as",
        "at",
        "be",
        "because",
        "been",
        "before",
        "being",
        "below",
        "between",
        "both",
        "but",
        "by",
        "can",
        "could",
        "did",
        "do",
        "does",
        "doing",
        "down",
        "during",
        "each",
        "few",
        "for",
        "from",
        "further",
        "had",
        "has",
        "have",
        "having",
        "he",
        "her",
        "here",
        "hers",
        "herself",
        "him",
        "himself",
        "his",
        "how",
        "i",
        "if",
        "in",
        "into",
        "is",
        "it",
        "its",
        "itself",
        "just",
        "me",
        "more",
        "most",
        "my",
        "myself",
        "no",
        "nor",
        "not",
        "now",
        "of",
        "off",
        "on",
        "once",
        "only",
        "or",
        "other",
        "our",
        "ours",
        "ourselves",
        "out",
        "over",
        "own",
        "same",
        "she",
        "should",
        "so",
        "some",
        "such",
        "than",
        "that",
        "the",
        "their",
        "theirs",
        "them",
        "themselves",
        "then",
        "there",
        "these",
        "they",
        "this",
        "those",
        "through",
        "to",
        "too",
        "under",
        "until",
        "up",
        "very",
        "was",
        "we",
        "were",
        "what",
        "when",
        "where",
        "which",
        "while",
        "who",
        "whom",
        "why",
        "will",
        "with",
        "would",
        "you",
        "your",
        "yours",
        "yourself",
        "yourselves",
        # Filler words common in prose docs
        "also",
        "come",
        "even",
        "get",
        "got",
        "go",
        "going",
        "gone",
        "know",
        "like",
        "make",
        "made",
        "may",
        "might",
        "much",
        "must",
        "need",
        "new",
        "one",
        "see",
        "take",
        "thing",
        "think",
        "use",
        "used",
        "using",
        "want",
        "way",
        "well",
        "work",
        "year",
        "first",
        "last",
        "long",
        "great",
        "little",
        "old",
        "right",
        "big",
        "high",
        "small",
        "large",
        "next",
        "early",
        "young",
        "important",
        "public",
        "bad",
        "good",
    }
)

DEFAULT_PRESERVE_TERMS: frozenset[str] = frozenset(
    {
        "mcp",
        "json",
        "rpc",
        "sse",
        "stdio",
        "http",
        "https",
        "uri",
        "url",
        "api",
        "sdk",
        "cli",
        "llm",
        "ai",
        "ml",
        "aws",
        "pydantic",
        "zod",
        "typescript",
        "ts",
    }
)


@dataclass(frozen=True)
class Vocabulary:
    """Stopword and preserve-term sets consumed by the tokenizer."""

    stopwords: frozenset[str] = DEFAULT_STOPWORDS
    preserve_terms: frozenset[str] = DEFAULT_PRESERVE_TERMS

    @classmethod
    def from_words(
        cls,
        stopwords: Iterable[str] | None = None,
        preserve_terms: Iterable[str] | None = None,
    ) -> Vocabulary:
        """Build a vocabulary from arbitrary iterables, lower-casing every entry."""
        stop = DEFAULT_STOPWORDS if stopwords is None else frozenset(w.lower() for w in stopwords)
        keep = DEFAULT_PRESERVE_TERMS if preserve_terms is None else frozenset(w.lower() for w in preserve_terms)
        return cls(stopwords=stop, preserve_terms=keep)

    def with_preserve_terms(self, extra: Iterable[str]) -> Vocabulary:
        additions = {term.strip().lower() for term in extra if term.strip()}
        if not additions:
            return self
        return Vocabulary(stopwords=self.stopwords, preserve_terms=self.preserve_terms | additions)


DEFAULT_VOCABULARY = Vocabulary()
