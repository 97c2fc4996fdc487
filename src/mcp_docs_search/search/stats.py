"""Statistical helpers for BM25 scoring.

The functions here are independent of the index so they can be unit tested on
their own. Both carry the numeric guards the scorer relies on: the IDF log
argument is always above 1 and the TF denominator is always positive.
"""

from __future__ import annotations

import math


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return the +1 smoothed BM25 inverse document frequency.

    ``ln((N - df + 0.5) / (df + 0.5) + 1)`` stays non-negative for every df in
    ``[0, N]``, unlike the classic unsmoothed form.
    """

    n = max(total_docs, 1)
    df = max(doc_freq, 0)
    return math.log((n - df + 0.5) / (df + 0.5) + 1.0)


def bm25(tf: float, doc_length: float, avg_doc_length: float, *, k1: float = 1.5, b: float = 0.75) -> float:
    """Compute the length-normalized BM25 term weight without IDF."""

    if tf <= 0:
        return 0.0
    avg = max(avg_doc_length, 1.0)
    denominator = tf + k1 * (1 - b + b * (doc_length / avg))
    return (tf * (k1 + 1)) / denominator


def count_occurrences(text: str, token: str) -> int:
    """Count non-overlapping, case-insensitive occurrences of ``token`` in ``text``."""

    if not text or not token:
        return 0
    return text.lower().count(token.lower())
