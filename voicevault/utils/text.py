"""Sentence splitting and keyword matching helpers.

All matching is case-insensitive substring matching; nothing here tokenizes
words, so "care" also matches "careful".
"""

import re
from typing import Iterable, List, Optional

_SENTENCE_END = re.compile(r"[.!?]+")


def split_sentences(text: Optional[str]) -> List[str]:
    """Split text on runs of sentence-terminating punctuation.

    Returns trimmed, non-empty sentences in their original order.
    """
    if not text:
        return []
    return [s.strip() for s in _SENTENCE_END.split(text) if s.strip()]


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in text (case-insensitive substring)."""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def first_match(text: str, keywords: Iterable[str]) -> Optional[str]:
    """Return the first keyword (in iteration order) found in text, else None."""
    lowered = text.lower()
    for keyword in keywords:
        if keyword.lower() in lowered:
            return keyword
    return None


def count_present(text: str, keywords: Iterable[str]) -> int:
    """Number of distinct keywords present in text."""
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lowered)
