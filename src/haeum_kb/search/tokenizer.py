"""Tokenizer shared by indexing and querying."""

import re
from collections import Counter
from collections.abc import Iterable

from haeum_kb.search.text import unicode_normalize

# Runs of Hangul syllables, or runs of Latin letters and digits
TOKEN_PATTERN = re.compile(r"[가-힣]+|[A-Za-z0-9]+")
LATIN_PATTERN = re.compile(r"[A-Za-z]")

STOPWORDS = frozenset(
    {
        # Korean particles and conjunctions
        "은", "는", "이", "가", "을", "를", "에", "의", "과", "와", "도", "로",
        "으로", "그리고", "또는", "하지만", "또", "또한", "에서", "에게",
        # English function words
        "the", "a", "an", "and", "or", "to", "in", "of", "for", "on", "at",
        "is", "are", "was", "were", "be", "as", "by", "with",
    }
)


def tokenize(text: str) -> list[str]:
    """
    Split text into search tokens.

    Latin tokens are lower-cased, Hangul tokens are kept as-is, and
    stopwords are dropped. The same input always yields the same tokens.
    """
    tokens = TOKEN_PATTERN.findall(unicode_normalize(text))
    result = []
    for token in tokens:
        if LATIN_PATTERN.search(token):
            token = token.lower()
        if token not in STOPWORDS:
            result.append(token)
    return result


def term_frequencies(tokens: Iterable[str]) -> Counter[str]:
    """Count occurrences of each token."""
    return Counter(tokens)
