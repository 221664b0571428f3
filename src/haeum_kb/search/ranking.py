"""TF-IDF ranking and highlight selection."""

import math
from collections.abc import Iterable, Sequence

from haeum_kb.search.models import Hit, Index, Section
from haeum_kb.search.tokenizer import term_frequencies, tokenize

DEFAULT_LIMIT = 5

# Soft-match multipliers, applied per distinct query token
TITLE_BOOST = 1.2
FILE_BOOST = 1.1

MAX_HIGHLIGHTS = 4


def score_section(section: Section, qtf: dict[str, int], idf: dict[str, float]) -> float:
    """TF-IDF score of a section, boosted by title and file name matches."""
    score = 0.0
    for token, count in qtf.items():
        tf = section.tf.get(token, 0)
        if not tf or token not in idf:
            continue
        score += tf * idf[token] * math.sqrt(count)

    for token in qtf:
        if token in section.title:
            score *= TITLE_BOOST
        if token in section.file:
            score *= FILE_BOOST

    return score


def select_highlights(sentences: Iterable[str], query_tokens: Iterable[str]) -> list[str]:
    """
    Pick the sentences that best preview a match.

    A sentence scores one point per distinct query token found inside any of
    its own tokens, so "운영" matches "운영합니다". Ties go to the longer
    sentence.
    """
    distinct = list(dict.fromkeys(query_tokens))
    scored: list[tuple[int, str]] = []
    for sentence in sentences:
        sentence_tokens = tokenize(sentence)
        hits = sum(
            1 for q in distinct if any(q in token for token in sentence_tokens)
        )
        if hits > 0:
            scored.append((hits, sentence))

    scored.sort(key=lambda item: (item[0], len(item[1])), reverse=True)
    return [sentence for _, sentence in scored[:MAX_HIGHLIGHTS]]


def search(query: str, index: Index, k: int = DEFAULT_LIMIT) -> list[Hit]:
    """
    Rank index sections against a free-text query.

    Returns at most k hits with a strictly positive score, best first. A
    query with no usable tokens, or a k below one, returns an empty list.
    """
    if k <= 0:
        return []

    query_tokens = tokenize(query)
    if not query_tokens:
        return []

    qtf = dict(term_frequencies(query_tokens))

    hits: list[Hit] = []
    for section in index.sections:
        score = score_section(section, qtf, index.idf)
        if score <= 0:
            continue
        hits.append(
            Hit(
                section=section,
                score=score,
                highlights=select_highlights(section.sentences, qtf),
            )
        )

    hits.sort(key=lambda hit: hit.score, reverse=True)
    return hits[:k]


def top_files(hits: Sequence[Hit]) -> list[str]:
    """Distinct source files cited by hits, in rank order."""
    return list(dict.fromkeys(hit.section.file for hit in hits))
