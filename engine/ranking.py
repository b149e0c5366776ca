"""
Field-weighted substring ranking over the in-memory course corpus.

Each record is scored independently against the lower-cased, trimmed query:

    title starts with query       +10
    title contains query          +5   (only when not a prefix)
    category contains query       +3
    instructor contains query     +3
    description contains query    +1

Contributions add up across fields. Records scoring 0 are dropped, the rest
are sorted by score (ties keep corpus order) and capped at MAX_RESULTS.
Scores never leave this module.

Public API:
    score_record(record, term)        → int
    rank(query, corpus, limit)        → list[Record]
    RankingEngine(corpus).search(q)   → list[Record]
"""

from collections.abc import Mapping, Sequence

from engine.config import MAX_RESULTS
from engine.corpus import CorpusError, Record

TITLE_PREFIX_SCORE = 10
TITLE_SCORE        = 5
CATEGORY_SCORE     = 3
INSTRUCTOR_SCORE   = 3
DESCRIPTION_SCORE  = 1


def _lower(value: str | None) -> str:
    return value.lower() if value else ""


def score_record(record: Record, term: str) -> int:
    """Score one record against an already lower-cased, trimmed term."""
    score = 0

    title = _lower(record.title)
    if term in title:
        score += TITLE_PREFIX_SCORE if title.startswith(term) else TITLE_SCORE

    if term in _lower(record.category):
        score += CATEGORY_SCORE

    if term in _lower(record.instructor):
        score += INSTRUCTOR_SCORE

    if term in _lower(record.description):
        score += DESCRIPTION_SCORE

    return score


def _check_corpus(corpus: Sequence[Record]) -> None:
    if isinstance(corpus, (str, bytes, Mapping)) or not isinstance(corpus, Sequence):
        raise CorpusError(f"corpus must be a sequence of records, got {type(corpus).__name__}")
    for pos, record in enumerate(corpus):
        if not isinstance(record, Record):
            raise CorpusError(f"corpus entry {pos} is {type(record).__name__}, not a Record")


def rank(query: str, corpus: Sequence[Record], limit: int = MAX_RESULTS) -> list[Record]:
    """
    Return the best-matching records for `query`, highest score first.

    An empty (after trimming) query returns [] without scoring anything.
    Raises CorpusError if `corpus` is not a sequence of Records.
    """
    term = query.strip().lower()
    if not term:
        return []

    _check_corpus(corpus)

    scored: list[tuple[int, Record]] = []
    for record in corpus:
        score = score_record(record, term)
        if score > 0:
            scored.append((score, record))

    # sort() is stable, so equal scores keep corpus order
    scored.sort(key=lambda pair: pair[0], reverse=True)

    return [record for _, record in scored[:limit]]


class RankingEngine:
    def __init__(self, corpus: Sequence[Record], limit: int = MAX_RESULTS):
        if isinstance(corpus, Sequence) and not isinstance(corpus, (str, bytes, Mapping)):
            corpus = tuple(corpus)
        self.corpus = corpus
        self.limit  = limit

    def __len__(self) -> int:
        return len(self.corpus)

    def search(self, query: str) -> list[Record]:
        return rank(query, self.corpus, self.limit)
