"""Heuristic ranking of scanned entries against the typed query.

Matching is case-insensitive against the entry base name, falling back to the
closest parent directory segment that contains the query. The relative order
of the tiers (exact directory > prefix > substring > parent segment) is what
matters; the magnitudes are tuning values.
"""

from __future__ import annotations

import os
from typing import NamedTuple

from .scanner import ROOT_PARENT, Entry

RESULT_LIMIT = 10

EXACT_DIR_SCORE = 10_000
PREFIX_SCORE = 1_000
PREFIX_DIR_BONUS = 500
SUBSTRING_SCORE = 500
SUBSTRING_POSITION_PENALTY = 10
SUBSTRING_DIR_BONUS = 200
PARENT_SEGMENT_SCORE = 100
PARENT_SEGMENT_DISTANCE_PENALTY = 20


class ScoredEntry(NamedTuple):
    entry: Entry
    score: int


def score_entry(entry: Entry, query_folded: str) -> int:
    """Score one entry against an already case-folded, non-empty query."""
    name_folded = entry.name.lower()

    if entry.is_dir and name_folded == query_folded:
        return EXACT_DIR_SCORE

    if name_folded.startswith(query_folded):
        return PREFIX_SCORE + (PREFIX_DIR_BONUS if entry.is_dir else 0)

    idx = name_folded.find(query_folded)
    if idx >= 0:
        score = SUBSTRING_SCORE - idx * SUBSTRING_POSITION_PENALTY
        return score + (SUBSTRING_DIR_BONUS if entry.is_dir else 0)

    if entry.parent_path == ROOT_PARENT:
        return 0
    segments = entry.parent_path.split(os.sep)
    for distance, segment in enumerate(reversed(segments)):
        if query_folded in segment.lower():
            return PARENT_SEGMENT_SCORE - distance * PARENT_SEGMENT_DISTANCE_PENALTY
    return 0


def _order_key(item: ScoredEntry) -> tuple[int, bool, str]:
    return (-item.score, not item.entry.is_dir, item.entry.name)


def rank_entries(entries: list[Entry], query: str, limit: int = RESULT_LIMIT) -> list[Entry]:
    """Return the best ``limit`` entries for ``query``.

    An empty query is the browse view: the first entries in scan order,
    unscored. Otherwise only entries with a positive score are kept, ordered
    by score, then directories first, then case-sensitive name.
    """
    if not query:
        return list(entries[:limit])

    query_folded = query.lower()
    scored: list[ScoredEntry] = []
    for entry in entries:
        score = score_entry(entry, query_folded)
        if score > 0:
            scored.append(ScoredEntry(entry, score))

    scored.sort(key=_order_key)
    return [item.entry for item in scored[:limit]]


__all__ = [
    "RESULT_LIMIT",
    "ScoredEntry",
    "score_entry",
    "rank_entries",
]
