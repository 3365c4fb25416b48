from __future__ import annotations

"""Leaderboard ranking over the result log."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..drills.modes import QuestionMode
from ..results.schema import TestResult

# Every result is scored against a 20-question test, Mixed ones included,
# unless accuracy_by_mode is requested.
FIXED_ACCURACY_DENOMINATOR = 20


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    result: TestResult
    accuracy: float


def accuracy_for(result: TestResult, *, by_mode: bool = False) -> float:
    denom = result.mode.question_count if by_mode else FIXED_ACCURACY_DENOMINATOR
    return result.total_score / denom * 100


def rank(
    results: Sequence[TestResult],
    mode_filter: Optional[QuestionMode] = None,
    *,
    accuracy_by_mode: bool = False,
) -> List[LeaderboardEntry]:
    """Rank results by total score, highest first.

    Ties keep log order and share a rank; the next lower score is ranked by
    its 1-based position. Ranks are assigned over the whole log, then
    ``mode_filter`` hides entries of other session modes.
    """
    ordered = sorted(results, key=lambda r: r.total_score, reverse=True)
    entries: List[LeaderboardEntry] = []
    prev_score: Optional[int] = None
    current_rank = 0
    for pos, r in enumerate(ordered, start=1):
        if r.total_score != prev_score:
            current_rank = pos
            prev_score = r.total_score
        entries.append(LeaderboardEntry(current_rank, r, accuracy_for(r, by_mode=accuracy_by_mode)))
    if mode_filter is None:
        return entries
    return [e for e in entries if e.result.mode is mode_filter]
