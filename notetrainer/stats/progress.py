from __future__ import annotations

"""Daily and per-category progress rollups.

Each completed test is folded into the rollup of the local calendar day it
finished on, so the progress view never has to re-scan the result log for
daily figures. Averages are kept as integers and recomputed from the weighted
sum with floor division on every completion:

    new_average = (average * count + score) // (count + 1)

The per-category average of a day uses the number of distinct categories
already recorded that day as its weight, not how often that category was
played. ``per_category_counter=True`` keeps a real per-category counter
instead.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence

from ..app.explain import trace, warn
from ..results.schema import DailyProgress, TestResult, date_key, decode_daily, encode_daily
from ..storage.store import KeyValueStore

DAILY_KEY_PREFIX = "daily_progress_"
TREND_DAYS = 7


def daily_key(day: date) -> str:
    return f"{DAILY_KEY_PREFIX}{date_key(day)}"


@dataclass(frozen=True)
class CategoryProgress:
    category_key: str
    total_tests: int
    average_score: int
    best_score: int
    last_7_days_scores: List[int] = field(default_factory=list)


class ProgressAggregator:
    def __init__(
        self,
        kv: KeyValueStore,
        *,
        per_category_counter: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.kv = kv
        self.per_category_counter = per_category_counter
        self.clock = clock

    def load_day(self, day: date) -> Optional[DailyProgress]:
        raw = self.kv.get_string(daily_key(day))
        if raw is None:
            return None
        try:
            return decode_daily(raw)
        except ValueError as e:
            warn(f"Error parsing progress for {date_key(day)}: {e}")
            return None

    def record_completion(self, result: TestResult) -> DailyProgress:
        """Fold one finished test into today's rollup and persist it."""
        now = self.clock()
        current = self.load_day(now.date()) or DailyProgress(
            date=now,
            tests_completed=0,
            average_score=0,
            best_score=0,
            category_scores={},
        )

        count = current.tests_completed
        new_count = count + 1
        new_average = (current.average_score * count + result.total_score) // new_count
        new_best = max(current.best_score, result.total_score)

        key = result.mode.progress_key
        scores = dict(current.category_scores)
        counts = dict(current.category_counts)
        cat_score = scores.get(key, 0)
        if self.per_category_counter:
            weight = counts.get(key, 0)
            counts[key] = weight + 1
        else:
            weight = len(scores)
        scores[key] = (cat_score * weight + result.total_score) // (weight + 1)

        updated = DailyProgress(
            date=now,
            tests_completed=new_count,
            average_score=new_average,
            best_score=new_best,
            category_scores=scores,
            category_counts=counts,
        )
        self.kv.set_string(daily_key(now.date()), encode_daily(updated))
        trace(
            "daily_progress",
            {"day": updated.date_key, "tests": new_count, "avg": new_average, "best": new_best, key: scores[key]},
        )
        return updated

    def get_last_n_days(self, n: int = TREND_DAYS) -> List[DailyProgress]:
        """Rollups of the last ``n`` days (today included), oldest first.

        Days without completions are simply missing from the list.
        """
        today = self.clock().date()
        found: List[DailyProgress] = []
        for i in range(max(0, int(n))):
            p = self.load_day(today - timedelta(days=i))
            if p is not None:
                found.append(p)
        found.reverse()
        return found

    def get_category_progress(self, all_results: Sequence[TestResult]) -> List[CategoryProgress]:
        """Per-category summary of the log plus the category's recent daily trend."""
        grouped: Dict[str, List[int]] = {}
        for r in all_results:
            grouped.setdefault(r.mode.progress_key, []).append(r.total_score)
        if not grouped:
            return []

        recent = self.get_last_n_days(TREND_DAYS)
        out: List[CategoryProgress] = []
        for key, scores in grouped.items():
            trend = [d.category_scores.get(key, 0) for d in recent]
            out.append(
                CategoryProgress(
                    category_key=key,
                    total_tests=len(scores),
                    average_score=sum(scores) // len(scores),
                    best_score=max(scores),
                    last_7_days_scores=[s for s in trend if s > 0],
                )
            )
        return out

    def current_streak(self, max_days: int = 365) -> int:
        """Consecutive days ending today that have at least one completion."""
        today = self.clock().date()
        streak = 0
        for i in range(int(max_days)):
            if self.kv.get_string(daily_key(today - timedelta(days=i))) is None:
                break
            streak += 1
        return streak
