from __future__ import annotations

"""Plain-text formatting of results, rankings and progress for the CLI."""

from typing import List, Sequence

from ..drills.modes import QuestionMode
from ..results.schema import DailyProgress, TestResult
from .leaderboard import LeaderboardEntry
from .progress import CategoryProgress

_CATEGORY_LABELS = {
    "audio": "Audio",
    "solfege": "Solfege",
    "key": "Key",
    "staff": "Staff",
    "mixed": "Mixed",
}


def category_label(key: str) -> str:
    return _CATEGORY_LABELS.get(key, key)


def format_summary(result: TestResult, question_count: int | None = None) -> str:
    """Return a human-readable summary of one finished test."""
    total = int(question_count or result.mode.question_count)
    accuracy = result.total_score / total * 100 if total else 0.0
    lines = [
        f"Player: {result.player_name}",
        f"Mode: {result.mode.label}",
        f"Score: {result.total_score}/{total} ({accuracy:.1f}%)",
    ]
    for cat, score in result.per_category.items():
        # single-mode tests only show the bucket they can fill
        if result.mode is QuestionMode.MIXED or score > 0:
            lines.append(f"{category_label(cat.value)}: {score}")
    return "\n".join(lines)


def format_leaderboard(entries: Sequence[LeaderboardEntry]) -> str:
    if not entries:
        return "No results yet."
    lines = []
    for e in entries:
        r = e.result
        lines.append(
            f"#{e.rank:<3} {r.player_name:<16} {r.total_score:>4}  {e.accuracy:5.1f}%  "
            f"{r.mode.label:<26} {r.timestamp.strftime('%Y-%m-%d %H:%M')}"
        )
    return "\n".join(lines)


def format_progress(days: Sequence[DailyProgress], categories: Sequence[CategoryProgress]) -> str:
    lines: List[str] = [f"Days practiced: {len(days)}"]
    for d in days:
        lines.append(f"{d.date_key}: tests={d.tests_completed} avg={d.average_score} best={d.best_score}")
    if categories:
        lines.append("")
        lines.append("By category:")
        for c in categories:
            trend = ", ".join(str(s) for s in c.last_7_days_scores) or "-"
            lines.append(
                f"{category_label(c.category_key)}: tests={c.total_tests} avg={c.average_score} "
                f"best={c.best_score} trend=[{trend}]"
            )
    return "\n".join(lines)


def motivational_message(results: Sequence[TestResult], streak: int) -> str:
    if not results:
        return "Start a test to track your progress!"
    avg = sum(r.total_score for r in results) // len(results)
    if streak >= 7:
        return f"Nice! You have practiced {streak} days in a row!"
    if avg >= 18:
        return f"Excellent! Your average score is {avg}/20!"
    if len(results) >= 10:
        return f"Good job! You completed {len(results)} tests!"
    if len(results) >= 5:
        return "Nice work! Keep it up!"
    return "Good start! Keep going!"
