from .leaderboard import FIXED_ACCURACY_DENOMINATOR, LeaderboardEntry, accuracy_for, rank
from .progress import CategoryProgress, ProgressAggregator, daily_key

__all__ = [
    "FIXED_ACCURACY_DENOMINATOR",
    "LeaderboardEntry",
    "accuracy_for",
    "rank",
    "CategoryProgress",
    "ProgressAggregator",
    "daily_key",
]
