"""notetrainer package initialization.

Note-identification quiz engine: question generation, scoring sessions,
durable result log, daily progress rollups and leaderboard ranking.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
