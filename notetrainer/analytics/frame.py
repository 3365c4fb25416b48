from __future__ import annotations

"""pandas frames over the result log and the daily rollups."""

from datetime import datetime
from typing import Sequence

import pandas as pd
from pandas.api.types import CategoricalDtype

from ..drills.modes import QuestionMode
from ..results.schema import DailyProgress, TestResult
from ..stats.leaderboard import accuracy_for

MODE_DTYPE = CategoricalDtype(categories=[m.value for m in QuestionMode], ordered=False)

RESULT_DTYPES = {
    "player_name": "string",
    "timestamp": "datetime64[ns]",
    "mode": MODE_DTYPE,
    "total_score": "UInt16",
    "audio_score": "UInt16",
    "solfege_score": "UInt16",
    "key_score": "UInt16",
    "staff_score": "UInt16",
}

DAILY_DTYPES = {
    "date": "string",
    "tests_completed": "UInt32",
    "average_score": "UInt16",
    "best_score": "UInt16",
}


def _empty_df(dtypes: dict) -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in dtypes.items()})


def _local_naive(ts: datetime) -> datetime:
    """Aware timestamps are shifted to local time; naive ones are already local."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone().replace(tzinfo=None)


def results_to_frame(results: Sequence[TestResult], *, accuracy_by_mode: bool = False) -> pd.DataFrame:
    """One row per result in log order, plus an ``accuracy`` float column."""
    if not results:
        return _empty_df(RESULT_DTYPES).assign(accuracy=pd.Series(dtype="float32"))
    rows = [
        {
            "player_name": r.player_name,
            "timestamp": _local_naive(r.timestamp),
            "mode": r.mode.value,
            "total_score": r.total_score,
            "audio_score": r.audio_score,
            "solfege_score": r.solfege_score,
            "key_score": r.key_score,
            "staff_score": r.staff_score,
        }
        for r in results
    ]
    df = pd.DataFrame(rows)
    for col, dt in RESULT_DTYPES.items():
        df[col] = df[col].astype(dt)
    df["accuracy"] = pd.Series(
        [accuracy_for(r, by_mode=accuracy_by_mode) for r in results], dtype="float32"
    )
    return df


def daily_to_frame(days: Sequence[DailyProgress]) -> pd.DataFrame:
    """One row per day, with a ``cat_<key>`` column for each category seen."""
    if not days:
        return _empty_df(DAILY_DTYPES)
    rows = []
    for d in days:
        row = {
            "date": d.date_key,
            "tests_completed": d.tests_completed,
            "average_score": d.average_score,
            "best_score": d.best_score,
        }
        for key, score in d.category_scores.items():
            row[f"cat_{key}"] = score
        rows.append(row)
    df = pd.DataFrame(rows)
    for col, dt in DAILY_DTYPES.items():
        df[col] = df[col].astype(dt)
    cat_cols = [c for c in df.columns if c.startswith("cat_")]
    for col in cat_cols:
        df[col] = df[col].astype("UInt16")
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def category_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Tests, floor-mean and best total score per session mode."""
    if df.empty:
        return pd.DataFrame(
            {
                "mode": pd.Series(dtype="string"),
                "tests": pd.Series(dtype="int64"),
                "average_score": pd.Series(dtype="int64"),
                "best_score": pd.Series(dtype="int64"),
            }
        )
    g = df.groupby("mode", observed=True)["total_score"]
    out = pd.DataFrame(
        {
            "tests": g.count().astype("int64"),
            "average_score": (g.sum().astype("int64") // g.count().astype("int64")),
            "best_score": g.max().astype("int64"),
        }
    ).reset_index()
    out["mode"] = out["mode"].astype("string")
    return out
