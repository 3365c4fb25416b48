from __future__ import annotations

"""Matplotlib charts for daily progress and per-category scores."""

from typing import Optional
import os

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def plot_daily_progress(
    daily: pd.DataFrame,
    *,
    max_score: int = 20,
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    """Grouped bars of average and best score per day. Returns False when empty."""
    if daily.empty:
        return False
    x = np.arange(len(daily))
    width = 0.4
    plt.figure()
    plt.bar(x - width / 2, daily["average_score"].astype("float64"), width, label="average")
    plt.bar(x + width / 2, daily["best_score"].astype("float64"), width, label="best")
    plt.axhline(max_score, linestyle="--", linewidth=1, color="grey")
    plt.xticks(ticks=x, labels=daily["date"].astype(str).tolist(), rotation=45, ha="right")
    plt.ylabel("Score")
    plt.title("Daily progress")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True


def plot_category_scores(
    summary: pd.DataFrame,
    *,
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    """Horizontal bars of average and best total score per session mode."""
    if summary.empty:
        return False
    y = np.arange(len(summary))
    height = 0.4
    plt.figure()
    plt.barh(y - height / 2, summary["average_score"].astype("float64"), height, label="average")
    plt.barh(y + height / 2, summary["best_score"].astype("float64"), height, label="best")
    plt.yticks(ticks=y, labels=summary["mode"].astype(str).tolist())
    plt.xlabel("Score")
    plt.title("Scores by mode")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True


def plot_score_trend(
    results: pd.DataFrame,
    *,
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    """Total score of each test in log order, one series per mode."""
    if results.empty:
        return False
    g = results.reset_index(drop=True)
    plt.figure()
    for mode, part in g.groupby("mode", observed=True):
        plt.plot(part.index, part["total_score"].astype("float64"), marker="o", linestyle="-", label=str(mode))
    plt.xlabel("Test #")
    plt.ylabel("Total score")
    plt.title("Score trend")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True
