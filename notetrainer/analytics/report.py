from __future__ import annotations

"""Report bundle: snapshot exports plus charts in one output directory.

Loads the result log and recent rollups, writes Parquet/NDJSON/CSV snapshots
and the progress charts.
"""

from pathlib import Path
from typing import Dict, List

from ..results.result_manager import ResultStore
from ..stats.progress import ProgressAggregator
from .export import export_ndjson, export_parquet
from .frame import category_summary, daily_to_frame, results_to_frame
from .plots import plot_category_scores, plot_daily_progress, plot_score_trend


def write_report(
    store: ResultStore,
    progress: ProgressAggregator,
    outdir: Path,
    *,
    days: int = 7,
    accuracy_by_mode: bool = False,
) -> List[Path]:
    """Write the report files and return the paths that were created."""
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    results = results_to_frame(store.read_all(), accuracy_by_mode=accuracy_by_mode)
    daily = daily_to_frame(progress.get_last_n_days(days))
    summary = category_summary(results)

    written: List[Path] = []
    files: Dict[str, Path] = {
        "results_parquet": outdir / "results.parquet",
        "results_ndjson": outdir / "results.ndjson",
        "daily_csv": outdir / "daily_progress.csv",
        "summary_csv": outdir / "category_summary.csv",
    }
    export_parquet(results, files["results_parquet"])
    export_ndjson(results, files["results_ndjson"])
    daily.to_csv(files["daily_csv"], index=False)
    summary.to_csv(files["summary_csv"], index=False)
    written.extend(files.values())

    charts = [
        (plot_daily_progress, daily, outdir / "daily_progress.png"),
        (plot_category_scores, summary, outdir / "scores_by_mode.png"),
        (plot_score_trend, results, outdir / "score_trend.png"),
    ]
    for fn, frame, path in charts:
        if fn(frame, save_path=path):
            written.append(path)
    return written
