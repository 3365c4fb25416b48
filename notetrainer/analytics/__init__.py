from .frame import category_summary, daily_to_frame, results_to_frame
from .export import export_ndjson, export_parquet
from .plots import plot_category_scores, plot_daily_progress, plot_score_trend
from .report import write_report

__all__ = [
    "category_summary",
    "daily_to_frame",
    "results_to_frame",
    "export_ndjson",
    "export_parquet",
    "plot_category_scores",
    "plot_daily_progress",
    "plot_score_trend",
    "write_report",
]
