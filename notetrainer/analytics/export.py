from __future__ import annotations

"""Parquet and NDJSON exports of analytics frames."""

from pathlib import Path

import pandas as pd


def export_parquet(df: pd.DataFrame, out_path: Path) -> None:
    """Write a frame to Parquet (pyarrow engine, zstd compression)."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out_path, engine="pyarrow", compression="zstd", index=False)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")
