# results.py
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .stratified_experiment import RESULT_COLUMNS, ResultRow

EXTRA_COLUMNS = ["sample_size", "n_train", "n_test", "error"]


def results_to_frame(rows: List[ResultRow]) -> pd.DataFrame:
    """Tabular dump; the first four columns are bucket_index,size_step,accuracy,label_balance."""
    if not rows:
        return pd.DataFrame(columns=RESULT_COLUMNS + EXTRA_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in rows])[RESULT_COLUMNS + EXTRA_COLUMNS]


def frame_to_results(df: pd.DataFrame) -> List[ResultRow]:
    missing = set(RESULT_COLUMNS) - set(df.columns)
    if missing:
        raise ValueError(f"results table is missing columns: {sorted(missing)}")
    rows = []
    for rec in df.to_dict(orient="records"):
        error = rec.get("error")
        rows.append(
            ResultRow(
                bucket_index=int(rec["bucket_index"]),
                size_step=int(rec["size_step"]),
                accuracy=float(rec["accuracy"]),
                label_balance=float(rec["label_balance"]),
                sample_size=int(rec.get("sample_size", 0) or 0),
                n_train=int(rec.get("n_train", 0) or 0),
                n_test=int(rec.get("n_test", 0) or 0),
                error=None if error is None or (isinstance(error, float) and np.isnan(error)) else str(error),
            )
        )
    return rows


def accuracy_grid(rows: List[ResultRow]) -> pd.DataFrame:
    """Accuracy pivoted to buckets x size steps."""
    df = results_to_frame(rows)
    return df.pivot(index="bucket_index", columns="size_step", values="accuracy")


def summarize(rows: List[ResultRow]) -> pd.DataFrame:
    """
    Per-bucket summary of the grid.

    Returns:
        DataFrame with mean/min/max accuracy, mean label balance, the accuracy
        change from the smallest to the largest sample and the failed-cell count
    """
    df = results_to_frame(rows)
    columns = [
        "bucket_index",
        "mean_accuracy",
        "min_accuracy",
        "max_accuracy",
        "accuracy_gain",
        "mean_label_balance",
        "failed_cells",
    ]
    if df.empty:
        return pd.DataFrame(columns=columns)

    summary_data = []
    for bucket, g in df.sort_values("size_step").groupby("bucket_index"):
        acc = g["accuracy"].astype(float)
        summary_data.append(
            {
                "bucket_index": int(bucket),
                "mean_accuracy": acc.mean(),
                "min_accuracy": acc.min(),
                "max_accuracy": acc.max(),
                "accuracy_gain": acc.iloc[-1] - acc.iloc[0],
                "mean_label_balance": g["label_balance"].astype(float).mean(),
                "failed_cells": int(g["error"].notna().sum()),
            }
        )
    return pd.DataFrame(summary_data, columns=columns)


def save_results(
    rows: List[ResultRow],
    results_dir: Path,
    config: Optional[Dict[str, Any]] = None,
    buckets: Optional[pd.DataFrame] = None,
    tag: Optional[str] = None,
) -> Path:
    """
    Write the grid as CSV plus a JSON run summary.

    Returns:
        Path of the CSV file
    """
    results_dir = Path(results_dir)
    results_dir.mkdir(parents=True, exist_ok=True)
    tag = tag or datetime.now().strftime("%Y%m%d_%H%M%S")

    csv_path = results_dir / f"stratified_results_{tag}.csv"
    results_to_frame(rows).to_csv(csv_path, index=False)

    meta = {
        "tag": tag,
        "config": config or {},
        "n_cells": len(rows),
        "n_failed": sum(r.failed for r in rows),
        "results_csv": str(csv_path),
        "summary": json.loads(summarize(rows).to_json(orient="records")),
    }
    if buckets is not None:
        meta["buckets"] = json.loads(buckets.to_json(orient="records"))
    json_path = results_dir / f"stratified_summary_{tag}.json"
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(meta, f, ensure_ascii=False, indent=2)

    return csv_path


def load_results(csv_path: Path) -> List[ResultRow]:
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Results file not found: {csv_path}")
    return frame_to_results(pd.read_csv(csv_path))
