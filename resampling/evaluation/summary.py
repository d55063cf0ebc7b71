"""
Aggregation of per-split results.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import numpy as np
import pandas as pd


def summarize_array(values: Sequence[float]) -> Dict[str, float]:
    """Summarize per-split values: mean, std, median, 95% interval, range, count.

    NaN values (e.g. AUC on a single-class assessment set) are ignored.
    """
    arr = np.asarray(values, dtype=float)
    arr = arr[~np.isnan(arr)]

    if len(arr) == 0:
        return {"mean": float("nan"), "std": float("nan"), "n": 0}

    return {
        "mean": float(np.mean(arr)),
        "std": float(np.std(arr)),
        "median": float(np.median(arr)),
        "q2.5": float(np.percentile(arr, 2.5)),
        "q97.5": float(np.percentile(arr, 97.5)),
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
        "n": int(len(arr)),
    }


def collect_metrics(rows: Iterable[Any]) -> pd.DataFrame:
    """Average metric rows over splits.

    Args:
        rows: Records with ``metric`` and ``estimate`` attributes (e.g.
            ResampleMetricRow) or dicts with those keys.

    Returns:
        DataFrame with one row per metric: mean, n, std_err.
    """
    records = [r if isinstance(r, dict) else vars(r) for r in rows]
    if not records:
        return pd.DataFrame(columns=["metric", "mean", "n", "std_err"])
    df = pd.DataFrame(records)[["metric", "estimate"]]

    grouped = df.groupby("metric", sort=True)["estimate"]
    summary = grouped.agg(mean="mean", n="count", std="std").reset_index()
    summary["std_err"] = summary["std"] / np.sqrt(summary["n"])

    return summary.drop(columns="std")
