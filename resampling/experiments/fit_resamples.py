"""
Fit a model on every split and score it on the held-out rows.

For each split of a resample set:
- Model is fitted on the analysis partition
- Model is scored on the assessment partition
- One row is written per (split, metric); nothing is aggregated here

Aggregate the rows with resampling.evaluation.summary.collect_metrics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

import numpy as np
import pandas as pd

from resampling.config import LogisticRegressionConfig
from resampling.data.splits import Split
from resampling.evaluation.driver import ErrorPolicy
from resampling.evaluation.metrics import compute_metrics
from resampling.models.logistic_regression import LogisticRegressionModel
from resampling.resample_set import ResampleSet


@dataclass
class ResampleMetricRow:
    """Single row of fit_resamples output."""

    label: str
    split_kind: str
    split_index: int
    repeat: Optional[int]
    metric: str
    estimate: float
    n_analysis: int
    n_assessment: int


def _rows_as_arrays(
    rows: Any,
    feature_cols: Sequence[str],
    target_col: str,
):
    """Pull (X, y) out of a materialized partition (DataFrame or dict of arrays)."""
    if isinstance(rows, pd.DataFrame):
        return rows[list(feature_cols)].to_numpy(), rows[target_col].to_numpy()
    X = np.column_stack([rows[c] for c in feature_cols])
    return X, np.asarray(rows[target_col])


def fit_resample(
    split: Split,
    feature_cols: Sequence[str],
    target_col: str,
    model_factory: Callable[[], Any],
    metrics: Sequence[str],
    threshold: float = 0.5,
) -> List[ResampleMetricRow]:
    """Fit on one split's analysis rows and score its assessment rows.

    A split with an empty assessment set (a bootstrap that drew every row)
    scores NaN for every metric.

    Args:
        split: Split to evaluate.
        feature_cols: Predictor column names.
        target_col: Binary outcome column name.
        model_factory: Zero-argument callable returning an unfitted model with
            fit(X, y) and predict_proba(X) -> P(y=1).
        metrics: Metric names understood by compute_metrics.
        threshold: Decision threshold for accuracy.

    Returns:
        One ResampleMetricRow per metric.
    """
    n_analysis, n_assessment, _ = split.sizes()

    if n_assessment == 0:
        estimates = {m: float("nan") for m in metrics}
    else:
        X_fit, y_fit = _rows_as_arrays(split.analysis_data(), feature_cols, target_col)
        X_eval, y_eval = _rows_as_arrays(split.assessment_data(), feature_cols, target_col)

        model = model_factory()
        model.fit(X_fit, y_fit)
        scores = model.predict_proba(X_eval)
        estimates = compute_metrics(y_eval, scores, metrics, threshold=threshold)

    return [
        ResampleMetricRow(
            label=split.id.label,
            split_kind=split.id.kind,
            split_index=split.id.index,
            repeat=split.id.repeat,
            metric=metric,
            estimate=estimates[metric],
            n_analysis=n_analysis,
            n_assessment=n_assessment,
        )
        for metric in estimates
    ]


def fit_resamples(
    resample_set: ResampleSet,
    feature_cols: Sequence[str],
    target_col: str,
    model_factory: Optional[Callable[[], Any]] = None,
    model_config: Optional[LogisticRegressionConfig] = None,
    metrics: Sequence[str] = ("accuracy",),
    threshold: float = 0.5,
    n_jobs: int = 1,
    on_error: ErrorPolicy = "fail_fast",
    show_progress: bool = False,
) -> List[ResampleMetricRow]:
    """Fit and score a model on every split of a resample set.

    Args:
        resample_set: Splits to evaluate.
        feature_cols: Predictor column names.
        target_col: Binary outcome column name.
        model_factory: Returns a fresh unfitted model; defaults to a
            LogisticRegressionModel built from ``model_config``.
        model_config: Settings for the default logistic regression. Ignored
            when ``model_factory`` is given.
        metrics: Metric names understood by compute_metrics.
        threshold: Decision threshold for accuracy.
        n_jobs: Worker threads for the map driver.
        on_error: "fail_fast" or "collect". Under "collect", every split
            runs before the failures are raised together.
        show_progress: Whether to show a progress bar.

    Returns:
        Metric rows in split order, one per (split, metric).

    Raises:
        SplitExecutionError: If any split failed to fit or score.
    """
    if model_factory is None:
        model_factory = LogisticRegressionModel.factory(model_config)

    def evaluate(split: Split) -> List[ResampleMetricRow]:
        return fit_resample(split, feature_cols, target_col, model_factory, metrics, threshold)

    result = resample_set.map(
        evaluate, n_jobs=n_jobs, on_error=on_error, show_progress=show_progress
    )

    all_rows: List[ResampleMetricRow] = []
    for rows in result.values():
        all_rows.extend(rows)
    return all_rows
