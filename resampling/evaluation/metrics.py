"""
Classification metrics for scoring assessment sets.

Implements:
- accuracy: fraction of correct hard predictions at a probability threshold
- auc: area under the ROC curve
- brier: mean squared error of probability predictions
- log_loss: binary cross-entropy
"""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np
from sklearn.metrics import accuracy_score, brier_score_loss, log_loss, roc_auc_score


def compute_accuracy(y_true: np.ndarray, y_score: np.ndarray, threshold: float = 0.5) -> float:
    """Compute accuracy of thresholded probabilities.

    Args:
        y_true: True binary labels.
        y_score: Predicted probability of class 1.
        threshold: Probability at or above which class 1 is predicted.

    Returns:
        Accuracy in [0, 1].
    """
    y_pred = (np.asarray(y_score) >= threshold).astype(int)
    return float(accuracy_score(y_true, y_pred))


def compute_auc(y_true: np.ndarray, y_score: np.ndarray) -> float:
    """Compute ROC AUC score.

    Returns NaN when the assessment set holds a single class, since AUC is
    undefined there.
    """
    if len(np.unique(y_true)) < 2:
        return float("nan")
    return float(roc_auc_score(y_true, y_score))


def compute_brier(y_true: np.ndarray, y_score: np.ndarray) -> float:
    """Compute Brier score. Lower is better; perfect calibration = 0."""
    return float(brier_score_loss(y_true, y_score))


def compute_log_loss(y_true: np.ndarray, y_score: np.ndarray) -> float:
    """Compute binary log loss."""
    return float(log_loss(y_true, y_score, labels=[0, 1]))


def compute_metrics(
    y_true: np.ndarray,
    y_score: np.ndarray,
    metrics: Sequence[str],
    threshold: float = 0.5,
) -> Dict[str, float]:
    """Compute multiple evaluation metrics.

    Args:
        y_true: True binary labels.
        y_score: Predicted probability of class 1.
        metrics: Metric names. Supported: "accuracy", "auc", "brier", "log_loss".
        threshold: Decision threshold for accuracy.

    Returns:
        Dictionary mapping metric name to value.
    """
    results = {}

    metric_funcs = {
        "accuracy": lambda: compute_accuracy(y_true, y_score, threshold),
        "auc": lambda: compute_auc(y_true, y_score),
        "brier": lambda: compute_brier(y_true, y_score),
        "log_loss": lambda: compute_log_loss(y_true, y_score),
    }

    for metric in metrics:
        metric_lower = metric.lower()
        if metric_lower in metric_funcs:
            results[metric_lower] = metric_funcs[metric_lower]()
        else:
            raise ValueError(f"Unknown metric: {metric}. Supported: {list(metric_funcs.keys())}")

    return results
