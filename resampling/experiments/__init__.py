"""
Model-fitting workflows over resample sets.

This module provides:
- fit_resamples: fit on each analysis set, score each assessment set
"""

from resampling.experiments.fit_resamples import (
    ResampleMetricRow,
    fit_resample,
    fit_resamples,
)

__all__ = [
    "ResampleMetricRow",
    "fit_resample",
    "fit_resamples",
]
