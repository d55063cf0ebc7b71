"""Model wrappers fitted per split."""

from resampling.config import LogisticRegressionConfig
from resampling.models.logistic_regression import LogisticRegressionModel

__all__ = [
    "LogisticRegressionConfig",
    "LogisticRegressionModel",
]
