"""
Logistic regression scored on the assessment side of each split.

A model is built fresh from its config for every split, fitted on the
analysis rows, and reports P(y=1) for the assessment rows.
"""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
from sklearn.linear_model import LogisticRegression

from resampling.config import LogisticRegressionConfig


class LogisticRegressionModel:
    """Binary logistic regression on 0/1 outcomes.

    Args:
        cfg: Model settings; defaults apply when omitted.
    """

    def __init__(self, cfg: Optional[LogisticRegressionConfig] = None):
        self.cfg = cfg or LogisticRegressionConfig()
        self._estimator = LogisticRegression(
            C=self.cfg.C,
            class_weight=self.cfg.class_weight,
            max_iter=self.cfg.max_iter,
        )

    @classmethod
    def factory(
        cls, cfg: Optional[LogisticRegressionConfig] = None
    ) -> Callable[[], LogisticRegressionModel]:
        """Zero-argument callable building one unfitted model per split."""
        return lambda: cls(cfg)

    def fit(self, X: np.ndarray, y: np.ndarray) -> LogisticRegressionModel:
        """Fit on analysis rows.

        Raises:
            ValueError: If the analysis rows hold a single outcome class.
        """
        classes = np.unique(y)
        if len(classes) < 2:
            raise ValueError(
                f"Analysis set has a single outcome class {classes.tolist()}; "
                "cannot fit a binary model"
            )
        self._estimator.fit(X, y)
        return self

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """P(y=1) for each row."""
        positive = list(self._estimator.classes_).index(1)
        return self._estimator.predict_proba(X)[:, positive]
