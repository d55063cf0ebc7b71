"""
Shared pytest fixtures.
"""

import numpy as np
import pandas as pd
import pytest

from resampling import FrameHandle, RowIndexUniverse


@pytest.fixture
def grouped_frame() -> pd.DataFrame:
    """20 rows in three groups of 8, 7 and 5 rows, interleaved."""
    groups = ["a"] * 8 + ["b"] * 7 + ["c"] * 5
    rng = np.random.default_rng(0)
    rng.shuffle(groups)
    return pd.DataFrame({
        "x": np.arange(20, dtype=float),
        "group": groups,
    })


@pytest.fixture
def grouped_universe(grouped_frame) -> RowIndexUniverse:
    """Universe over grouped_frame stratified by group."""
    return RowIndexUniverse.from_frame(grouped_frame, strata="group")


@pytest.fixture
def attrition_frame() -> pd.DataFrame:
    """1470 rows with three numeric predictors and a binary outcome.

    The outcome follows a logistic model, so a logistic regression scores
    well above chance.
    """
    rng = np.random.default_rng(42)
    n = 1470
    X = rng.normal(size=(n, 3))
    logit = 1.5 * X[:, 0] - 1.0 * X[:, 1] - 1.5
    y = (rng.random(n) < 1.0 / (1.0 + np.exp(-logit))).astype(int)
    return pd.DataFrame({"age": X[:, 0], "income": X[:, 1], "tenure": X[:, 2], "attrition": y})


class CountingHandle(FrameHandle):
    """FrameHandle that counts how often rows are materialized."""

    def __init__(self, df: pd.DataFrame):
        super().__init__(df)
        self.take_calls = 0

    def take(self, indices):
        self.take_calls += 1
        return super().take(indices)


@pytest.fixture
def counting_universe() -> RowIndexUniverse:
    """Universe of 30 rows over a CountingHandle."""
    df = pd.DataFrame({"x": np.arange(30)})
    return RowIndexUniverse(CountingHandle(df))


def universe_of(n_rows: int) -> RowIndexUniverse:
    """Unstratified universe of ``n_rows`` rows."""
    return RowIndexUniverse.from_frame(pd.DataFrame({"x": np.arange(n_rows)}))
