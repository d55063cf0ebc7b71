"""
Row-index universe: the identity of the full dataset as seen by resampling.

Holds the row count and, optionally, the grouping of rows by a
stratification column. Every index produced by a strategy lies in
[0, total_rows).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import numpy as np
import pandas as pd

from resampling.data.backend import ArrayHandle, DatasetHandle, FrameHandle
from resampling.exceptions import ConfigurationError, InsufficientRowsError, InvalidStrataError

logger = logging.getLogger(__name__)

# Each category needs a member in both analysis and assessment
MIN_ROWS_PER_STRATUM = 2


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _strata_labels(values: np.ndarray, breaks: int) -> pd.Series:
    """Turn raw column values into stratum labels.

    Numeric columns with more distinct values than ``breaks`` are binned into
    quantiles; anything else (labels, booleans, small integer codes) is used
    as-is.
    """
    series = pd.Series(values)
    is_numeric = pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series)

    if is_numeric and series.nunique() > breaks:
        return pd.qcut(series, q=breaks, duplicates="drop")
    return series


class RowIndexUniverse:
    """Row count and optional strata of a dataset handle.

    Immutable after construction; validation happens eagerly so that every
    strategy built on a universe can trust its strata.

    Args:
        handle: Dataset to resample.
        strata: Optional name of a column to stratify by.
        breaks: Number of quantile bins for a numeric strata column.

    Raises:
        InsufficientRowsError: If the dataset has no rows.
        ConfigurationError: If breaks < 2.
        InvalidStrataError: If the strata column is absent, has missing
            values, or has a category with fewer than 2 rows.
    """

    def __init__(
        self,
        handle: DatasetHandle,
        strata: Optional[str] = None,
        breaks: int = 4,
    ):
        self._handle = handle
        self._total_rows = int(handle.n_rows())
        self._strata_name = strata

        if breaks < 2:
            raise ConfigurationError(f"breaks must be >= 2, got {breaks!r}")
        if self._total_rows <= 0:
            raise InsufficientRowsError("Dataset has no rows to resample")

        self._row_indices = _readonly(np.arange(self._total_rows, dtype=np.int64))
        self._categories: Optional[Dict[Any, np.ndarray]] = None

        if strata is not None:
            self._categories = self._build_categories(strata, breaks)
            logger.debug(
                "Universe of %d rows stratified by %r into %d categories",
                self._total_rows, strata, len(self._categories),
            )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        strata: Optional[str] = None,
        breaks: int = 4,
    ) -> RowIndexUniverse:
        """Build a universe over a DataFrame."""
        return cls(FrameHandle(df), strata=strata, breaks=breaks)

    @classmethod
    def from_arrays(
        cls,
        strata: Optional[str] = None,
        breaks: int = 4,
        **arrays: Any,
    ) -> RowIndexUniverse:
        """Build a universe over named arrays, e.g. ``from_arrays(X=X, y=y, strata="y")``."""
        return cls(ArrayHandle(**arrays), strata=strata, breaks=breaks)

    def _build_categories(self, strata: str, breaks: int) -> Dict[Any, np.ndarray]:
        if not self._handle.has_column(strata):
            raise InvalidStrataError(f"Stratification column not found: {strata!r}")

        values = self._handle.column(strata)
        labels = _strata_labels(values, breaks)

        if labels.isna().any():
            n_missing = int(labels.isna().sum())
            raise InvalidStrataError(
                f"Stratification column {strata!r} has {n_missing} missing values"
            )

        groups = labels.groupby(labels, sort=True, observed=True).indices
        categories = {
            key: _readonly(np.sort(np.asarray(rows, dtype=np.int64)))
            for key, rows in groups.items()
        }

        too_small = {
            key: len(rows) for key, rows in categories.items()
            if len(rows) < MIN_ROWS_PER_STRATUM
        }
        if too_small:
            raise InvalidStrataError(
                f"Stratification column {strata!r} has categories with fewer than "
                f"{MIN_ROWS_PER_STRATUM} rows: {too_small}"
            )

        return categories

    @property
    def handle(self) -> DatasetHandle:
        """Dataset this universe indexes."""
        return self._handle

    @property
    def strata_name(self) -> Optional[str]:
        """Name of the stratification column, if any."""
        return self._strata_name

    @property
    def has_strata(self) -> bool:
        """Whether rows are grouped by a stratification column."""
        return self._categories is not None

    def total_rows(self) -> int:
        """Number of rows in the dataset."""
        return self._total_rows

    def row_indices(self) -> np.ndarray:
        """All row positions, ``[0, total_rows)``."""
        return self._row_indices

    def categories(self) -> Mapping[Any, np.ndarray]:
        """Map each stratum to the sorted row positions it contains.

        Raises:
            InvalidStrataError: If the universe was built without strata.
        """
        if self._categories is None:
            raise InvalidStrataError("Universe was built without a stratification column")
        return dict(self._categories)

    def __len__(self) -> int:
        return self._total_rows

    def __repr__(self) -> str:
        strata = f", strata={self._strata_name!r}" if self._strata_name else ""
        return f"RowIndexUniverse(total_rows={self._total_rows}{strata})"
