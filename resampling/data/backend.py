"""
Abstract dataset handle and its in-memory implementations.

Defines the contract a dataset provider must fulfill so that resampling
stays agnostic of where rows come from. The core only asks for the row
count, one column for stratification, and rows by position.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

import numpy as np
import pandas as pd


class DatasetHandle(ABC):
    """Abstract base class for row-addressable tabular data.

    Handles are shared by every split of a resample set and must not be
    mutated while splits refer to them.
    """

    @abstractmethod
    def n_rows(self) -> int:
        """Return total number of rows."""
        pass

    @abstractmethod
    def column(self, name: str) -> np.ndarray:
        """Return values of a named column.

        Raises:
            KeyError: If the column does not exist.
        """
        pass

    @abstractmethod
    def take(self, indices: np.ndarray) -> Any:
        """Materialize rows at the given 0-based positions.

        Args:
            indices: Row positions, repeats allowed.

        Returns:
            Rows in the handle's native container type.
        """
        pass

    def has_column(self, name: str) -> bool:
        """Whether a named column exists."""
        try:
            self.column(name)
        except KeyError:
            return False
        return True

    def __len__(self) -> int:
        """Number of rows."""
        return self.n_rows()


class FrameHandle(DatasetHandle):
    """Handle over a pandas DataFrame, addressed by row position."""

    def __init__(self, df: pd.DataFrame):
        self._df = df

    @property
    def frame(self) -> pd.DataFrame:
        """Underlying DataFrame."""
        return self._df

    @property
    def columns(self) -> list[str]:
        """Column names."""
        return [str(c) for c in self._df.columns]

    def n_rows(self) -> int:
        return len(self._df)

    def column(self, name: str) -> np.ndarray:
        if name not in self._df.columns:
            raise KeyError(f"Column not found: {name!r}. Available: {self.columns}")
        return self._df[name].to_numpy()

    def has_column(self, name: str) -> bool:
        return name in self._df.columns

    def take(self, indices: np.ndarray) -> pd.DataFrame:
        # Bootstrap draws repeat rows, so the original index is not kept
        return self._df.iloc[np.asarray(indices, dtype=np.int64)].reset_index(drop=True)


class ArrayHandle(DatasetHandle):
    """Handle over named numpy arrays of equal length (e.g. X and y)."""

    def __init__(self, **arrays: Any):
        if not arrays:
            raise ValueError("ArrayHandle needs at least one array")

        self._arrays: Dict[str, np.ndarray] = {
            name: np.asarray(arr) for name, arr in arrays.items()
        }

        lengths = {name: len(arr) for name, arr in self._arrays.items()}
        if len(set(lengths.values())) != 1:
            raise ValueError(f"Arrays must have equal length, got {lengths}")
        self._n_rows = next(iter(lengths.values()))

    @property
    def names(self) -> Sequence[str]:
        """Array names."""
        return list(self._arrays)

    def n_rows(self) -> int:
        return self._n_rows

    def column(self, name: str) -> np.ndarray:
        if name not in self._arrays:
            raise KeyError(f"Array not found: {name!r}. Available: {self.names}")
        arr = self._arrays[name]
        if arr.ndim != 1:
            raise KeyError(f"Array {name!r} is not one-dimensional, shape {arr.shape}")
        return arr

    def has_column(self, name: str) -> bool:
        return name in self._arrays and self._arrays[name].ndim == 1

    def take(self, indices: np.ndarray) -> Dict[str, np.ndarray]:
        idx = np.asarray(indices, dtype=np.int64)
        return {name: arr[idx] for name, arr in self._arrays.items()}
