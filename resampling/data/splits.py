"""
Split records: one analysis/assessment partition of a row-index universe.

A split stores indices rather than data. Rows are resolved against the
dataset handle only when a partition is materialized, so a resample set of
thousands of splits costs index bookkeeping, not copies of the data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np

from resampling.data.backend import DatasetHandle
from resampling.data.universe import RowIndexUniverse

SPLIT_KINDS = ("fold", "resample", "slice", "apparent", "holdout")

_LABEL_PREFIX = {
    "fold": "Fold",
    "resample": "Resample",
    "slice": "Slice",
}


def as_index_array(indices: Any) -> np.ndarray:
    """Copy indices into a read-only int64 array."""
    arr = np.array(indices, dtype=np.int64).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class SplitId:
    """Structured label of a split within its resample set.

    Used only for reporting and ordering, never for index computation.

    Attributes:
        kind: One of "fold", "resample", "slice", "apparent", "holdout".
        index: 1-based position within its repeat (fold number, resample
            number, slice number).
        repeat: 1-based repeat number (V-fold only).
        count: Number of splits of this kind per repeat, for label padding.
        n_repeats: Number of repeats (V-fold only), for label padding.
        prefix: Label prefix override, e.g. "Bootstrap".
    """

    kind: str
    index: int
    repeat: Optional[int] = None
    count: Optional[int] = field(default=None, compare=False)
    n_repeats: Optional[int] = field(default=None, compare=False)
    prefix: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.kind not in SPLIT_KINDS:
            raise ValueError(f"kind must be one of {SPLIT_KINDS}, got {self.kind!r}")
        if self.index < 1:
            raise ValueError(f"index must be >= 1, got {self.index}")

    def as_dict(self) -> Dict[str, Any]:
        """Id fields: {repeat, fold}, {resample} or {slice}.

        The apparent and holdout splits have no number of their own and are
        flagged with {apparent: True} and {holdout: True}, so they never
        collide with a numbered split in the same set.
        """
        if self.kind == "fold":
            return {"repeat": self.repeat or 1, "fold": self.index}
        if self.kind == "slice":
            return {"slice": self.index}
        if self.kind in ("apparent", "holdout"):
            return {self.kind: True}
        return {"resample": self.index}

    @staticmethod
    def _pad(value: int, total: Optional[int]) -> str:
        width = len(str(total)) if total else 1
        return str(value).zfill(width)

    @property
    def label(self) -> str:
        """Human-readable label like "Fold03", "Repeat02/Fold10" or "Bootstrap07"."""
        if self.kind == "apparent":
            return "Apparent"
        if self.kind == "holdout":
            return "Split"

        prefix = self.prefix or _LABEL_PREFIX[self.kind]
        label = f"{prefix}{self._pad(self.index, self.count)}"
        if self.kind == "fold" and (self.n_repeats or 1) > 1:
            label = f"Repeat{self._pad(self.repeat or 1, self.n_repeats)}/{label}"
        return label

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True, eq=False)
class PartitionView:
    """Lazy view of one side of a split.

    Holds the handle and the row positions; rows are read from the handle on
    every call to materialize() and never cached here.
    """

    handle: DatasetHandle
    indices: np.ndarray

    def __len__(self) -> int:
        return len(self.indices)

    def materialize(self) -> Any:
        """Resolve the rows against the dataset handle."""
        return self.handle.take(self.indices)


@dataclass(frozen=True, eq=False)
class Split:
    """One analysis/assessment partition of a universe.

    Attributes:
        analysis_indices: Row positions used to fit (may repeat for bootstrap).
        assessment_indices: Row positions held out for evaluation.
        universe: Universe both index arrays refer to.
        id: Structured label of this split.
    """

    analysis_indices: np.ndarray
    assessment_indices: np.ndarray
    universe: RowIndexUniverse = field(repr=False)
    id: SplitId

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "analysis_indices", as_index_array(self.analysis_indices))
        object.__setattr__(self, "assessment_indices", as_index_array(self.assessment_indices))

    def analysis(self) -> PartitionView:
        """Lazy view of the analysis rows."""
        return PartitionView(self.universe.handle, self.analysis_indices)

    def assessment(self) -> PartitionView:
        """Lazy view of the assessment rows."""
        return PartitionView(self.universe.handle, self.assessment_indices)

    def analysis_data(self) -> Any:
        """Materialized analysis rows."""
        return self.analysis().materialize()

    def assessment_data(self) -> Any:
        """Materialized assessment rows."""
        return self.assessment().materialize()

    def sizes(self) -> Tuple[int, int, int]:
        """(analysis_count, assessment_count, total_count)."""
        return (
            len(self.analysis_indices),
            len(self.assessment_indices),
            self.universe.total_rows(),
        )

    def __repr__(self) -> str:
        n_analysis, n_assessment, n_total = self.sizes()
        return f"<Split {self.id.label}: Analysis/Assess/Total <{n_analysis}/{n_assessment}/{n_total}>>"
