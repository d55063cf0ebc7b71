"""
Resampling plans: reproducible analysis/assessment splits of tabular data.

This package provides:
- RowIndexUniverse: row count and strata of a dataset handle
- Split / ResampleSet: index-only splits with lazy materialization
- Strategies: bootstraps, vfold_cv, mc_cv, rolling_origin, initial_split
- ResampleSet.map: order-preserving (optionally parallel) per-split driver
"""

from resampling.config import ResamplingConfig
from resampling.data import (
    ArrayHandle,
    DatasetHandle,
    FrameHandle,
    PartitionView,
    RowIndexUniverse,
    Split,
    SplitId,
)
from resampling.evaluation import MapResult, SplitOutcome, map_splits
from resampling.exceptions import (
    ConfigurationError,
    InsufficientRowsError,
    InvalidStrataError,
    ResamplingError,
    SplitExecutionError,
)
from resampling.resample_set import ResampleSet
from resampling.strategies import (
    bootstraps,
    initial_split,
    initial_time_split,
    make_resamples,
    mc_cv,
    rolling_origin,
    vfold_cv,
)

__version__ = "0.1.0"

__all__ = [
    "ArrayHandle",
    "DatasetHandle",
    "FrameHandle",
    "PartitionView",
    "RowIndexUniverse",
    "Split",
    "SplitId",
    "ResampleSet",
    "ResamplingConfig",
    "MapResult",
    "SplitOutcome",
    "map_splits",
    "bootstraps",
    "vfold_cv",
    "mc_cv",
    "rolling_origin",
    "initial_split",
    "initial_time_split",
    "make_resamples",
    "ResamplingError",
    "InvalidStrataError",
    "InsufficientRowsError",
    "ConfigurationError",
    "SplitExecutionError",
]
