"""
Dataset handles, the row-index universe, and split records.

This module provides:
- DatasetHandle: Abstract base class for row-addressable data
- FrameHandle / ArrayHandle: pandas and numpy implementations
- RowIndexUniverse: Row count and optional strata of a handle
- Split / SplitId / PartitionView: Index-only partitions with lazy rows
"""

from resampling.data.backend import ArrayHandle, DatasetHandle, FrameHandle
from resampling.data.splits import PartitionView, Split, SplitId
from resampling.data.universe import RowIndexUniverse

__all__ = [
    "DatasetHandle",
    "FrameHandle",
    "ArrayHandle",
    "RowIndexUniverse",
    "Split",
    "SplitId",
    "PartitionView",
]
