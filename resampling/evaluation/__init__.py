"""Per-split evaluation: the map driver, metrics and aggregation."""

from resampling.evaluation.driver import MapResult, SplitOutcome, map_splits
from resampling.evaluation.metrics import compute_metrics
from resampling.evaluation.summary import collect_metrics, summarize_array

__all__ = [
    "map_splits",
    "MapResult",
    "SplitOutcome",
    "compute_metrics",
    "collect_metrics",
    "summarize_array",
]
