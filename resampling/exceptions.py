"""
Exception hierarchy for resampling plans.

Structural errors (bad strata, too few rows, out-of-range parameters) are
raised while a resample set is being built. SplitExecutionError is the only
error that surfaces later, from the map driver.
"""

from __future__ import annotations


class ResamplingError(Exception):
    """Base class for all resampling errors."""
    pass


class InvalidStrataError(ResamplingError):
    """Stratification column is missing, incomplete, or has a category too small to split."""
    pass


class InsufficientRowsError(ResamplingError):
    """Dataset is smaller than the strategy's minimum window or fold requirement."""
    pass


class ConfigurationError(ResamplingError):
    """Strategy parameter is out of range."""
    pass


class SplitExecutionError(ResamplingError):
    """A per-split function failed during map.

    Attributes:
        split_id: Id of the first failing split, if known.
        failures: (split_id, exception) pairs for every recorded failure.
    """

    def __init__(self, message: str, split_id=None, failures=None):
        super().__init__(message)
        self.split_id = split_id
        self.failures = list(failures or [])
