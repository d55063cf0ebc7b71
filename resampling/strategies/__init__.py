"""
Resampling strategies.

Each strategy is a pure function (universe, configuration) -> ResampleSet:
- bootstraps: sampling with replacement, out-of-bag assessment
- vfold_cv: (repeated, stratified) V-fold cross-validation
- mc_cv: Monte-Carlo cross-validation
- rolling_origin: forward-moving windows over time-ordered rows
- initial_split / initial_time_split: a single training/testing split
"""

from __future__ import annotations

from resampling.config import (
    BootstrapConfig,
    HoldoutConfig,
    MonteCarloConfig,
    RollingOriginConfig,
    StrategyConfig,
    VFoldConfig,
)
from resampling.data.universe import RowIndexUniverse
from resampling.exceptions import ConfigurationError
from resampling.resample_set import ResampleSet
from resampling.strategies.bootstrap import bootstraps
from resampling.strategies.monte_carlo import initial_split, initial_time_split, mc_cv
from resampling.strategies.rolling_origin import rolling_origin
from resampling.strategies.sampling import SeedLike
from resampling.strategies.vfold import vfold_cv


def make_resamples(
    universe: RowIndexUniverse,
    config: StrategyConfig,
    seed: SeedLike = None,
) -> ResampleSet:
    """Build the resample set described by a strategy config.

    Args:
        universe: Rows to resample.
        config: One of the strategy config models.
        seed: Random seed or Generator (ignored by rolling_origin).

    Returns:
        ResampleSet produced by the matching strategy.
    """
    if isinstance(config, BootstrapConfig):
        return bootstraps(
            universe, times=config.times, stratify=config.stratify,
            apparent=config.apparent, seed=seed,
        )
    if isinstance(config, VFoldConfig):
        return vfold_cv(
            universe, v=config.v, repeats=config.repeats,
            stratify=config.stratify, seed=seed,
        )
    if isinstance(config, MonteCarloConfig):
        return mc_cv(
            universe, prop=config.prop, times=config.times,
            stratify=config.stratify, seed=seed,
        )
    if isinstance(config, RollingOriginConfig):
        return rolling_origin(
            universe, initial=config.initial, assess=config.assess,
            step=config.step, cumulative=config.cumulative,
        )
    if isinstance(config, HoldoutConfig):
        if config.time_ordered:
            split = initial_time_split(universe, prop=config.prop)
            name = "initial_time_split"
        else:
            split = initial_split(universe, prop=config.prop, stratify=config.stratify, seed=seed)
            name = "initial_split"
        return ResampleSet((split,), name, config.model_dump(exclude={"kind"}), universe)

    raise ConfigurationError(f"Unknown strategy config: {type(config).__name__}")


__all__ = [
    "bootstraps",
    "vfold_cv",
    "mc_cv",
    "rolling_origin",
    "initial_split",
    "initial_time_split",
    "make_resamples",
]
