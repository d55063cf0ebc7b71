"""
Monte-Carlo cross-validation and single training/testing splits.

Each iteration draws a fixed fraction of rows without replacement as the
analysis set; the remaining rows are the assessment set. Iterations are
independent, so assessment sets may overlap across resamples.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from resampling.config import HoldoutConfig, MonteCarloConfig, build_config
from resampling.data.splits import Split, SplitId
from resampling.data.universe import RowIndexUniverse
from resampling.exceptions import InsufficientRowsError
from resampling.resample_set import ResampleSet
from resampling.strategies.sampling import (
    SeedLike,
    complement,
    make_rng,
    resolve_strata,
    round_half_up,
    sample_without_replacement,
)

logger = logging.getLogger(__name__)


def analysis_size(n_rows: int, prop: float) -> int:
    """Number of analysis rows for an unstratified draw.

    Raises:
        InsufficientRowsError: If the draw would leave either side empty.
    """
    size = round_half_up(prop * n_rows)
    if size < 1 or size >= n_rows:
        raise InsufficientRowsError(
            f"prop={prop} of {n_rows} rows gives {size} analysis rows; "
            "both analysis and assessment sets need at least one row"
        )
    return size


def stratum_size(n_rows: int, prop: float) -> int:
    """Number of analysis rows drawn from one stratum, at least one left on each side."""
    return min(max(round_half_up(prop * n_rows), 1), n_rows - 1)


def draw_partition(
    rng: np.random.Generator,
    universe: RowIndexUniverse,
    prop: float,
    strata: Optional[List[np.ndarray]],
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw one (analysis, assessment) pair; both sorted."""
    n_rows = universe.total_rows()

    if strata is None:
        drawn = sample_without_replacement(
            rng, universe.row_indices(), analysis_size(n_rows, prop)
        )
    else:
        drawn = np.concatenate([
            sample_without_replacement(rng, rows, stratum_size(len(rows), prop))
            for rows in strata
        ])

    return np.sort(drawn), complement(n_rows, drawn)


def mc_cv(
    universe: RowIndexUniverse,
    prop: float = 0.75,
    times: int = 25,
    stratify: Optional[bool] = None,
    seed: SeedLike = None,
) -> ResampleSet:
    """Create Monte-Carlo cross-validation splits.

    Args:
        universe: Rows to resample.
        prop: Fraction of rows in each analysis set, in (0, 1).
        times: Number of resamples.
        stratify: Stratify by the universe's strata (None: if present).
        seed: Random seed or Generator for reproducibility.

    Returns:
        ResampleSet of ``times`` splits.

    Raises:
        ConfigurationError: If prop is outside (0, 1) or times < 1.
        InsufficientRowsError: If prop leaves an empty analysis or assessment set.
        InvalidStrataError: If stratify is True and the universe has no strata.
    """
    cfg = build_config(MonteCarloConfig, prop=prop, times=times, stratify=stratify)
    rng = make_rng(seed)
    strata = resolve_strata(universe, cfg.stratify)

    if strata is None:
        # Validate before drawing anything
        analysis_size(universe.total_rows(), cfg.prop)

    splits = []
    for i in range(cfg.times):
        analysis, assessment = draw_partition(rng, universe, cfg.prop, strata)
        splits.append(Split(
            analysis_indices=analysis,
            assessment_indices=assessment,
            universe=universe,
            id=SplitId("resample", i + 1, count=cfg.times),
        ))

    logger.debug(
        "Generated %d Monte-Carlo resamples (prop=%.3f) over %d rows",
        cfg.times, cfg.prop, universe.total_rows(),
    )

    params = cfg.model_dump(exclude={"kind"})
    params["stratify_by"] = universe.strata_name if strata is not None else None
    return ResampleSet(tuple(splits), "mc_cv", params, universe)


def initial_split(
    universe: RowIndexUniverse,
    prop: float = 0.75,
    stratify: Optional[bool] = None,
    seed: SeedLike = None,
) -> Split:
    """Split the data once into training (analysis) and testing (assessment) rows.

    Uses the same allocation as one Monte-Carlo iteration.
    """
    cfg = build_config(HoldoutConfig, prop=prop, stratify=stratify)
    rng = make_rng(seed)
    strata = resolve_strata(universe, cfg.stratify)

    analysis, assessment = draw_partition(rng, universe, cfg.prop, strata)
    return Split(analysis, assessment, universe, SplitId("holdout", 1))


def initial_time_split(
    universe: RowIndexUniverse,
    prop: float = 0.75,
) -> Split:
    """Split time-ordered data: the first ``floor(prop * total_rows)`` rows are training.

    Raises:
        InsufficientRowsError: If either side would be empty.
    """
    cfg = build_config(HoldoutConfig, prop=prop, time_ordered=True)
    n_rows = universe.total_rows()
    n_train = int(np.floor(cfg.prop * n_rows))

    if n_train < 1 or n_train >= n_rows:
        raise InsufficientRowsError(
            f"prop={cfg.prop} of {n_rows} rows gives {n_train} training rows; "
            "both sides need at least one row"
        )

    rows = universe.row_indices()
    return Split(rows[:n_train], rows[n_train:], universe, SplitId("holdout", 1))
