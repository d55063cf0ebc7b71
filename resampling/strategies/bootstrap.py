"""
Bootstrap resampling.

Each resample draws ``total_rows`` rows uniformly with replacement as the
analysis set; the rows never drawn (out-of-bag) form the assessment set.
When stratified, every stratum is resampled to its own size, so stratum
proportions are preserved exactly in the analysis set.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from resampling.config import BootstrapConfig, build_config
from resampling.data.splits import Split, SplitId
from resampling.data.universe import RowIndexUniverse
from resampling.resample_set import ResampleSet
from resampling.strategies.sampling import (
    SeedLike,
    complement,
    make_rng,
    resolve_strata,
    sample_with_replacement,
)

logger = logging.getLogger(__name__)


def _draw(
    rng: np.random.Generator,
    universe: RowIndexUniverse,
    strata: Optional[List[np.ndarray]],
) -> np.ndarray:
    if strata is None:
        return sample_with_replacement(rng, universe.row_indices(), universe.total_rows())
    return np.concatenate([
        sample_with_replacement(rng, rows, len(rows)) for rows in strata
    ])


def bootstraps(
    universe: RowIndexUniverse,
    times: int = 25,
    stratify: Optional[bool] = None,
    apparent: bool = False,
    seed: SeedLike = None,
) -> ResampleSet:
    """Create bootstrap resamples.

    Args:
        universe: Rows to resample.
        times: Number of bootstrap resamples.
        stratify: Stratify by the universe's strata (None: if present).
        apparent: Append a split whose analysis and assessment sets are both
            the full data.
        seed: Random seed or Generator for reproducibility.

    Returns:
        ResampleSet of ``times`` splits (``times + 1`` with ``apparent``).

    Raises:
        ConfigurationError: If times < 1.
        InvalidStrataError: If stratify is True and the universe has no strata.
    """
    cfg = build_config(BootstrapConfig, times=times, stratify=stratify, apparent=apparent)
    rng = make_rng(seed)
    strata = resolve_strata(universe, cfg.stratify)
    n_rows = universe.total_rows()

    splits = []
    for b in range(cfg.times):
        analysis = _draw(rng, universe, strata)
        # Out-of-bag rows; empty only if every row was drawn
        assessment = complement(n_rows, analysis)
        splits.append(Split(
            analysis_indices=analysis,
            assessment_indices=assessment,
            universe=universe,
            id=SplitId("resample", b + 1, count=cfg.times, prefix="Bootstrap"),
        ))

    if cfg.apparent:
        everything = universe.row_indices()
        splits.append(Split(everything, everything, universe, SplitId("apparent", 1)))

    logger.debug(
        "Generated %d bootstrap resamples over %d rows (stratified=%s)",
        cfg.times, n_rows, strata is not None,
    )

    params = cfg.model_dump(exclude={"kind"})
    params["stratify_by"] = universe.strata_name if strata is not None else None
    return ResampleSet(tuple(splits), "bootstraps", params, universe)
