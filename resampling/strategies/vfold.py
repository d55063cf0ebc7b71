"""
V-fold cross-validation, optionally repeated and stratified.

Rows are shuffled and dealt into ``v`` folds. Fold sizes differ by at most
one row: the first ``total_rows mod v`` folds get the extra row. With
strata, each stratum is shuffled on its own and the strata are dealt in
category order, so every fold also holds each category's share within one row.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from resampling.config import VFoldConfig, build_config
from resampling.data.splits import Split, SplitId
from resampling.data.universe import RowIndexUniverse
from resampling.exceptions import InsufficientRowsError
from resampling.resample_set import ResampleSet
from resampling.strategies.sampling import (
    SeedLike,
    make_rng,
    resolve_strata,
    stratified_permutation,
)

logger = logging.getLogger(__name__)


def assign_folds(
    rng: np.random.Generator,
    n_rows: int,
    v: int,
    strata: Optional[List[np.ndarray]] = None,
) -> np.ndarray:
    """Assign each row position a fold number in ``[0, v)``.

    Returns:
        Array of length ``n_rows``; entry i is the fold of row i.
    """
    order = stratified_permutation(rng, n_rows, strata)
    folds = np.empty(n_rows, dtype=np.int64)

    if strata is None:
        # Contiguous chunks of the shuffle; the remainder goes to the first folds
        sizes = np.full(v, n_rows // v, dtype=np.int64)
        sizes[: n_rows % v] += 1
        folds[order] = np.repeat(np.arange(v), sizes)
    else:
        # Dealing round-robin keeps both fold sizes and per-stratum counts within one row
        folds[order] = np.arange(n_rows) % v

    return folds


def vfold_cv(
    universe: RowIndexUniverse,
    v: int = 10,
    repeats: int = 1,
    stratify: Optional[bool] = None,
    seed: SeedLike = None,
) -> ResampleSet:
    """Create V-fold cross-validation splits.

    For each repeat, each fold in turn is the assessment set and the other
    folds form the analysis set.

    Args:
        universe: Rows to resample.
        v: Number of folds.
        repeats: Number of times the whole partitioning is redrawn.
        stratify: Stratify by the universe's strata (None: if present).
        seed: Random seed or Generator for reproducibility.

    Returns:
        ResampleSet of ``v * repeats`` splits, repeat-major then fold-minor.

    Raises:
        ConfigurationError: If v < 2 or repeats < 1.
        InsufficientRowsError: If there are fewer rows than folds.
        InvalidStrataError: If stratify is True and the universe has no strata.
    """
    cfg = build_config(VFoldConfig, v=v, repeats=repeats, stratify=stratify)
    n_rows = universe.total_rows()

    if cfg.v > n_rows:
        raise InsufficientRowsError(
            f"Cannot create {cfg.v} folds from {n_rows} rows"
        )

    rng = make_rng(seed)
    strata = resolve_strata(universe, cfg.stratify)
    rows = universe.row_indices()

    splits = []
    for r in range(cfg.repeats):
        folds = assign_folds(rng, n_rows, cfg.v, strata)
        for k in range(cfg.v):
            in_fold = folds == k
            splits.append(Split(
                analysis_indices=rows[~in_fold],
                assessment_indices=rows[in_fold],
                universe=universe,
                id=SplitId("fold", k + 1, repeat=r + 1, count=cfg.v, n_repeats=cfg.repeats),
            ))

    logger.debug(
        "Generated %d-fold CV x %d repeats over %d rows (stratified=%s)",
        cfg.v, cfg.repeats, n_rows, strata is not None,
    )

    params = cfg.model_dump(exclude={"kind"})
    params["stratify_by"] = universe.strata_name if strata is not None else None
    return ResampleSet(tuple(splits), "vfold_cv", params, universe)
