"""
Random-sampling helpers shared by the resampling strategies.

All randomness flows through one numpy Generator per strategy call, consumed
in a fixed order (repeats, then strata in category order), so the same seed
always yields the same splits.
"""

from __future__ import annotations

from typing import List, Optional, Union

import numpy as np

from resampling.data.universe import RowIndexUniverse
from resampling.exceptions import InvalidStrataError

SeedLike = Union[int, np.random.Generator, None]


def make_rng(seed: SeedLike) -> np.random.Generator:
    """Return a Generator for an int seed, None, or an existing Generator."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(np.floor(x + 0.5))


def resolve_strata(
    universe: RowIndexUniverse,
    stratify: Optional[bool],
) -> Optional[List[np.ndarray]]:
    """Return the universe's strata (in category order) when stratifying.

    Args:
        universe: Universe to sample from.
        stratify: None stratifies iff the universe has strata; True requires
            strata; False ignores them.

    Returns:
        List of row-index arrays, one per category, or None.

    Raises:
        InvalidStrataError: If stratify is True and the universe has no strata.
    """
    if stratify is False:
        return None
    if not universe.has_strata:
        if stratify:
            raise InvalidStrataError(
                "Stratified sampling requested but the universe has no strata column"
            )
        return None
    return list(universe.categories().values())


def stratified_permutation(
    rng: np.random.Generator,
    n_rows: int,
    strata: Optional[List[np.ndarray]],
) -> np.ndarray:
    """Shuffle row positions, keeping each stratum contiguous.

    Without strata this is a plain permutation of ``[0, n_rows)``.
    """
    if strata is None:
        return rng.permutation(n_rows)
    return np.concatenate([rng.permutation(rows) for rows in strata])


def sample_without_replacement(
    rng: np.random.Generator,
    rows: np.ndarray,
    size: int,
) -> np.ndarray:
    """Draw ``size`` distinct rows."""
    return rng.choice(rows, size=size, replace=False)


def sample_with_replacement(
    rng: np.random.Generator,
    rows: np.ndarray,
    size: int,
) -> np.ndarray:
    """Draw ``size`` rows uniformly with replacement."""
    return rows[rng.integers(0, len(rows), size=size)]


def complement(n_rows: int, drawn: np.ndarray) -> np.ndarray:
    """Sorted row positions in ``[0, n_rows)`` that were never drawn."""
    mask = np.ones(n_rows, dtype=bool)
    mask[drawn] = False
    return np.flatnonzero(mask)
