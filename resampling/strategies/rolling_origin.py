"""
Rolling-origin resampling for time-ordered data.

Row order is time order. The assessment window always follows the analysis
window, and both advance by ``step`` rows per split. With ``cumulative``,
the analysis window keeps its origin at row 0 and grows; otherwise it slides
with constant width ``initial``.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from resampling.config import RollingOriginConfig, build_config
from resampling.data.splits import Split, SplitId
from resampling.data.universe import RowIndexUniverse
from resampling.exceptions import InsufficientRowsError
from resampling.resample_set import ResampleSet

logger = logging.getLogger(__name__)


def window_bounds(
    n_rows: int,
    initial: int,
    assess: int,
    step: int,
    cumulative: bool,
) -> Iterator[Tuple[int, int, int, int]]:
    """Yield (analysis_start, analysis_stop, assess_start, assess_stop) per slice.

    Stops before the assessment window would run past ``n_rows``.
    """
    start = 0
    while start + initial + assess <= n_rows:
        origin = 0 if cumulative else start
        yield origin, start + initial, start + initial, start + initial + assess
        start += step


def rolling_origin(
    universe: RowIndexUniverse,
    initial: int,
    assess: int,
    step: Optional[int] = None,
    cumulative: bool = True,
) -> ResampleSet:
    """Create rolling-origin forecast splits.

    Args:
        universe: Time-ordered rows.
        initial: Rows in the first analysis window.
        assess: Rows in each assessment window.
        step: Rows the windows advance per split (defaults to ``assess``).
        cumulative: Grow the analysis window from row 0 instead of sliding it.

    Returns:
        ResampleSet of slices in time order.

    Raises:
        ConfigurationError: If initial, assess or step is < 1.
        InsufficientRowsError: If the first analysis + assessment window does
            not fit in the data.
    """
    cfg = build_config(
        RollingOriginConfig,
        initial=initial,
        assess=assess,
        step=step,
        cumulative=cumulative,
    )
    n_rows = universe.total_rows()

    if cfg.initial + cfg.assess > n_rows:
        raise InsufficientRowsError(
            f"initial={cfg.initial} + assess={cfg.assess} exceeds the {n_rows} available rows"
        )

    rows = universe.row_indices()
    bounds = list(window_bounds(n_rows, cfg.initial, cfg.assess, cfg.effective_step, cfg.cumulative))

    splits = [
        Split(
            analysis_indices=rows[a0:a1],
            assessment_indices=rows[b0:b1],
            universe=universe,
            id=SplitId("slice", i + 1, count=len(bounds)),
        )
        for i, (a0, a1, b0, b1) in enumerate(bounds)
    ]

    logger.debug(
        "Generated %d rolling-origin slices over %d rows (initial=%d, assess=%d, step=%d, cumulative=%s)",
        len(splits), n_rows, cfg.initial, cfg.assess, cfg.effective_step, cfg.cumulative,
    )

    params = cfg.model_dump(exclude={"kind"})
    params["step"] = cfg.effective_step
    return ResampleSet(tuple(splits), "rolling_origin", params, universe)
