"""
Apply a function to every split of a resample set and collect the results.

Splits are independent, so the work can run on a thread pool. Results are
always returned in split order, whatever order the workers finish in.

Error policies:
- "fail_fast": the first failure cancels pending splits and raises
  SplitExecutionError chained to the original exception.
- "collect": every split runs; failures are recorded per split next to the
  successes and never dropped.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Literal, Optional, Sequence

from tqdm import tqdm

from resampling.data.splits import Split, SplitId
from resampling.exceptions import ConfigurationError, SplitExecutionError

logger = logging.getLogger(__name__)

ErrorPolicy = Literal["fail_fast", "collect"]
ERROR_POLICIES = ("fail_fast", "collect")


@dataclass(frozen=True)
class SplitOutcome:
    """Result of running the per-split function on one split."""

    split_id: SplitId
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        """Whether the function returned normally."""
        return self.error is None


class MapResult(Sequence[SplitOutcome]):
    """Per-split outcomes in split order."""

    def __init__(self, outcomes: Iterable[SplitOutcome]):
        self._outcomes: List[SplitOutcome] = list(outcomes)

    def __getitem__(self, i):
        return self._outcomes[i]

    def __len__(self) -> int:
        return len(self._outcomes)

    def __repr__(self) -> str:
        return f"MapResult(n={len(self)}, failed={len(self.errors)})"

    @property
    def ok(self) -> bool:
        """Whether every split succeeded."""
        return all(o.ok for o in self._outcomes)

    @property
    def errors(self) -> List[SplitOutcome]:
        """Outcomes of failed splits."""
        return [o for o in self._outcomes if not o.ok]

    def values(self) -> List[Any]:
        """Return values in split order.

        Raises:
            SplitExecutionError: If any split failed.
        """
        failed = self.errors
        if failed:
            first = failed[0]
            raise SplitExecutionError(
                f"{len(failed)} of {len(self)} splits failed; first was "
                f"{first.split_id.label}: {first.error!r}",
                split_id=first.split_id,
                failures=[(o.split_id, o.error) for o in failed],
            ) from first.error
        return [o.value for o in self._outcomes]

    def successful_values(self) -> List[Any]:
        """Return values of the splits that succeeded, in split order."""
        return [o.value for o in self._outcomes if o.ok]


def resolve_n_jobs(n_jobs: int) -> int:
    """Turn an n_jobs setting into a worker count (-1 means every CPU)."""
    if n_jobs == -1:
        return os.cpu_count() or 1
    if n_jobs < 1:
        raise ConfigurationError(f"n_jobs must be -1 or >= 1, got {n_jobs}")
    return n_jobs


def _failure(split: Split, err: BaseException) -> SplitExecutionError:
    return SplitExecutionError(
        f"Split {split.id.label} failed: {err!r}",
        split_id=split.id,
        failures=[(split.id, err)],
    )


def _run_sequential(
    splits: List[Split],
    fn: Callable[[Split], Any],
    on_error: str,
    pbar: tqdm,
) -> List[SplitOutcome]:
    outcomes: List[SplitOutcome] = []

    for split in splits:
        try:
            value = fn(split)
        except Exception as err:
            if on_error == "fail_fast":
                raise _failure(split, err) from err
            logger.warning("Split %s failed: %r", split.id.label, err)
            outcomes.append(SplitOutcome(split.id, error=err))
        else:
            outcomes.append(SplitOutcome(split.id, value=value))
        pbar.update(1)

    return outcomes


def _run_parallel(
    splits: List[Split],
    fn: Callable[[Split], Any],
    on_error: str,
    n_workers: int,
    pbar: tqdm,
) -> List[SplitOutcome]:
    outcomes: List[Optional[SplitOutcome]] = [None] * len(splits)

    with ThreadPoolExecutor(max_workers=n_workers) as executor:
        futures = {executor.submit(fn, split): i for i, split in enumerate(splits)}
        pending = set(futures)

        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)

            # Record in submission order so fail-fast reports the earliest split
            for future in sorted(done, key=futures.__getitem__):
                i = futures[future]
                split = splits[i]
                err = future.exception()

                if err is None:
                    outcomes[i] = SplitOutcome(split.id, value=future.result())
                elif not isinstance(err, Exception):
                    raise err
                elif on_error == "fail_fast":
                    # Running workers finish; nothing new is started
                    executor.shutdown(wait=False, cancel_futures=True)
                    logger.info(
                        "Split %s failed, cancelled %d pending splits",
                        split.id.label, sum(f.cancelled() for f in pending),
                    )
                    raise _failure(split, err) from err
                else:
                    logger.warning("Split %s failed: %r", split.id.label, err)
                    outcomes[i] = SplitOutcome(split.id, error=err)
                pbar.update(1)

    return [o for o in outcomes if o is not None]


def map_splits(
    splits: Iterable[Split],
    fn: Callable[[Split], Any],
    n_jobs: int = 1,
    on_error: ErrorPolicy = "fail_fast",
    show_progress: bool = False,
    desc: str = "Splits",
) -> MapResult:
    """Apply ``fn`` to every split and collect the results in split order.

    Args:
        splits: Splits to evaluate.
        fn: Per-split function. Must not mutate the split or its dataset.
        n_jobs: Number of worker threads; 1 runs sequentially, -1 uses
            every CPU.
        on_error: "fail_fast" or "collect".
        show_progress: Whether to show a progress bar.
        desc: Progress bar label.

    Returns:
        MapResult with one outcome per split.

    Raises:
        SplitExecutionError: Under "fail_fast", when a split fails.
        ConfigurationError: If n_jobs or on_error is invalid.
    """
    if on_error not in ERROR_POLICIES:
        raise ConfigurationError(f"on_error must be one of {ERROR_POLICIES}, got {on_error!r}")
    n_workers = resolve_n_jobs(n_jobs)
    splits = list(splits)

    logger.debug(
        "Mapping %s over %d splits (workers=%d, on_error=%s)",
        getattr(fn, "__name__", repr(fn)), len(splits), n_workers, on_error,
    )

    pbar = tqdm(total=len(splits), desc=desc, disable=not show_progress)
    try:
        if n_workers == 1 or len(splits) <= 1:
            outcomes = _run_sequential(splits, fn, on_error, pbar)
        else:
            outcomes = _run_parallel(splits, fn, on_error, n_workers, pbar)
    finally:
        pbar.close()

    result = MapResult(outcomes)
    if result.errors:
        logger.info("%d of %d splits failed", len(result.errors), len(result))
    return result
