"""
Resample set: the ordered collection of splits produced by one strategy.

Order is significant (repeat-major, then fold/resample/slice) and stable for
a given seed. The set is immutable; map() applies a function to every split
and returns the results in the same order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Sequence, Tuple

import pandas as pd

from resampling.data.splits import Split, SplitId
from resampling.data.universe import RowIndexUniverse
from resampling.evaluation.driver import ErrorPolicy, MapResult, map_splits

_DESCRIPTIONS = {
    "bootstraps": "Bootstrap sampling",
    "vfold_cv": "{v}-fold cross-validation",
    "mc_cv": "Monte Carlo cross-validation ({prop}/{rest}) with {times} resamples",
    "rolling_origin": "Rolling origin forecast resampling",
    "initial_split": "Training/testing split",
    "initial_time_split": "Time-ordered training/testing split",
}


@dataclass(frozen=True, eq=False)
class ResampleSet(Sequence[Split]):
    """Ordered, immutable collection of splits plus the strategy that made them.

    Attributes:
        splits: Splits in generation order.
        strategy_name: Name of the strategy function, e.g. "vfold_cv".
        strategy_params: Strategy configuration (read-only).
        universe: Universe every split indexes into.
    """

    splits: Tuple[Split, ...]
    strategy_name: str
    strategy_params: Mapping[str, Any] = field(default_factory=dict)
    universe: RowIndexUniverse = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "splits", tuple(self.splits))
        object.__setattr__(self, "strategy_params", MappingProxyType(dict(self.strategy_params)))

    def __getitem__(self, i):
        return self.splits[i]

    def __len__(self) -> int:
        return len(self.splits)

    def __iter__(self):
        return iter(self.splits)

    def __repr__(self) -> str:
        return f"# {self.description}\n# {len(self)} splits over {self._n_rows()} rows"

    def _n_rows(self) -> int:
        if self.universe is not None:
            return self.universe.total_rows()
        return self.splits[0].universe.total_rows() if self.splits else 0

    @property
    def description(self) -> str:
        """One-line description of the strategy, e.g. "10-fold cross-validation repeated 5 times"."""
        params = dict(self.strategy_params)
        template = _DESCRIPTIONS.get(self.strategy_name, self.strategy_name)

        if self.strategy_name == "mc_cv":
            prop = params.get("prop", 0.75)
            params.update(prop=f"{prop:.2f}", rest=f"{1 - prop:.2f}")

        text = template.format(**params)
        if params.get("repeats", 1) > 1:
            text += f" repeated {params['repeats']} times"
        if params.get("stratify_by"):
            text += f" using stratification on {params['stratify_by']!r}"
        return text

    @property
    def ids(self) -> List[SplitId]:
        """Split ids in order."""
        return [split.id for split in self.splits]

    def map(
        self,
        fn: Callable[[Split], Any],
        n_jobs: int = 1,
        on_error: ErrorPolicy = "fail_fast",
        show_progress: bool = False,
    ) -> MapResult:
        """Apply ``fn`` to every split; results come back in split order.

        See resampling.evaluation.driver.map_splits for the parameters.
        """
        return map_splits(
            self.splits,
            fn,
            n_jobs=n_jobs,
            on_error=on_error,
            show_progress=show_progress,
            desc=self.strategy_name,
        )

    def summarize(
        self,
        fn: Callable[[Split], Any],
        aggregate: Callable[[List[Any]], Any],
        **map_kwargs: Any,
    ) -> Any:
        """Map ``fn`` over all splits and reduce the ordered values with ``aggregate``.

        Raises:
            SplitExecutionError: If any split failed.
        """
        return aggregate(self.map(fn, **map_kwargs).values())

    def to_frame(self) -> pd.DataFrame:
        """One row per split: id columns, label and partition sizes."""
        rows = []
        for split in self.splits:
            n_analysis, n_assessment, _ = split.sizes()
            rows.append({
                "label": split.id.label,
                "kind": split.id.kind,
                **split.id.as_dict(),
                "n_analysis": n_analysis,
                "n_assessment": n_assessment,
            })
        return pd.DataFrame(rows)
