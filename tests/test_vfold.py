"""
Tests for V-fold cross-validation.
"""

import numpy as np
import pandas as pd
import pytest

from resampling import RowIndexUniverse, vfold_cv
from resampling.exceptions import ConfigurationError, InsufficientRowsError

from conftest import universe_of


def fold_sizes(resamples, repeat=1):
    return [
        len(split.assessment_indices)
        for split in resamples
        if split.id.repeat == repeat
    ]


class TestVFoldCV:
    """vfold_cv"""

    def test_repeated_example(self):
        resamples = vfold_cv(universe_of(1470), v=10, repeats=10, seed=42)

        assert len(resamples) == 100
        assert all(len(split.assessment_indices) == 147 for split in resamples)
        assert all(len(split.analysis_indices) == 1323 for split in resamples)

    def test_order_is_repeat_major(self):
        resamples = vfold_cv(universe_of(30), v=3, repeats=2, seed=0)

        assert [split.id.as_dict() for split in resamples] == [
            {"repeat": 1, "fold": 1},
            {"repeat": 1, "fold": 2},
            {"repeat": 1, "fold": 3},
            {"repeat": 2, "fold": 1},
            {"repeat": 2, "fold": 2},
            {"repeat": 2, "fold": 3},
        ]
        assert resamples[4].id.label == "Repeat2/Fold2"

    def test_each_row_assessed_once_per_repeat(self):
        resamples = vfold_cv(universe_of(53), v=7, repeats=3, seed=5)

        for repeat in (1, 2, 3):
            assessed = np.concatenate([
                split.assessment_indices for split in resamples if split.id.repeat == repeat
            ])
            np.testing.assert_array_equal(np.sort(assessed), np.arange(53))

    def test_analysis_is_complement_of_fold(self):
        for split in vfold_cv(universe_of(41), v=4, seed=3):
            assert not np.intersect1d(split.analysis_indices, split.assessment_indices).size
            combined = np.concatenate([split.analysis_indices, split.assessment_indices])
            np.testing.assert_array_equal(np.sort(combined), np.arange(41))

    def test_remainder_goes_to_first_folds(self):
        resamples = vfold_cv(universe_of(23), v=5, seed=11)
        assert fold_sizes(resamples) == [5, 5, 5, 4, 4]

    def test_stratified_remainder_goes_to_first_folds(self, grouped_universe):
        resamples = vfold_cv(grouped_universe, v=3, seed=11)
        assert fold_sizes(resamples) == [7, 7, 6]

    def test_stratified_fold_shares(self):
        groups = np.array(["x"] * 37 + ["y"] * 21 + ["z"] * 12)
        df = pd.DataFrame({"g": np.random.default_rng(9).permutation(groups)})
        universe = RowIndexUniverse.from_frame(df, strata="g")
        v = 5

        resamples = vfold_cv(universe, v=v, repeats=2, seed=21)

        for rows in universe.categories().values():
            expected = len(rows) / v
            for split in resamples:
                in_fold = np.isin(split.assessment_indices, rows).sum()
                assert abs(in_fold - expected) <= 1

    def test_same_seed_same_splits(self):
        first = vfold_cv(universe_of(60), v=6, repeats=2, seed=99)
        second = vfold_cv(universe_of(60), v=6, repeats=2, seed=99)

        for a, b in zip(first, second):
            assert a.assessment_indices.tobytes() == b.assessment_indices.tobytes()
            assert a.analysis_indices.tobytes() == b.analysis_indices.tobytes()

    def test_repeats_differ(self):
        resamples = vfold_cv(universe_of(60), v=6, repeats=2, seed=99)
        assert not np.array_equal(resamples[0].assessment_indices, resamples[6].assessment_indices)

    def test_indices_sorted(self):
        for split in vfold_cv(universe_of(30), v=3, seed=1):
            assert (np.diff(split.assessment_indices) > 0).all()
            assert (np.diff(split.analysis_indices) > 0).all()

    def test_v_too_small(self):
        with pytest.raises(ConfigurationError, match="v"):
            vfold_cv(universe_of(10), v=1)

    def test_repeats_too_small(self):
        with pytest.raises(ConfigurationError, match="repeats"):
            vfold_cv(universe_of(10), v=2, repeats=0)

    def test_more_folds_than_rows(self):
        with pytest.raises(InsufficientRowsError, match="Cannot create 11 folds"):
            vfold_cv(universe_of(10), v=11)

    def test_params_and_description(self, grouped_universe):
        resamples = vfold_cv(grouped_universe, v=5, repeats=2, seed=0)

        assert resamples.strategy_name == "vfold_cv"
        assert resamples.strategy_params["v"] == 5
        assert resamples.description == (
            "5-fold cross-validation repeated 2 times using stratification on 'group'"
        )
