"""
Tests for Monte-Carlo cross-validation and single training/testing splits.
"""

import numpy as np
import pytest

from resampling import initial_split, initial_time_split, mc_cv
from resampling.exceptions import ConfigurationError, InsufficientRowsError

from conftest import universe_of


class TestMonteCarloCV:
    """mc_cv"""

    def test_sizes_and_disjointness(self):
        resamples = mc_cv(universe_of(100), prop=0.75, times=10, seed=3)

        assert len(resamples) == 10
        for split in resamples:
            assert split.sizes() == (75, 25, 100)
            assert not np.intersect1d(split.analysis_indices, split.assessment_indices).size
            combined = np.concatenate([split.analysis_indices, split.assessment_indices])
            np.testing.assert_array_equal(np.sort(combined), np.arange(100))

    def test_half_rounds_up(self):
        split = mc_cv(universe_of(10), prop=0.25, times=1, seed=0)[0]
        assert split.sizes() == (3, 7, 10)

    def test_stratified_allocation(self, grouped_universe):
        categories = grouped_universe.categories()

        for split in mc_cv(grouped_universe, prop=0.75, times=5, seed=4):
            # a: 8 -> 6, b: 7 -> 5.25 -> 5, c: 5 -> 3.75 -> 4
            counts = [np.isin(split.analysis_indices, rows).sum() for rows in categories.values()]
            assert counts == [6, 5, 4]
            assert len(split.assessment_indices) == 5

    def test_stratified_keeps_a_row_on_each_side(self, grouped_universe):
        categories = grouped_universe.categories()

        for split in mc_cv(grouped_universe, prop=0.01, times=3, seed=4):
            for rows in categories.values():
                assert np.isin(split.analysis_indices, rows).sum() == 1

    def test_iterations_are_independent(self):
        resamples = mc_cv(universe_of(50), prop=0.5, times=2, seed=8)
        assert not np.array_equal(resamples[0].analysis_indices, resamples[1].analysis_indices)

    def test_same_seed_same_splits(self):
        first = mc_cv(universe_of(50), times=4, seed=17)
        second = mc_cv(universe_of(50), times=4, seed=17)

        for a, b in zip(first, second):
            assert a.analysis_indices.tobytes() == b.analysis_indices.tobytes()

    def test_ids(self):
        resamples = mc_cv(universe_of(20), times=25, seed=0)
        assert resamples[0].id.label == "Resample01"
        assert resamples[24].id.as_dict() == {"resample": 25}

    @pytest.mark.parametrize("prop", [0.0, 1.0, -0.5, 1.5])
    def test_prop_out_of_range(self, prop):
        with pytest.raises(ConfigurationError, match="prop"):
            mc_cv(universe_of(20), prop=prop)

    def test_times_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="times"):
            mc_cv(universe_of(20), times=0)

    def test_empty_analysis_set(self):
        with pytest.raises(InsufficientRowsError, match="at least one row"):
            mc_cv(universe_of(2), prop=0.1)

    def test_description(self):
        resamples = mc_cv(universe_of(20), prop=0.8, times=5, seed=0)
        assert resamples.description == "Monte Carlo cross-validation (0.80/0.20) with 5 resamples"


class TestInitialSplit:
    """initial_split / initial_time_split"""

    def test_initial_split(self):
        split = initial_split(universe_of(40), prop=0.75, seed=1)

        assert split.sizes() == (30, 10, 40)
        assert split.id.label == "Split"
        assert not np.intersect1d(split.analysis_indices, split.assessment_indices).size

    def test_initial_split_stratified(self, grouped_universe):
        split = initial_split(grouped_universe, prop=0.5, seed=1)
        counts = [
            np.isin(split.analysis_indices, rows).sum()
            for rows in grouped_universe.categories().values()
        ]
        # a: 8 -> 4, b: 7 -> 3.5 -> 4, c: 5 -> 2.5 -> 3
        assert counts == [4, 4, 3]

    def test_initial_time_split(self):
        split = initial_time_split(universe_of(20), prop=0.75)

        np.testing.assert_array_equal(split.analysis_indices, np.arange(15))
        np.testing.assert_array_equal(split.assessment_indices, np.arange(15, 20))

    def test_initial_time_split_too_small(self):
        with pytest.raises(InsufficientRowsError):
            initial_time_split(universe_of(3), prop=0.2)
