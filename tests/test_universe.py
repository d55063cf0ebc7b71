"""
Tests for dataset handles and RowIndexUniverse.
"""

import numpy as np
import pandas as pd
import pytest

from resampling import ArrayHandle, FrameHandle, RowIndexUniverse
from resampling.exceptions import ConfigurationError, InsufficientRowsError, InvalidStrataError


class TestHandles:
    """FrameHandle / ArrayHandle"""

    def test_frame_take_resets_index(self):
        df = pd.DataFrame({"x": [10, 11, 12]}, index=[5, 6, 7])
        rows = FrameHandle(df).take(np.array([2, 2, 0]))

        assert list(rows["x"]) == [12, 12, 10]
        assert list(rows.index) == [0, 1, 2]

    def test_frame_unknown_column(self):
        handle = FrameHandle(pd.DataFrame({"x": [1, 2]}))
        assert not handle.has_column("y")
        with pytest.raises(KeyError, match="Column not found"):
            handle.column("y")

    def test_array_take(self):
        handle = ArrayHandle(X=np.arange(8).reshape(4, 2), y=np.array([0, 1, 0, 1]))
        rows = handle.take([3, 1])

        assert len(handle) == 4
        np.testing.assert_array_equal(rows["X"], [[6, 7], [2, 3]])
        np.testing.assert_array_equal(rows["y"], [1, 1])

    def test_array_length_mismatch(self):
        with pytest.raises(ValueError, match="equal length"):
            ArrayHandle(X=np.zeros((3, 2)), y=np.zeros(4))

    def test_array_2d_is_not_a_column(self):
        handle = ArrayHandle(X=np.zeros((3, 2)), y=np.zeros(3))
        assert handle.has_column("y")
        assert not handle.has_column("X")


class TestRowIndexUniverse:
    """RowIndexUniverse construction and strata"""

    def test_total_rows(self, grouped_frame):
        universe = RowIndexUniverse.from_frame(grouped_frame)

        assert universe.total_rows() == 20
        assert len(universe) == 20
        assert not universe.has_strata
        np.testing.assert_array_equal(universe.row_indices(), np.arange(20))

    def test_row_indices_read_only(self, grouped_frame):
        universe = RowIndexUniverse.from_frame(grouped_frame)
        with pytest.raises(ValueError):
            universe.row_indices()[0] = 5

    def test_categories_partition_rows(self, grouped_universe, grouped_frame):
        categories = grouped_universe.categories()

        assert list(categories) == ["a", "b", "c"]
        assert [len(rows) for rows in categories.values()] == [8, 7, 5]

        combined = np.sort(np.concatenate(list(categories.values())))
        np.testing.assert_array_equal(combined, np.arange(20))

        for key, rows in categories.items():
            assert (grouped_frame["group"].to_numpy()[rows] == key).all()
            assert (np.diff(rows) > 0).all()

    def test_missing_strata_column(self, grouped_frame):
        with pytest.raises(InvalidStrataError, match="not found"):
            RowIndexUniverse.from_frame(grouped_frame, strata="segment")

    def test_singleton_category(self):
        df = pd.DataFrame({"g": ["a", "a", "b", "b", "c"]})
        with pytest.raises(InvalidStrataError, match="fewer than 2 rows"):
            RowIndexUniverse.from_frame(df, strata="g")

    def test_missing_strata_values(self):
        df = pd.DataFrame({"g": ["a", "a", None, "b", "b"]})
        with pytest.raises(InvalidStrataError, match="missing values"):
            RowIndexUniverse.from_frame(df, strata="g")

    def test_categories_without_strata(self, grouped_frame):
        universe = RowIndexUniverse.from_frame(grouped_frame)
        with pytest.raises(InvalidStrataError, match="without a stratification column"):
            universe.categories()

    def test_empty_dataset(self):
        with pytest.raises(InsufficientRowsError):
            RowIndexUniverse.from_frame(pd.DataFrame({"x": []}))

    def test_numeric_strata_binned_into_quartiles(self):
        df = pd.DataFrame({"price": np.arange(100, dtype=float)})
        universe = RowIndexUniverse.from_frame(df, strata="price")

        sizes = [len(rows) for rows in universe.categories().values()]
        assert sizes == [25, 25, 25, 25]

    def test_binary_labels_not_binned(self):
        universe = RowIndexUniverse.from_arrays(
            strata="y", X=np.zeros((6, 2)), y=np.array([0, 1, 0, 1, 1, 0])
        )

        categories = universe.categories()
        assert list(categories) == [0, 1]
        np.testing.assert_array_equal(categories[1], [1, 3, 4])

    @pytest.mark.parametrize("breaks", [1, 0, -3])
    def test_breaks_must_be_at_least_two(self, breaks):
        df = pd.DataFrame({"price": np.arange(100, dtype=float)})

        with pytest.raises(ConfigurationError, match="breaks"):
            RowIndexUniverse.from_frame(df, strata="price", breaks=breaks)

    def test_breaks_checked_without_strata(self):
        with pytest.raises(ConfigurationError, match="breaks"):
            RowIndexUniverse.from_frame(pd.DataFrame({"x": [1, 2, 3]}), breaks=1)
