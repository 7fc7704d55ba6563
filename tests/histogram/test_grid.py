"""
Tests for Grid and GridBuilder.
"""

import numpy as np
import pytest

from ndstats.core.exceptions import (
    DegenerateSampleError,
    DimensionError,
    DimensionMismatchError,
    EmptyInputError,
    OutOfRangeError,
    ValidationError,
)
from ndstats.histogram import Bins, Edges, Grid, GridBuilder, Sqrt, Sturges


@pytest.fixture
def grid_2d():
    return Grid([Edges([0, 1, 2, 3]), Edges([0, 10, 20])])


class TestGrid:

    def test_one_dimensional_example(self):
        grid = Grid([Edges([0, 1, 2, 3])])
        assert grid.index_of([1.5]) == (1,)
        assert grid.index_of([3.0]) == (2,)
        with pytest.raises(OutOfRangeError):
            grid.index_of([3.1])

    def test_scalar_point_for_1d(self):
        assert Grid([Edges([0, 1, 2])]).index_of(0.5) == (0,)

    def test_shape_and_ndim(self, grid_2d):
        assert grid_2d.ndim == 2
        assert grid_2d.shape == (3, 2)
        assert all(isinstance(b, Bins) for b in grid_2d.projections)

    def test_accepts_mixed_projections(self):
        grid = Grid([Bins([0, 1]), Edges([0, 2]), [0, 3]])
        assert grid.shape == (1, 1, 1)

    def test_index_of_2d(self, grid_2d):
        assert grid_2d.index_of([0.0, 0.0]) == (0, 0)
        assert grid_2d.index_of([2.5, 15.0]) == (2, 1)
        assert grid_2d.index_of(np.array([3.0, 20.0])) == (2, 1)

    def test_out_of_range_reports_axis(self, grid_2d):
        with pytest.raises(OutOfRangeError) as exc_info:
            grid_2d.index_of([1.0, 25.0])
        assert exc_info.value.axis == 1
        assert exc_info.value.point == (1.0, 25.0)

    def test_nan_is_out_of_range(self, grid_2d):
        with pytest.raises(OutOfRangeError) as exc_info:
            grid_2d.index_of([np.nan, 5.0])
        assert exc_info.value.axis == 0

    def test_wrong_number_of_coordinates(self, grid_2d):
        with pytest.raises(DimensionMismatchError) as exc_info:
            grid_2d.index_of([1.0, 2.0, 3.0])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3

    def test_point_not_1d(self, grid_2d):
        with pytest.raises(DimensionError):
            grid_2d.index_of([[1.0, 2.0]])

    def test_index_array(self, grid_2d):
        points = np.array([[0.0, 0.0], [2.5, 15.0], [3.0, 20.0], [1.0, 25.0], [np.nan, 5.0]])
        index, inside = grid_2d.index_array(points)
        np.testing.assert_array_equal(inside, [True, True, True, False, False])
        np.testing.assert_array_equal(index[:3], [[0, 0], [2, 1], [2, 1]])
        assert index[3, 1] == -1
        assert index[4, 0] == -1

    def test_index_array_wrong_columns(self, grid_2d):
        with pytest.raises(DimensionMismatchError):
            grid_2d.index_array(np.zeros((4, 3)))
        with pytest.raises(DimensionError):
            grid_2d.index_array(np.zeros(4))

    def test_range_of(self, grid_2d):
        assert grid_2d.range_of((1, 0)) == ((1.0, 2.0), (0.0, 10.0))

    def test_range_of_errors(self, grid_2d):
        with pytest.raises(DimensionMismatchError):
            grid_2d.range_of((1,))
        with pytest.raises(IndexError):
            grid_2d.range_of((0, 2))

    def test_point_within_its_bin(self, rng, grid_2d):
        for point in rng.uniform([0, 0], [3, 20], size=(100, 2)):
            ranges = grid_2d.range_of(grid_2d.index_of(point))
            for value, (lo, hi) in zip(point, ranges):
                assert lo <= value <= hi

    def test_equality(self, grid_2d):
        assert grid_2d == Grid([[0, 1, 2, 3], [0, 10, 20]])
        assert grid_2d != Grid([[0, 1, 2, 3]])
        assert hash(grid_2d) == hash(Grid([[0, 1, 2, 3], [0, 10, 20]]))

    def test_empty(self):
        with pytest.raises(ValidationError):
            Grid([])


class TestGridBuilder:

    def test_single_rule(self, rng):
        points = rng.standard_normal((200, 3))
        grid = GridBuilder.from_array(points, 'sturges').build()
        assert grid.ndim == 3
        assert grid.shape == (9, 9, 9)

    def test_rule_per_dimension(self, rng):
        points = rng.standard_normal((100, 2))
        builder = GridBuilder.from_array(points, ['sturges', 'sqrt'])
        assert isinstance(builder.strategies[0], Sturges)
        assert isinstance(builder.strategies[1], Sqrt)
        assert builder.build().shape == (8, 10)

    def test_every_point_in_grid(self, rng):
        points = rng.standard_normal((150, 2))
        grid = GridBuilder.from_array(points).build()
        for point in points:
            grid.index_of(point)

    def test_rule_count_mismatch(self, rng):
        with pytest.raises(DimensionMismatchError):
            GridBuilder.from_array(rng.standard_normal((10, 2)), ['fd'])

    def test_rejects_1d(self):
        with pytest.raises(DimensionError):
            GridBuilder.from_array([1.0, 2.0, 3.0])

    def test_rejects_empty(self):
        with pytest.raises(EmptyInputError):
            GridBuilder.from_array(np.empty((0, 2)))

    def test_degenerate_column(self):
        points = np.column_stack([np.arange(10.0), np.ones(10)])
        with pytest.warns(RuntimeWarning):
            grid = GridBuilder.from_array(points, 'fd').build()
        assert grid.shape[1] == 1
        with pytest.raises(DegenerateSampleError):
            GridBuilder.from_array(points, 'fd', require_positive_width=True)

    def test_no_strategies(self):
        with pytest.raises(ValidationError):
            GridBuilder([])
