"""
Tests for quantile_axis(), quantile_axis_skipnan() and median_axis().

Validates output shapes for scalar and vector q, agreement with
numpy.quantile / numpy.nanquantile lane by lane, in-place partitioning
with overwrite_input, and error handling.
"""

import numpy as np
import pytest

from ndstats.core.exceptions import DimensionError, EmptyInputError, InvalidQuantileError
from ndstats.quantile import median_axis, quantile_axis, quantile_axis_skipnan

METHODS = ['lower', 'higher', 'nearest', 'midpoint', 'linear']


class TestQuantileAxisShapes:

    @pytest.mark.parametrize("axis", [0, 1, 2, -1])
    def test_scalar_q_removes_axis(self, rng, axis):
        a = rng.standard_normal((4, 5, 6))
        result = quantile_axis(a, 0.3, axis=axis)
        expected_shape = tuple(s for i, s in enumerate(a.shape) if i != axis % 3)
        assert result.shape == expected_shape

    @pytest.mark.parametrize("axis", [0, 1, 2])
    def test_vector_q_replaces_axis(self, rng, axis):
        a = rng.standard_normal((4, 5, 6))
        result = quantile_axis(a, [0.1, 0.5], axis=axis)
        expected_shape = list(a.shape)
        expected_shape[axis] = 2
        assert result.shape == tuple(expected_shape)

    def test_one_dimensional(self):
        result = quantile_axis(np.array([3.0, 1.0, 2.0]), 0.5, axis=0)
        assert result.shape == ()
        assert float(result) == 2.0

    def test_example_matrix(self):
        a = np.array([[0, 1, 2], [3, 4, 5]])
        np.testing.assert_array_equal(quantile_axis(a, 0.5, axis=0), [1.5, 2.5, 3.5])
        np.testing.assert_array_equal(
            quantile_axis(a, 0.5, axis=1, interpolate='lower'), [1, 4]
        )


class TestQuantileAxisValues:

    @pytest.mark.parametrize("method", METHODS)
    @pytest.mark.parametrize("axis", [0, 1])
    def test_matches_numpy(self, rng, method, axis):
        a = rng.standard_normal((23, 17))
        qs = [0.0, 0.2, 0.5, 0.9, 1.0]
        result = quantile_axis(a, qs, axis=axis, interpolate=method)
        expected = np.quantile(a, qs, axis=axis, method=method)
        # numpy puts the q axis first; ours sits where `axis` was
        np.testing.assert_allclose(result, np.moveaxis(expected, 0, axis))

    def test_each_lane_independent(self, rng):
        a = rng.standard_normal((6, 40))
        result = quantile_axis(a, 0.75, axis=1)
        for i in range(6):
            np.testing.assert_allclose(result[i], np.quantile(a[i], 0.75))

    def test_integer_input_linear_is_float(self):
        a = np.array([[1, 2], [4, 7]])
        result = quantile_axis(a, 0.5, axis=0)
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [2.5, 4.5])

    def test_integer_input_lower_keeps_dtype(self):
        a = np.array([[1, 2], [4, 7]])
        result = quantile_axis(a, 0.5, axis=0, interpolate='lower')
        assert result.dtype == a.dtype

    def test_nan_propagates_for_linear(self):
        a = np.array([[1.0, np.nan, 3.0], [1.0, 2.0, 3.0]])
        result = quantile_axis(a, 1.0, axis=1)
        assert np.isnan(result[0])
        assert result[1] == 3.0

    @pytest.mark.parametrize("method", ['linear', 'midpoint'])
    def test_equal_infinities(self, method):
        low = quantile_axis([[-np.inf, -np.inf, 0.0]], 0.25, axis=1, interpolate=method)
        high = quantile_axis([[1.0, np.inf, np.inf]], 0.75, axis=1, interpolate=method)
        np.testing.assert_array_equal(low, [-np.inf])
        np.testing.assert_array_equal(high, [np.inf])

    def test_boolean_input(self):
        a = np.array([[False, True], [True, True]])
        result = quantile_axis(a, 0.5, axis=1)
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [0.5, 1.0])


class TestOverwriteInput:

    def test_default_leaves_input(self, rng):
        a = rng.standard_normal((5, 30))
        original = a.copy()
        quantile_axis(a, [0.1, 0.9], axis=1)
        np.testing.assert_array_equal(a, original)

    def test_overwrite_partitions_lanes(self, rng):
        a = rng.standard_normal((5, 30))
        original = a.copy()
        result = quantile_axis(a, 0.0, axis=1, overwrite_input=True)
        np.testing.assert_array_equal(result, original.min(axis=1))
        # Lanes are permutations of the originals with the minimum in front
        np.testing.assert_array_equal(np.sort(a, axis=1), np.sort(original, axis=1))
        np.testing.assert_array_equal(a[:, 0], original.min(axis=1))

    def test_overwrite_non_ndarray_is_ignored(self):
        data = [[3.0, 1.0, 2.0]]
        quantile_axis(data, 0.0, axis=1, overwrite_input=True)
        assert data == [[3.0, 1.0, 2.0]]


class TestQuantileAxisErrors:

    def test_empty_axis(self):
        with pytest.raises(EmptyInputError):
            quantile_axis(np.empty((3, 0)), 0.5, axis=1)

    def test_empty_other_axis_is_fine(self):
        result = quantile_axis(np.empty((0, 4)), 0.5, axis=1)
        assert result.shape == (0,)

    def test_bad_axis(self):
        with pytest.raises(DimensionError):
            quantile_axis(np.ones((2, 2)), 0.5, axis=2)

    def test_scalar_input(self):
        with pytest.raises(DimensionError):
            quantile_axis(np.float64(1.0), 0.5, axis=0)

    def test_invalid_q(self):
        with pytest.raises(InvalidQuantileError):
            quantile_axis(np.ones((2, 2)), [0.5, 1.5], axis=0)


class TestSkipNan:

    def test_ignores_nan(self):
        a = np.array([[1.0, np.nan, 3.0, 5.0], [np.nan, 2.0, 4.0, np.nan]])
        result = quantile_axis_skipnan(a, 0.5, axis=1)
        np.testing.assert_array_equal(result, [3.0, 3.0])

    def test_all_nan_lane(self):
        a = np.array([[np.nan, np.nan], [1.0, 2.0]])
        result = quantile_axis_skipnan(a, [0.0, 1.0], axis=1)
        assert np.all(np.isnan(result[0]))
        np.testing.assert_array_equal(result[1], [1.0, 2.0])

    @pytest.mark.filterwarnings("ignore::RuntimeWarning")
    @pytest.mark.parametrize("method", METHODS)
    def test_matches_nanquantile(self, rng, method):
        a = rng.standard_normal((8, 31))
        a[rng.random(a.shape) < 0.2] = np.nan
        a[3] = np.nan
        result = quantile_axis_skipnan(a, [0.23, 0.51, 0.8], axis=1, interpolate=method)
        expected = np.nanquantile(a, [0.23, 0.51, 0.8], axis=1, method=method)
        np.testing.assert_allclose(result, np.moveaxis(expected, 0, 1))

    def test_input_not_modified(self):
        a = np.array([[3.0, np.nan, 1.0]])
        original = a.copy()
        quantile_axis_skipnan(a, 0.5, axis=1)
        np.testing.assert_array_equal(a, original)

    def test_integer_input(self):
        result = quantile_axis_skipnan(np.array([[1, 2, 3]]), 0.5, axis=1)
        np.testing.assert_array_equal(result, [2.0])


class TestMedianAxis:

    def test_matches_numpy(self, rng):
        a = rng.standard_normal((7, 12, 3))
        np.testing.assert_allclose(median_axis(a, axis=1), np.median(a, axis=1))

    def test_even_lanes(self):
        a = np.array([[4.0, 1.0, 3.0, 2.0]])
        np.testing.assert_array_equal(median_axis(a, axis=1), [2.5])
        np.testing.assert_array_equal(median_axis(a, axis=1, interpolate='higher'), [3.0])
