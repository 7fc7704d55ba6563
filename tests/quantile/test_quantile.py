"""
Tests for quantile(), quantiles(), median() and the interpolation policies.

Expected values follow the 0-indexed rank convention r = q * (n - 1) and
are checked against numpy.quantile with the matching method.
"""

import math

import numpy as np
import pytest

from ndstats.core.exceptions import (
    DimensionError,
    EmptyInputError,
    InvalidQuantileError,
    UndefinedOrderError,
    ValidationError,
)
from ndstats.order import strict_less
from ndstats.quantile import (
    INTERPOLATIONS,
    Interpolation,
    get_interpolation,
    median,
    quantile,
    quantiles,
)

METHODS = ['lower', 'higher', 'nearest', 'midpoint', 'linear']


# ═══════════════════════════════════════════════════════════════════════
# Interpolation policies
# ═══════════════════════════════════════════════════════════════════════


class TestInterpolation:

    def test_registry(self):
        assert sorted(INTERPOLATIONS) == sorted(METHODS)

    @pytest.mark.parametrize("method, expected", [
        ('lower', 10.0),
        ('higher', 20.0),
        ('nearest', 10.0),
        ('midpoint', 15.0),
        ('linear', 12.5),
    ])
    def test_combine_quarter(self, method, expected):
        assert get_interpolation(method)(10.0, 20.0, 0.25) == expected

    def test_nearest_rounds_half_up(self):
        assert get_interpolation('nearest')(10.0, 20.0, 0.5) == 20.0
        assert get_interpolation('nearest')(10.0, 20.0, 0.49) == 10.0

    @pytest.mark.parametrize("method", METHODS)
    def test_integral_rank_returns_lower(self, method):
        assert get_interpolation(method)(7.0, 7.0, 0.0) == 7.0

    def test_instance_passthrough(self):
        policy = INTERPOLATIONS['linear']
        assert get_interpolation(policy) is policy

    def test_unknown(self):
        with pytest.raises(ValidationError, match="Unknown interpolation"):
            get_interpolation('cubic')

    def test_custom_policy(self):
        floor_policy = Interpolation(
            'floor', lambda lo, hi, f: lo, lambda f: True, lambda f: False,
        )
        assert quantile([4, 1, 3, 2], 0.9, interpolate=floor_policy) == 3


# ═══════════════════════════════════════════════════════════════════════
# quantile / median
# ═══════════════════════════════════════════════════════════════════════


class TestQuantile:

    def test_median_of_five(self):
        assert quantile([1, 2, 3, 4, 5], 0.5) == 3.0

    def test_first_quartile_of_five(self):
        assert quantile([1, 2, 3, 4, 5], 0.25) == 2.0

    def test_unsorted_input(self):
        assert quantile([5, 3, 1, 4, 2], 0.5) == 3

    @pytest.mark.parametrize("method", METHODS)
    def test_min_and_max(self, rng, method):
        data = rng.standard_normal(101)
        assert quantile(data, 0.0, interpolate=method) == data.min()
        assert quantile(data, 1.0, interpolate=method) == data.max()

    @pytest.mark.parametrize("method", METHODS)
    def test_matches_numpy(self, rng, method):
        data = rng.standard_normal(57)
        for q in (0.0, 0.1, 0.33, 0.5, 0.77, 0.99, 1.0):
            expected = np.quantile(data, q, method=method)
            np.testing.assert_allclose(quantile(data, q, interpolate=method), expected)

    def test_even_count_median(self):
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5
        assert median([4.0, 1.0, 3.0, 2.0], interpolate='lower') == 2.0
        assert median([4.0, 1.0, 3.0, 2.0], interpolate='higher') == 3.0
        assert median([4.0, 1.0, 3.0, 2.0], interpolate='midpoint') == 2.5

    def test_nearest_tie(self):
        # r = 0.5 * 3 = 1.5, ties round up to rank 2
        assert quantile([1.0, 2.0, 3.0, 4.0], 0.5, interpolate='nearest') == 3.0

    def test_single_element(self):
        for q in (0.0, 0.3, 1.0):
            assert quantile([9.5], q) == 9.5

    def test_input_not_modified(self):
        data = np.array([5.0, 1.0, 4.0, 2.0, 3.0])
        original = data.copy()
        quantile(data, 0.5)
        np.testing.assert_array_equal(data, original)

        values = [5, 1, 4, 2, 3]
        quantile(values, 0.5)
        assert values == [5, 1, 4, 2, 3]

    def test_overwrite_input_ndarray(self):
        data = np.array([5.0, 1.0, 4.0, 2.0, 3.0])
        assert quantile(data, 0.5, overwrite_input=True) == 3.0
        assert data[2] == 3.0
        assert sorted(data.tolist()) == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_overwrite_input_list(self):
        data = [5, 1, 4, 2, 3]
        quantile(data, 0.0, overwrite_input=True)
        assert data[0] == 1

    def test_overwrite_readonly_array(self):
        data = np.array([1.0, 2.0])
        data.setflags(write=False)
        with pytest.raises(ValidationError, match="writeable"):
            quantile(data, 0.5, overwrite_input=True)

    def test_nan_sorts_last(self):
        data = [1.0, float('nan'), 2.0, 3.0]
        assert quantile(data, 0.0) == 1.0
        assert math.isnan(quantile(data, 1.0))

    @pytest.mark.parametrize("method", ["linear", "midpoint"])
    def test_equal_infinities(self, method):
        assert quantile([1.0, math.inf, math.inf], 0.75, interpolate=method) == math.inf
        assert quantile([-math.inf, -math.inf, 0.0], 0.25, interpolate=method) == -math.inf

    def test_mixed_infinities_are_nan(self):
        assert math.isnan(quantile([-math.inf, math.inf], 0.5))

    def test_boolean_data(self):
        data = np.array([True, False, True, False])
        assert quantile(data, 0.5) == 0.5
        assert quantile(data, 0.5, interpolate="midpoint") == 0.5
        assert quantile(data, 1.0 / 3.0) == pytest.approx(0.0)
        assert quantile([True, True, False], 0.5) == 1

    def test_strict_comparator_rejects_nan(self):
        with pytest.raises(UndefinedOrderError):
            quantile([1.0, float('nan'), 2.0, 3.0], 0.5, less=strict_less)

    def test_generic_values(self):
        words = ["pear", "apple", "fig", "kiwi", "banana"]
        # sorted: apple banana fig kiwi pear
        assert quantile(words, 0.5, interpolate="lower") == "fig"
        assert quantile(words, 0.75, interpolate="lower") == "kiwi"

    def test_empty(self):
        with pytest.raises(EmptyInputError):
            quantile([], 0.5)
        with pytest.raises(EmptyInputError):
            median(np.array([]))

    @pytest.mark.parametrize("q", [-0.1, 1.1, float('nan')])
    def test_invalid_quantile(self, q):
        with pytest.raises(InvalidQuantileError):
            quantile([1, 2, 3], q)

    def test_invalid_quantile_checked_before_empty(self):
        with pytest.raises(InvalidQuantileError):
            quantile([], 2.0)

    def test_rejects_2d(self):
        with pytest.raises(DimensionError):
            quantile(np.ones((2, 2)), 0.5)
        with pytest.raises(DimensionError):
            quantile([[1, 2], [3, 4]], 0.5)

    def test_rejects_string(self):
        with pytest.raises(ValidationError):
            quantile("abc", 0.5)

    def test_rejects_non_iterable(self):
        with pytest.raises(ValidationError):
            quantile(3.0, 0.5)


class TestQuantiles:

    def test_order_preserved(self):
        result = quantiles([1, 2, 3, 4, 5], [1.0, 0.0, 0.5])
        np.testing.assert_array_equal(result, [5, 1, 3])

    @pytest.mark.parametrize("method", METHODS)
    def test_equivalent_to_repeated_quantile(self, rng, method):
        data = rng.standard_normal(200)
        qs = [0.05, 0.25, 0.5, 0.5, 0.75, 0.95]
        expected = [quantile(data, q, interpolate=method) for q in qs]
        np.testing.assert_array_equal(quantiles(data, qs, interpolate=method), expected)

    def test_returns_ndarray(self):
        result = quantiles(np.arange(10.0), [0.1, 0.9])
        assert isinstance(result, np.ndarray)
        np.testing.assert_allclose(result, [0.9, 8.1])

    def test_empty_qs(self):
        with pytest.raises(EmptyInputError):
            quantiles([1, 2, 3], [])

    def test_one_invalid(self):
        with pytest.raises(InvalidQuantileError):
            quantiles([1, 2, 3], [0.5, -0.5])
