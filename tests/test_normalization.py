import numpy as np
import pytest

from safety_routing.algorithms.scoring.normalization import DEGENERATE_VALUE, QuantileNormalizer


def test_quantiles_use_floor_index():
    normalizer = QuantileNormalizer(list(range(1, 21)))

    # n = 20: floor(20 * 0.05) = 1, floor(20 * 0.95) = 19
    assert normalizer.q_low_value == 2
    assert normalizer.q_high_value == 20


def test_values_are_scaled_and_clamped():
    normalizer = QuantileNormalizer(list(range(1, 21)))

    assert normalizer(2) == 0.0
    assert normalizer(20) == 1.0
    assert normalizer(11) == pytest.approx(0.5)
    assert normalizer(1) == 0.0
    assert normalizer(100) == 1.0


def test_input_order_does_not_matter():
    values = [5.0, 1.0, 3.0, 4.0, 2.0]
    a = QuantileNormalizer(values)
    b = QuantileNormalizer(sorted(values))
    assert (a.q_low_value, a.q_high_value) == (b.q_low_value, b.q_high_value)


def test_high_index_is_clipped_to_last_element():
    normalizer = QuantileNormalizer([1.0, 2.0], q_low=0.0, q_high=1.0)
    assert normalizer.q_high_value == 2.0


def test_empty_distribution_is_neutral():
    normalizer = QuantileNormalizer([])
    assert normalizer.is_degenerate
    assert normalizer(3.7) == DEGENERATE_VALUE == 0.5


def test_zero_variance_is_neutral():
    normalizer = QuantileNormalizer([4.0, 4.0, 4.0])
    assert normalizer.is_degenerate
    assert normalizer(4.0) == 0.5
    assert normalizer(10.0) == 0.5


def test_single_value_is_neutral():
    assert QuantileNormalizer([0.0])(0.0) == 0.5


def test_normalize_array_matches_scalar_calls():
    values = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0]
    normalizer = QuantileNormalizer(values)

    array = normalizer.normalize_array(values)

    assert array.shape == (10,)
    for value, normalized in zip(values, array):
        assert normalized == pytest.approx(normalizer(value))


def test_normalize_array_degenerate():
    normalizer = QuantileNormalizer([1.0, 1.0])
    assert np.all(normalizer.normalize_array([0.0, 1.0, 2.0]) == 0.5)


def test_statistics():
    stats = QuantileNormalizer([1.0, 2.0, 3.0]).get_statistics()
    assert stats['count'] == 3
    assert stats['is_degenerate'] is False
