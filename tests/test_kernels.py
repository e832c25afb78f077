"""Tests for the displacement kernels."""

import pytest
import numpy as np
from py_crinkle.core.strip import Strip, create_strip, fill_strip, double_strip
from py_crinkle.core.kernels import side_update, mid_update, recalc
from py_crinkle.core.exceptions import StripLevelMismatchError
from py_crinkle.utils.random import ConstantGaussianSource, SequenceGaussianSource


class TestSideUpdate:
    """Test filling of doubled strips."""

    def test_odd_entries_are_neighbour_means(self):
        strip = double_strip(Strip(1, np.array([0.0, 4.0, 8.0])))
        side_update(strip, 1.0, ConstantGaussianSource(0.0))

        np.testing.assert_allclose(strip.data, [0.0, 2.0, 4.0, 6.0, 8.0])

    def test_noise_is_scaled_and_consumed_in_order(self):
        strip = double_strip(Strip(1, np.array([0.0, 4.0, 8.0])))
        source = SequenceGaussianSource([1.0, -1.0])
        side_update(strip, 0.5, source)

        np.testing.assert_allclose(strip.data, [0.0, 2.5, 4.0, 5.5, 8.0])
        assert source.call_count == 2

    def test_even_entries_untouched(self):
        strip = double_strip(Strip(2, np.array([1.0, 3.0, -2.0, 7.0, 0.5])))
        side_update(strip, 2.0, SequenceGaussianSource([0.3, -0.7]))

        np.testing.assert_array_equal(strip.data[0::2], [1.0, 3.0, -2.0, 7.0, 0.5])

    def test_level_zero_rejected(self):
        with pytest.raises(StripLevelMismatchError):
            side_update(create_strip(0), 1.0, ConstantGaussianSource())


class TestMidUpdate:
    """Test computing a strip between a coarse and a fine neighbour."""

    @pytest.fixture
    def left(self):
        return Strip(1, np.array([0.0, 2.0, 4.0]))

    @pytest.fixture
    def right(self):
        return fill_strip(2, 10.0)

    def test_pure_averaging(self, left, right):
        result = create_strip(2)
        mid_update(left, result, right, 1.0, 1.0, ConstantGaussianSource(0.0))

        np.testing.assert_allclose(result.data, [5.0, 5.5, 6.0, 6.5, 7.0])

    def test_scale_on_even_midscale_on_odd(self, left, right):
        result = create_strip(2)
        source = SequenceGaussianSource([1.0, 2.0, 3.0, 4.0, 5.0])
        mid_update(left, result, right, 1.0, 10.0, source)

        np.testing.assert_allclose(result.data, [6.0, 25.5, 9.0, 46.5, 12.0])
        assert source.call_count == 5

    def test_inputs_not_modified(self, left, right):
        mid_update(left, create_strip(2), right, 1.0, 1.0, ConstantGaussianSource(1.0))

        np.testing.assert_array_equal(left.data, [0.0, 2.0, 4.0])
        assert np.all(right.data == 10.0)

    @pytest.mark.parametrize(
        "left_level,result_level,right_level",
        [(2, 2, 2), (1, 2, 1), (0, 2, 2), (1, 2, 3)],
    )
    def test_level_mismatch(self, left_level, result_level, right_level):
        """Mismatched levels must fail rather than produce wrong-sized output."""
        with pytest.raises(StripLevelMismatchError) as excinfo:
            mid_update(
                create_strip(left_level),
                create_strip(result_level),
                create_strip(right_level),
                1.0,
                1.0,
                ConstantGaussianSource(),
            )
        assert excinfo.value.operation == "mid_update"


class TestRecalc:
    """Test the crease-removal pass."""

    def test_boundary_uses_three_neighbours_interior_four(self):
        left = Strip(2, np.array([0.0, 0.0, 3.0, 0.0, 6.0]))
        regen = Strip(2, np.array([100.0, 2.0, 100.0, 4.0, 100.0]))
        right = Strip(2, np.array([3.0, 0.0, 3.0, 0.0, 3.0]))
        recalc(left, regen, right, 1.0, ConstantGaussianSource(0.0))

        np.testing.assert_allclose(regen.data, [5.0 / 3.0, 2.0, 3.0, 4.0, 13.0 / 3.0])

    def test_noise_order(self):
        left = Strip(2, np.array([0.0, 0.0, 3.0, 0.0, 6.0]))
        regen = Strip(2, np.array([100.0, 2.0, 100.0, 4.0, 100.0]))
        right = Strip(2, np.array([3.0, 0.0, 3.0, 0.0, 3.0]))
        recalc(left, regen, right, 2.0, SequenceGaussianSource([1.0, 2.0, 3.0]))

        np.testing.assert_allclose(
            regen.data, [5.0 / 3.0 + 2.0, 2.0, 3.0 + 4.0, 4.0, 13.0 / 3.0 + 6.0]
        )

    def test_level_one(self):
        left = Strip(1, np.array([0.0, 99.0, 3.0]))
        regen = Strip(1, np.array([9.0, 6.0, 9.0]))
        right = Strip(1, np.array([3.0, 99.0, 0.0]))
        recalc(left, regen, right, 1.0, ConstantGaussianSource(0.0))

        np.testing.assert_allclose(regen.data, [3.0, 6.0, 3.0])

    @pytest.mark.parametrize("levels", [(1, 2, 2), (2, 1, 2), (2, 2, 3)])
    def test_level_mismatch(self, levels):
        strips = [create_strip(level) for level in levels]
        with pytest.raises(StripLevelMismatchError) as excinfo:
            recalc(*strips, 1.0, ConstantGaussianSource())
        assert excinfo.value.operation == "recalc"
