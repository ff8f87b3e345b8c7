"""
Unit Tests for Spectral Conversion and Analysis

Run:
    pytest tests/test_analysis.py -v
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from spectrallab.analysis import (
    MIN_POSITIVE,
    real_part,
    imag_part,
    magnitude,
    magnitude_squared,
    magnitude_dbv,
    phase_radians,
    phase_degrees,
    magnitude_to_magnitude_squared,
    magnitude_to_dbv,
    magnitude_squared_to_magnitude,
    magnitude_squared_to_dbv,
    find_rms,
    find_mean,
    find_max_amplitude,
    find_max_position,
    find_max_frequency,
    remove_mean,
    unwrap_phase_degrees,
    unwrap_phase_radians,
)


class TestConvert:
    """Test suite for elementwise conversions."""

    def test_parts_and_magnitude(self):
        z = np.array([3 + 4j, -1j, 2.0])
        assert np.array_equal(real_part(z), [3.0, 0.0, 2.0])
        assert np.array_equal(imag_part(z), [4.0, -1.0, 0.0])
        assert np.allclose(magnitude(z), [5.0, 1.0, 2.0])
        assert np.allclose(magnitude_squared(z), [25.0, 1.0, 4.0])

    def test_dbv(self):
        assert np.allclose(magnitude_to_dbv([1.0, 10.0, 0.1]), [0.0, 20.0, -20.0])
        assert np.allclose(magnitude_squared_to_dbv([1.0, 100.0]), [0.0, 20.0])
        assert np.allclose(magnitude_dbv(np.array([10j])), [20.0])

    def test_dbv_floor(self):
        floor = 20.0 * np.log10(MIN_POSITIVE)
        levels = magnitude_to_dbv([0.0, -1.0])

        print(f"\n[dBV Floor] {floor:.1f} dBV")

        assert np.all(np.isfinite(levels))
        assert np.allclose(levels, floor)
        assert np.isfinite(magnitude_squared_to_dbv([0.0])[0])

    def test_magnitude_conversions(self):
        mag = np.array([0.5, 2.0])
        assert np.allclose(magnitude_to_magnitude_squared(mag), [0.25, 4.0])
        assert np.allclose(magnitude_squared_to_magnitude([0.25, 4.0]), mag)

    def test_phase(self):
        z = np.array([1.0, 1j, -1.0, -1j, 1 + 1j])
        assert np.allclose(phase_degrees(z), [0.0, 90.0, 180.0, -90.0, 45.0])
        assert np.allclose(phase_radians(z), np.deg2rad([0.0, 90.0, 180.0, -90.0, 45.0]))


class TestAnalyze:
    """Test suite for aggregate analysis."""

    def test_edge_bins_excluded(self):
        data = np.concatenate([np.full(10, 100.0), np.ones(80), np.full(10, 100.0)])
        assert find_rms(data) == pytest.approx(1.0)
        assert find_mean(data) == pytest.approx(1.0)

    def test_zero_edges_use_everything(self):
        data = np.concatenate([np.full(10, 100.0), np.ones(80), np.full(10, 100.0)])
        assert find_mean(data, 0, 0) == pytest.approx(20.8)
        assert find_rms(np.array([3.0, 4.0]), 0, 0) == pytest.approx(np.sqrt(12.5))

    def test_asymmetric_edges(self):
        data = np.arange(10.0)
        assert find_mean(data, 2, 5) == pytest.approx(np.mean([2.0, 3.0, 4.0]))

    def test_nothing_left(self):
        with pytest.raises(ValueError):
            find_rms(np.ones(20))
        with pytest.raises(ValueError):
            find_mean(np.ones(5), 3, 2)
        with pytest.raises(ValueError):
            find_mean(np.ones(5), -1, 0)
        with pytest.raises(ValueError):
            find_mean(np.arange(10.0), 0, 12)
        with pytest.raises(ValueError):
            find_rms(np.arange(10.0), 11, 0)

    def test_max(self):
        data = np.array([1.0, 3.0, 3.0, 2.0])
        assert find_max_amplitude(data) == 3.0
        assert find_max_position(data) == 1

    def test_max_frequency(self):
        data = np.array([0.0, 1.0, 5.0, 1.0])
        f_span = np.array([0.0, 100.0, 200.0, 300.0])
        assert find_max_frequency(data, f_span) == 200.0

        with pytest.raises(ValueError):
            find_max_frequency(data, f_span[:3])

    def test_remove_mean(self):
        y = remove_mean([1.0, 2.0, 3.0, 6.0])
        assert np.allclose(y, [-2.0, -1.0, 0.0, 3.0])
        assert y.mean() == pytest.approx(0.0)

    def test_empty_input(self):
        with pytest.raises(ValueError):
            find_max_position([])


class TestUnwrap:
    """Test suite for phase unwrapping."""

    def test_positive_side_jump(self):
        assert np.allclose(unwrap_phase_degrees([170.0, -170.0, -160.0]), [170.0, 190.0, 200.0])

    def test_negative_side_jump(self):
        assert np.allclose(unwrap_phase_degrees([-10.0, 340.0, 330.0]), [-10.0, -20.0, -30.0])

    def test_no_jump_unchanged(self):
        phase = np.array([0.0, 45.0, 90.0, 135.0, 90.0])
        assert np.array_equal(unwrap_phase_degrees(phase), phase)

    def test_linear_phase(self):
        true_phase = np.arange(0.0, 1000.0, 30.0)
        wrapped = (true_phase + 180.0) % 360.0 - 180.0
        unwrapped = unwrap_phase_degrees(wrapped)
        assert np.allclose(unwrapped - unwrapped[0], true_phase - true_phase[0])

    def test_radians(self):
        assert np.allclose(
            unwrap_phase_radians([3.0, -3.0]),
            [3.0, -3.0 + 2 * np.pi],
        )

    def test_input_not_modified(self):
        phase = np.array([170.0, -170.0])
        unwrap_phase_degrees(phase)
        assert np.array_equal(phase, [170.0, -170.0])


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
