"""
Unit Tests for the Window Coefficient Library

Run:
    pytest tests/test_window.py -v
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from scipy.signal import get_window

from spectrallab.dsp_core import (
    WindowType,
    coefficients,
    cosine_series,
    apply_window,
    scale_factor_signal,
    scale_factor_noise,
    nenbw,
    window_duration,
)
from spectrallab.dsp_core.window import COSINE_SERIES, MAX_COSINE_TERMS


class TestWindowCoefficients:
    """Test suite for window coefficient generation."""

    @pytest.mark.parametrize("name,scipy_name", [
        ('hann', 'hann'),
        ('hamming', 'hamming'),
        ('bh92', 'blackmanharris'),
    ])
    def test_matches_scipy_periodic(self, name, scipy_name):
        for n in [16, 255, 1024]:
            ours = coefficients(name, n)
            ref = get_window(scipy_name, n, fftbins=True)
            assert np.abs(ours - ref).max() < 1e-12, f"{name} failed for N={n}"

    def test_rectangular_is_ones(self):
        for window_type in (WindowType.RECTANGULAR, WindowType.NONE):
            w = coefficients(window_type, 64)
            assert np.array_equal(w, np.ones(64))
            assert scale_factor_signal(w) == 1.0

    def test_hanning_alias(self):
        assert np.array_equal(coefficients('hanning', 32), coefficients('hann', 32))

    def test_bartlett(self):
        w = coefficients(WindowType.BARTLETT, 8)
        expected = 2.0 / 8 * (4.0 - np.abs(np.arange(8) - 3.5))
        assert np.allclose(w, expected)
        assert np.allclose(w, w[::-1])

    def test_welch(self):
        w = coefficients(WindowType.WELCH, 16)
        assert w[0] == pytest.approx(0.0)
        assert w[8] == pytest.approx(1.0)
        assert w.max() <= 1.0

    def test_every_window_is_finite(self):
        for window_type in WindowType:
            w = coefficients(window_type, 128)
            assert w.shape == (128,), window_type
            assert np.all(np.isfinite(w)), window_type
            assert w.mean() > 0, window_type

    def test_coefficient_counts(self):
        assert len(COSINE_SERIES[WindowType.HFT248D]) == MAX_COSINE_TERMS
        assert all(len(c) <= MAX_COSINE_TERMS for c in COSINE_SERIES.values())

    def test_cosine_series(self):
        w = cosine_series(8, 0.5, -0.5)
        assert np.allclose(w, coefficients('hann', 8))

        with pytest.raises(ValueError):
            cosine_series(8)
        with pytest.raises(ValueError):
            cosine_series(8, *([0.1] * 12))

    def test_invalid_points(self):
        with pytest.raises(ValueError):
            coefficients('hann', 0)

    def test_apply_window(self):
        x = np.full(32, 2.0)
        assert np.allclose(apply_window(x, 'hann'), 2.0 * coefficients('hann', 32))


class TestWindowType:
    """Test suite for window lookup."""

    def test_from_name(self):
        assert WindowType.from_name('hann') is WindowType.HANN
        assert WindowType.from_name('HFT248D') is WindowType.HFT248D
        assert WindowType.from_name(' Hamming ') is WindowType.HAMMING
        assert WindowType.from_name(WindowType.FTHP) is WindowType.FTHP

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            WindowType.from_name('kaiser')
        with pytest.raises(ValueError):
            coefficients('kaiser', 16)

    def test_member_count(self):
        assert len(WindowType) == 32


class TestScaleFactors:
    """Test suite for window scale factors."""

    def test_signal_scale_factor(self):
        assert scale_factor_signal(coefficients('hann', 1024)) == pytest.approx(2.0)
        assert scale_factor_signal(coefficients('hamming', 1024)) == pytest.approx(1.0 / 0.54)

    def test_noise_scale_factor_rectangular(self):
        w = coefficients('rectangular', 1000)
        assert scale_factor_noise(w, 2000.0) == pytest.approx(np.sqrt(1000 / 2000.0))

    def test_nenbw(self):
        assert nenbw(coefficients('rectangular', 256)) == pytest.approx(1.0)
        assert nenbw(coefficients('hann', 256)) == pytest.approx(1.5)
        hamming = (0.54 ** 2 + 0.46 ** 2 / 2) / 0.54 ** 2
        assert nenbw(coefficients('hamming', 256)) == pytest.approx(hamming)

        print(f"\n[NENBW]")
        for window_type in (WindowType.HANN, WindowType.BH92, WindowType.FTHP, WindowType.HFT248D):
            print(f"  {window_type.value:>8s}: {nenbw(coefficients(window_type, 1024)):.4f} bins")

    def test_empty_coefficients(self):
        with pytest.raises(ValueError):
            scale_factor_signal([])
        with pytest.raises(ValueError):
            nenbw(np.zeros((2, 2)))

    def test_window_duration(self):
        assert window_duration(1000, 2000.0) == pytest.approx(0.5)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
