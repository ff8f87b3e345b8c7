"""
Unit Tests for the Signal Generators

Run:
    pytest tests/test_generate.py -v
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from spectrallab.signals import (
    linspace,
    sine,
    tone_sampling,
    tone_cycles,
    square,
    saw,
    triangle,
    noise_rms,
    noise_psd,
)


class TestTones:
    """Test suite for deterministic generators."""

    def test_linspace(self):
        x = linspace(-1.0, 1.0, 5)
        assert np.allclose(x, [-1.0, -0.5, 0.0, 0.5, 1.0])
        with pytest.raises(ValueError):
            linspace(0.0, 1.0, 1)

    def test_tone_sampling_amplitude(self):
        x = tone_sampling(2.0, 1000.0, 48000.0, 4800)
        assert np.abs(x).max() == pytest.approx(2.0 * np.sqrt(2.0), rel=1e-6)
        assert np.sqrt(np.mean(x * x)) == pytest.approx(2.0, rel=1e-9)

    def test_tone_sampling_dc_and_phase(self):
        x = tone_sampling(1.0, 100.0, 10000.0, 1000, dc=0.5, phase_deg=90.0)
        assert x[0] == pytest.approx(np.sqrt(2.0) + 0.5)
        assert x.mean() == pytest.approx(0.5, abs=1e-9)

    def test_tone_cycles(self):
        x = tone_cycles(1.0, 4, 64)
        assert x[0] == pytest.approx(0.0)
        assert x[4] == pytest.approx(np.sqrt(2.0))
        assert np.allclose(x[:16], x[16:32])

    def test_sine(self):
        x = sine(250.0, 1000.0, 8)
        assert np.allclose(x, [0.0, 1.0, 0.0, -1.0, 0.0, 1.0, 0.0, -1.0], atol=1e-12)

    def test_square(self):
        x = square(10.0, 10000.0, 1000)
        # Quarter period of each half cycle
        assert x[250] == pytest.approx(1.0, abs=0.05)
        assert x[750] == pytest.approx(-1.0, abs=0.05)
        assert abs(x.mean()) < 1e-6

    def test_saw(self):
        x = saw(10.0, 10000.0, 1000)
        # Falling ramp through zero at the start of each period
        assert x[0] == pytest.approx(0.0, abs=1e-12)
        assert x[250] == pytest.approx(-0.5, abs=0.02)
        assert x[750] == pytest.approx(0.5, abs=0.02)

    def test_triangle(self):
        x = triangle(10.0, 10000.0, 1000)
        assert x[0] == pytest.approx(0.0, abs=1e-12)
        assert x[250] == pytest.approx(1.0, abs=0.01)
        assert x[500] == pytest.approx(0.0, abs=1e-9)
        assert x[750] == pytest.approx(-1.0, abs=0.01)
        assert x[125] == pytest.approx(0.5, abs=0.01)

    def test_invalid_sampling_rate(self):
        with pytest.raises(ValueError):
            tone_sampling(1.0, 100.0, 0.0, 10)


class TestNoise:
    """Test suite for random generators."""

    def test_noise_rms(self):
        rng = np.random.default_rng(7)
        x = noise_rms(0.25, 200000, rng=rng)
        assert x.std() == pytest.approx(0.25, rel=0.01)
        assert x.mean() == pytest.approx(0.0, abs=0.005)

    def test_noise_dc(self):
        x = noise_rms(0.1, 100000, dc=3.0, rng=np.random.default_rng(1))
        assert x.mean() == pytest.approx(3.0, abs=0.005)

    def test_seeded_generators_repeat(self):
        a = noise_rms(1.0, 100, rng=np.random.default_rng(42))
        b = noise_rms(1.0, 100, rng=np.random.default_rng(42))
        assert np.array_equal(a, b)

    def test_noise_psd_rms(self):
        x = noise_psd(1e-3, 2000.0, 200000, rng=np.random.default_rng(3))
        assert x.std() == pytest.approx(1e-3 * np.sqrt(1000.0), rel=0.01)

    def test_default_generator(self):
        assert noise_rms(1.0, 16).shape == (16,)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
