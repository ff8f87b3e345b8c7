"""
Test signal generators.

Amplitudes are in Vrms: a tone of amplitude A has a peak of sqrt(2) * A.
Noise generators draw from an explicitly passed ``numpy.random.Generator``;
when none is given a fresh local generator is created, so no module-level
random state exists.
"""

from typing import Optional

import numpy as np


def linspace(start: float, stop: float, points: int) -> np.ndarray:
    """``points`` evenly spaced values from start to stop inclusive."""
    if points < 2:
        raise ValueError("points must be >= 2")
    increment = (stop - start) / (points - 1.0)
    return start + increment * np.arange(points, dtype=np.float64)


def sine(frequency_hz: float, sampling_rate_hz: float, points: int, phase: float = 0.0) -> np.ndarray:
    """Unit-peak sine, ``phase`` in radians."""
    t = _time_axis(sampling_rate_hz, points)
    return np.sin(2.0 * np.pi * frequency_hz * t + phase)


def tone_sampling(
    amplitude_vrms: float,
    frequency_hz: float,
    sampling_rate_hz: float,
    points: int,
    dc: float = 0.0,
    phase_deg: float = 0.0
) -> np.ndarray:
    """
    Sampled tone.

    Args:
        amplitude_vrms: RMS amplitude of the tone
        frequency_hz: Tone frequency
        sampling_rate_hz: Sampling rate
        points: Number of samples
        dc: DC offset added to every sample
        phase_deg: Starting phase in degrees

    Returns:
        sqrt(2) * A * sin(2*pi*f*t + phase) + dc
    """
    t = _time_axis(sampling_rate_hz, points)
    phase = np.deg2rad(phase_deg)
    return np.sqrt(2.0) * amplitude_vrms * np.sin(2.0 * np.pi * frequency_hz * t + phase) + dc


def tone_cycles(
    amplitude_vrms: float,
    cycles: float,
    points: int,
    dc: float = 0.0,
    phase_deg: float = 0.0
) -> np.ndarray:
    """Tone with exactly ``cycles`` periods across ``points`` samples."""
    n = np.arange(points, dtype=np.float64)
    phase = np.deg2rad(phase_deg)
    return np.sqrt(2.0) * amplitude_vrms * np.sin(2.0 * np.pi * n / points * cycles + phase) + dc


def square(frequency_hz: float, sampling_rate_hz: float, points: int, harmonics: int = 50) -> np.ndarray:
    """Band-limited square wave built from odd harmonics 1 .. 2*harmonics-3."""
    t = _time_axis(sampling_rate_hz, points)
    acc = np.zeros(points)
    for k in range(1, harmonics):
        m = 2.0 * k - 1.0
        acc += np.sin(2.0 * np.pi * m * frequency_hz * t) / m
    return 4.0 / np.pi * acc


def saw(frequency_hz: float, sampling_rate_hz: float, points: int, harmonics: int = 50) -> np.ndarray:
    """Band-limited falling sawtooth, +1 to -1 over each period (harmonics 1 .. harmonics-1)."""
    t = _time_axis(sampling_rate_hz, points)
    acc = np.zeros(points)
    for k in range(1, harmonics):
        acc += (-1.0) ** k * np.sin(2.0 * np.pi * k * frequency_hz * t) / k
    return 2.0 / np.pi * acc


def triangle(frequency_hz: float, sampling_rate_hz: float, points: int, harmonics: int = 50) -> np.ndarray:
    """
    Band-limited triangle wave from the first ``harmonics`` odd harmonics.

    Starts at 0 and reaches +1 a quarter period in.
    """
    t = _time_axis(sampling_rate_hz, points)
    acc = np.zeros(points)
    for k in range(harmonics):
        m = 2.0 * k + 1.0
        acc += (-1.0) ** k * np.sin(2.0 * np.pi * m * frequency_hz * t) / (m * m)
    return 8.0 / np.pi ** 2 * acc


def noise_rms(
    amplitude_vrms: float,
    points: int,
    dc: float = 0.0,
    rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """Gaussian noise with the given RMS value plus a DC offset."""
    rng = rng if rng is not None else np.random.default_rng()
    return rng.normal(0.0, amplitude_vrms, size=points) + dc


def noise_psd(
    amplitude_psd: float,
    sampling_rate_hz: float,
    points: int,
    rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    White noise with a given spectral density.

    Args:
        amplitude_psd: Density in units per root-Hz
        sampling_rate_hz: Sampling rate; noise is spread up to fs / 2
        points: Number of samples
        rng: Random generator to draw from

    Returns:
        Gaussian noise of RMS amplitude_psd * sqrt(fs / 2)
    """
    arms = amplitude_psd * np.sqrt(sampling_rate_hz / 2.0)
    return noise_rms(arms, points, rng=rng)


def _time_axis(sampling_rate_hz: float, points: int) -> np.ndarray:
    if sampling_rate_hz <= 0:
        raise ValueError("sampling_rate_hz must be > 0")
    return np.arange(points, dtype=np.float64) / sampling_rate_hz
