"""
Window coefficient library and window scale factors.

All cosine-series windows are periodic ("DFT-even"):

    w[n] = c0 + c1*cos(z) + c2*cos(2z) + ... + c10*cos(10z),  z = 2*pi*n/N

The coefficient tuples below are published window designs (Nuttall,
Blackman-Harris and the SFT/HFT flat-top family from Heinzel et al.) and
must be reproduced exactly.
"""

from enum import Enum
from typing import Dict, Tuple, Union

import numpy as np


class WindowType(Enum):
    """Closed set of supported windows."""
    NONE = 'none'
    RECTANGULAR = 'rectangular'
    WELCH = 'welch'
    BARTLETT = 'bartlett'
    HANNING = 'hanning'
    HANN = 'hann'
    HAMMING = 'hamming'
    NUTALL3 = 'nutall3'
    NUTALL4 = 'nutall4'
    NUTALL3A = 'nutall3a'
    NUTALL3B = 'nutall3b'
    NUTALL4A = 'nutall4a'
    BH92 = 'bh92'
    NUTALL4B = 'nutall4b'

    SFT3F = 'sft3f'
    SFT3M = 'sft3m'
    FTNI = 'ftni'
    SFT4F = 'sft4f'
    SFT5F = 'sft5f'
    SFT4M = 'sft4m'
    FTHP = 'fthp'
    HFT70 = 'hft70'
    FTSRS = 'ftsrs'
    SFT5M = 'sft5m'
    HFT90D = 'hft90d'
    HFT95 = 'hft95'
    HFT116D = 'hft116d'
    HFT144D = 'hft144d'
    HFT169D = 'hft169d'
    HFT196D = 'hft196d'
    HFT223D = 'hft223d'
    HFT248D = 'hft248d'

    @classmethod
    def from_name(cls, name: Union[str, 'WindowType']) -> 'WindowType':
        """Look a window up by enum member or case-insensitive name."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown window type: {name}")


# Cosine series coefficients c0..cN for each tabulated window
COSINE_SERIES: Dict[WindowType, Tuple[float, ...]] = {
    WindowType.HANN: (0.5, -0.5),
    WindowType.HANNING: (0.5, -0.5),
    WindowType.HAMMING: (0.54, -0.46),
    # Also known as Blackman-Harris
    WindowType.BH92: (0.35875, -0.48829, 0.14128, -0.01168),
    WindowType.NUTALL3: (0.375, -0.5, 0.125),
    WindowType.NUTALL3A: (0.40897, -0.5, 0.09103),
    WindowType.NUTALL3B: (0.4243801, -0.4973406, 0.0782793),
    WindowType.NUTALL4: (0.3125, -0.46875, 0.1875, -0.03125),
    WindowType.NUTALL4A: (0.338946, -0.481973, 0.161054, -0.018027),
    WindowType.NUTALL4B: (0.355768, -0.487396, 0.144232, -0.012604),

    WindowType.SFT3F: (0.26526, -0.5, 0.23474),
    WindowType.SFT4F: (0.21706, -0.42103, 0.28294, -0.07897),
    WindowType.SFT5F: (0.1881, -0.36923, 0.28702, -0.13077, 0.02488),
    WindowType.SFT3M: (0.28235, -0.52105, 0.19659),
    WindowType.SFT4M: (0.241906, -0.460841, 0.255381, -0.041872),
    WindowType.SFT5M: (0.209671, -0.407331, 0.281225, -0.092669, 0.0091036),
    WindowType.FTNI: (0.2810639, -0.5208972, 0.1980399),
    WindowType.FTHP: (1.0, -1.912510941, 1.079173272, -0.1832630879),
    WindowType.HFT70: (1.0, -1.90796, 1.07349, -0.18199),
    WindowType.FTSRS: (1.0, -1.93, 1.29, -0.388, 0.028),
    WindowType.HFT90D: (1.0, -1.942604, 1.340318, -0.440811, 0.043097),
    WindowType.HFT95: (1.0, -1.9383379, 1.3045202, -0.4028270, 0.0350665),
    WindowType.HFT116D: (1.0, -1.9575375, 1.4780705, -0.6367431, 0.1228389, -0.0066288),
    WindowType.HFT144D: (
        1.0, -1.96760033, 1.57983607, -0.81123644, 0.22583558, -0.02773848, 0.00090360,
    ),
    WindowType.HFT169D: (
        1.0, -1.97441842, 1.65409888, -0.95788186, 0.33673420, -0.06364621, 0.00521942,
        -0.00010599,
    ),
    WindowType.HFT196D: (
        1.0, -1.979280420, 1.710288951, -1.081629853, 0.448734314, -0.112376628,
        0.015122992, -0.000871252, 0.000011896,
    ),
    WindowType.HFT223D: (
        1.0, -1.98298997309, 1.75556083063, -1.19037717712, 0.56155440797, -0.17296769663,
        0.03233247087, -0.00324954578, 0.00013801040, -0.00000132725,
    ),
    WindowType.HFT248D: (
        1.0, -1.985844164102, 1.791176438506, -1.282075284005, 0.667777530266,
        -0.240160796576, 0.056656381764, -0.008134974479, 0.000624544650,
        -0.000019808998, 0.000000132974,
    ),
}

MAX_COSINE_TERMS = 11


def cosine_series(points: int, *coefficients: float) -> np.ndarray:
    """
    Evaluate a periodic cosine-series window.

    Args:
        points: Window length N
        *coefficients: c0, c1, ... (at most 11 terms)

    Returns:
        Array of N window coefficients
    """
    if not coefficients:
        raise ValueError("At least one coefficient (c0) is required")
    if len(coefficients) > MAX_COSINE_TERMS:
        raise ValueError(f"At most {MAX_COSINE_TERMS} coefficients are supported, got {len(coefficients)}")

    z = 2.0 * np.pi * np.arange(points) / points
    w = np.full(points, float(coefficients[0]))
    for i, c in enumerate(coefficients[1:], start=1):
        w += c * np.cos(i * z)
    return w


def coefficients(window_type: Union[str, WindowType], points: int) -> np.ndarray:
    """
    Calculate window coefficients.

    Args:
        window_type: WindowType member or its name ('hann', 'fthp', ...)
        points: Number of coefficients

    Returns:
        Array of ``points`` real coefficients
    """
    window_type = WindowType.from_name(window_type)
    if isinstance(points, bool) or not isinstance(points, (int, np.integer)) or points <= 0:
        raise ValueError(f"points must be a positive integer, got {points!r}")

    n_total = float(points)
    n = np.arange(points, dtype=np.float64)

    if window_type in (WindowType.NONE, WindowType.RECTANGULAR):
        return np.ones(points)

    if window_type == WindowType.BARTLETT:
        # wc = 2/N*(N/2-abs(n-(N-1)/2))
        return 2.0 / n_total * (n_total / 2.0 - np.abs(n - (n_total - 1.0) / 2.0))

    if window_type == WindowType.WELCH:
        # wc = 1 - ((2*n)/N - 1)^2
        return 1.0 - ((2.0 * n) / n_total - 1.0) ** 2

    return cosine_series(points, *COSINE_SERIES[window_type])


def apply_window(signal, window_type: Union[str, WindowType] = WindowType.HANN) -> np.ndarray:
    """Multiply ``signal`` by a window of matching length."""
    x = np.asarray(signal, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    return x * coefficients(window_type, x.shape[0])


def scale_factor_signal(window_coefficients) -> float:
    """
    Signal scale factor, 1 / mean(w).

    Applied to the magnitude result it undoes the amplitude attenuation the
    window imposes on a discrete tone.
    """
    w = _as_coefficients(window_coefficients)
    return float(1.0 / w.mean())


def scale_factor_noise(window_coefficients, sampling_rate: float) -> float:
    """
    Noise scale factor, sqrt(1 / (mean(w^2) * bin_width)).

    Applied to the magnitude result it gives a power spectral density in
    units per root-Hz. ``bin_width`` is sampling_rate / len(w).
    """
    w = _as_coefficients(window_coefficients)
    if sampling_rate <= 0:
        raise ValueError("sampling_rate must be > 0")
    bin_width = sampling_rate / w.shape[0]
    return float(np.sqrt(1.0 / (np.mean(w * w) * bin_width)))


def nenbw(window_coefficients) -> float:
    """Normalized equivalent noise bandwidth, in bins."""
    w = _as_coefficients(window_coefficients)
    s1 = w.mean()
    s2 = np.sum(w * w)
    return float((s2 / (s1 * s1)) / w.shape[0])


def window_duration(points: int, sampling_rate: float) -> float:
    """Time span in seconds covered by ``points`` samples."""
    return points / sampling_rate


def _as_coefficients(window_coefficients) -> np.ndarray:
    w = np.asarray(window_coefficients, dtype=np.float64)
    if w.ndim != 1 or w.shape[0] == 0:
        raise ValueError("window_coefficients must be a non-empty 1D array")
    return w
