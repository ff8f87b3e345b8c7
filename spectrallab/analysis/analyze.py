"""
Aggregate analysis of spectra and phase traces.

The RMS and mean helpers skip a number of bins at each edge, which keeps
DC leakage and window skirts out of noise floor estimates.
"""

import numpy as np


def _inner_bins(data, start_bin: int, stop_bin: int) -> np.ndarray:
    a = np.asarray(data, dtype=np.float64)
    if a.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {a.shape}")
    if start_bin < 0 or stop_bin < 0:
        raise ValueError("start_bin and stop_bin must be >= 0")

    if start_bin + stop_bin >= a.shape[0]:
        raise ValueError(
            f"Excluding {start_bin} + {stop_bin} edge bins leaves nothing of {a.shape[0]} bins"
        )
    return a[start_bin:a.shape[0] - stop_bin]


def find_rms(data, start_bin: int = 10, stop_bin: int = 10) -> float:
    """
    RMS of the data, ignoring edge bins.

    Args:
        data: Real values (e.g. a magnitude spectrum)
        start_bin: Number of leading bins to skip
        stop_bin: Number of trailing bins to skip

    Returns:
        sqrt(mean(x^2)) over the remaining bins
    """
    inner = _inner_bins(data, start_bin, stop_bin)
    return float(np.sqrt(np.mean(inner * inner)))


def find_mean(data, start_bin: int = 10, stop_bin: int = 10) -> float:
    """Mean of the data, ignoring edge bins. See ``find_rms``."""
    return float(np.mean(_inner_bins(data, start_bin, stop_bin)))


def find_max_amplitude(data) -> float:
    a = _as_nonempty(data)
    return float(a.max())


def find_max_position(data) -> int:
    """Index of the first maximum."""
    a = _as_nonempty(data)
    return int(np.argmax(a))


def find_max_frequency(data, f_span) -> float:
    """Frequency (from ``f_span``) at which ``data`` peaks."""
    a = _as_nonempty(data)
    f = np.asarray(f_span, dtype=np.float64)
    if f.shape != a.shape:
        raise ValueError(f"f_span shape {f.shape} does not match data shape {a.shape}")
    return float(f[int(np.argmax(a))])


def remove_mean(data) -> np.ndarray:
    a = _as_nonempty(data)
    return a - a.mean()


def unwrap_phase_degrees(phase_deg) -> np.ndarray:
    """
    Remove +/-360 degree jumps from a phase trace.

    Single forward pass: whenever consecutive values differ by 180 degrees
    or more, 360 is subtracted from every later sample if the value before
    the jump is negative, and added otherwise.
    """
    return _unwrap(phase_deg, 180.0)


def unwrap_phase_radians(phase_rad) -> np.ndarray:
    """Radian version of ``unwrap_phase_degrees`` (pi threshold, 2*pi steps)."""
    return _unwrap(phase_rad, np.pi)


def _unwrap(phase, half_turn: float) -> np.ndarray:
    p = np.asarray(phase, dtype=np.float64)
    if p.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {p.shape}")

    out = p.copy()
    offset = 0.0
    for i in range(1, p.shape[0]):
        # Offsets cancel in the difference, so compare raw neighbours
        if abs(p[i - 1] - p[i]) >= half_turn:
            offset += -2.0 * half_turn if out[i - 1] < 0.0 else 2.0 * half_turn
        out[i] = p[i] + offset
    return out


def _as_nonempty(data) -> np.ndarray:
    a = np.asarray(data, dtype=np.float64)
    if a.ndim != 1 or a.shape[0] == 0:
        raise ValueError("data must be a non-empty 1D array")
    return a
