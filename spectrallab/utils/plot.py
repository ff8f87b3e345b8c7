"""
Plots of spectra and spectrograms.
"""

from pathlib import Path
from typing import Optional, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from ..analysis.convert import magnitude_dbv
from ..dsp_core.config import frequency_span
from ..dsp_core.stft import STFTResult


def plot_spectrum(
    freqs,
    values,
    save_path: Union[str, Path],
    title: str = 'Spectrum',
    ylabel: str = 'Magnitude (dBV)',
    log_x: bool = False,
    marker_hz: Optional[float] = None
) -> Path:
    """
    Plot one spectrum trace and save it.

    Args:
        freqs: Frequency axis in Hz
        values: Values to plot (already converted, e.g. dBV)
        save_path: Output image path
        title: Figure title
        ylabel: Y axis label
        log_x: Use a logarithmic frequency axis (DC bin is skipped)
        marker_hz: Optional frequency to mark with a vertical line

    Returns:
        Path of the saved figure
    """
    f = np.asarray(freqs, dtype=np.float64)
    v = np.asarray(values, dtype=np.float64)
    if f.shape != v.shape:
        raise ValueError(f"freqs shape {f.shape} does not match values shape {v.shape}")

    fig, ax = plt.subplots(figsize=(10, 6))
    if log_x:
        ax.semilogx(f[1:], v[1:], linewidth=1.0)
    else:
        ax.plot(f, v, linewidth=1.0)
    if marker_hz is not None:
        ax.axvline(marker_hz, color='#C44E52', linestyle='--', linewidth=0.8)

    ax.set_title(title)
    ax.set_xlabel('Frequency (Hz)')
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)

    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    return save_path


def plot_spectrogram(
    result: STFTResult,
    sampling_rate: float,
    save_path: Union[str, Path],
    title: str = 'Spectrogram'
) -> Path:
    """Plot an STFT result as dBV over (time, frequency) and save it."""
    levels = magnitude_dbv(result.as_matrix())
    freqs = frequency_span(sampling_rate, levels.shape[1])
    hop_seconds = result.hop_length / sampling_rate
    times = np.arange(levels.shape[0]) * hop_seconds

    fig, ax = plt.subplots(figsize=(12, 6))
    mesh = ax.pcolormesh(times, freqs, levels.T, shading='nearest', cmap='magma')
    fig.colorbar(mesh, ax=ax, label='dBV')

    ax.set_title(title)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Frequency (Hz)')

    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)
    return save_path
