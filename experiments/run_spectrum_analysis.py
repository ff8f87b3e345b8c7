#!/usr/bin/env python3
"""
Spectrum Analysis Run

Synthesizes a test tone (optionally buried in noise), windows it and runs
one transform engine over it:
  - Peak bin, frequency and amplitude after the window signal scale factor
  - Noise floor (RMS / mean of the noise-scaled spectrum, edge bins excluded)
  - Window NENBW
  - Optional spectrogram when frame_length is set

Usage:
    python run_spectrum_analysis.py [--config CONFIG_PATH] [--output OUTPUT_DIR] [--plot]
"""

import sys
import json
import time
import argparse
import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, Union

import numpy as np

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Rich imports
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

# Project imports
from spectrallab.config import AnalysisConfig, load_config
from spectrallab.dsp_core import DFT, FFT, coefficients, scale_factor_signal, scale_factor_noise, nenbw
from spectrallab.dsp_core.stft import stft
from spectrallab.analysis import (
    magnitude,
    magnitude_to_dbv,
    find_rms,
    find_mean,
    find_max_amplitude,
    find_max_position,
)
from spectrallab.signals import tone_sampling, noise_rms
from spectrallab.utils.logging import setup_logging, log_section
from spectrallab.utils.plot import plot_spectrum, plot_spectrogram

console = Console()


def build_signal(config: AnalysisConfig, points: int) -> np.ndarray:
    """Test tone plus optional Gaussian noise, as configured."""
    tone = config.tone
    signal = tone_sampling(
        tone.amplitude_vrms,
        tone.frequency_hz,
        config.sampling_rate,
        points,
        dc=tone.dc,
        phase_deg=tone.phase_deg,
    )
    if tone.noise_vrms > 0:
        rng = np.random.default_rng(tone.seed)
        signal = signal + noise_rms(tone.noise_vrms, points, rng=rng)
    return signal


def make_transform(config: AnalysisConfig):
    if config.engine == 'fft':
        return FFT().initialize(config.length, config.zero_padding)
    return DFT().initialize(config.length, config.zero_padding, force_no_cache=config.force_no_cache)


def run_analysis(
    config: AnalysisConfig,
    output_dir: Union[str, Path],
    plot: bool = False
) -> Dict:
    """
    Run one analysis and write its artifacts.

    Args:
        config: Analysis configuration
        output_dir: Directory for summary.json, the log and plots
        plot: Also save spectrum (and spectrogram) figures

    Returns:
        Summary dict (same content as summary.json)
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(
        log_file=str(output_dir / 'analysis.log'),
        level=logging.DEBUG,
        name='spectrallab',
    )

    console.print(Panel.fit(
        "[bold blue]Spectrum Analysis[/bold blue]\n"
        f"Engine: {config.engine} | Window: {config.window} | "
        f"N={config.length} Z={config.zero_padding} | fs={config.sampling_rate:g} Hz",
        border_style="blue"
    ))
    log_section(logger, "ANALYSIS CONFIGURATION", config.to_dict())

    # Signal and window
    window = coefficients(config.window_type, config.length)
    signal = build_signal(config, config.length) * window

    # Transform
    transform = make_transform(config)
    start = time.perf_counter()
    spectrum = transform.direct(signal)
    elapsed_ms = (time.perf_counter() - start) * 1000
    freqs = transform.frequency_span(config.sampling_rate)

    mag = magnitude(spectrum)
    signal_mag = mag * scale_factor_signal(window)
    noise_density = mag * scale_factor_noise(window, config.sampling_rate)

    peak_bin = find_max_position(signal_mag)
    edge = config.edge_bins
    summary = {
        'engine': config.engine,
        'window': config.window_type.value,
        'input_length': transform.config.input_length,
        'total_length': transform.config.total_length,
        'half_length': transform.config.half_length,
        'using_cache': bool(getattr(transform, 'is_using_cache', False)),
        'transform_ms': elapsed_ms,
        'peak_bin': peak_bin,
        'peak_frequency_hz': float(freqs[peak_bin]),
        'peak_amplitude_vrms': find_max_amplitude(signal_mag),
        'peak_dbv': float(magnitude_to_dbv(signal_mag[peak_bin])),
        'noise_floor_rms': find_rms(noise_density, edge, edge),
        'noise_floor_mean': find_mean(noise_density, edge, edge),
        'nenbw_bins': nenbw(window),
    }
    log_section(logger, "RESULTS", summary)

    table = Table(title="Spectrum Analysis Results", box=box.ROUNDED)
    table.add_column("Quantity", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Peak bin", str(summary['peak_bin']))
    table.add_row("Peak frequency", f"{summary['peak_frequency_hz']:.3f} Hz")
    table.add_row("Peak amplitude", f"{summary['peak_amplitude_vrms']:.6f} Vrms")
    table.add_row("Peak level", f"{summary['peak_dbv']:.2f} dBV")
    table.add_row("Noise floor (RMS)", f"{summary['noise_floor_rms']:.3e} V/rtHz")
    table.add_row("Noise floor (mean)", f"{summary['noise_floor_mean']:.3e} V/rtHz")
    table.add_row("NENBW", f"{summary['nenbw_bins']:.4f} bins")
    table.add_row("Transform time", f"{summary['transform_ms']:.3f} ms")
    console.print(table)

    if plot:
        plot_spectrum(
            freqs,
            magnitude_to_dbv(signal_mag),
            output_dir / 'spectrum.png',
            title=f"{config.window_type.value} / {config.engine}",
            marker_hz=config.tone.frequency_hz,
        )

    if config.frame_length:
        # Eight frames worth of signal at 50% hop
        points = config.frame_length * 9 // 2
        result = stft(
            build_signal(config, points),
            config.window_type,
            frame_length=config.frame_length,
            engine=config.engine,
        )
        summary['stft_frames'] = len(result)
        logger.info(f"STFT: {len(result)} frames of {config.frame_length} samples")
        if plot:
            plot_spectrogram(result, config.sampling_rate, output_dir / 'spectrogram.png')

    with open(output_dir / 'summary.json', 'w') as f:
        json.dump(summary, f, indent=2)

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")
    return summary


def main():
    parser = argparse.ArgumentParser(description="Spectrum Analysis Run")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'experiments' / 'configs' / 'default.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory'
    )
    parser.add_argument(
        '--plot',
        action='store_true',
        help='Save spectrum and spectrogram figures'
    )
    args = parser.parse_args()

    if args.output:
        output_dir = Path(args.output)
    else:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        output_dir = PROJECT_ROOT / 'experiments' / 'results' / timestamp

    try:
        run_analysis(load_config(args.config), output_dir, plot=args.plot)
        console.print(Panel.fit(
            "[bold green]Analysis completed![/bold green]",
            border_style="green"
        ))
    except Exception as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise


if __name__ == '__main__':
    main()
