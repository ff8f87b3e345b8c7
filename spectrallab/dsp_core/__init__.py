"""
DSP Core Module - Transform engines, window library and STFT

Modules:
    - config: TransformConfig, frequency span, bit reversal
    - dft: Brute force / cached Discrete Fourier Transform
    - fft: Radix-2 Fast Fourier Transform
    - window: Window coefficients and scale factors
    - stft: 50% overlap Short-Time Fourier Transform and overlap-add inverse
"""

from .config import TransformConfig, frequency_span, bit_reverse
from .dft import DFT, dft
from .fft import FFT, fft, ifft
from .window import (
    WindowType,
    coefficients,
    cosine_series,
    apply_window,
    scale_factor_signal,
    scale_factor_noise,
    nenbw,
    window_duration,
)
from .stft import STFTResult, stft, istft

__all__ = [
    # Configuration
    'TransformConfig',
    'frequency_span',
    'bit_reverse',
    # Engines
    'DFT',
    'FFT',
    'dft',
    'fft',
    'ifft',
    # Windows
    'WindowType',
    'coefficients',
    'cosine_series',
    'apply_window',
    'scale_factor_signal',
    'scale_factor_noise',
    'nenbw',
    'window_duration',
    # STFT
    'STFTResult',
    'stft',
    'istft',
]
