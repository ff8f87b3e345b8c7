"""
spectrallab - Spectrum analysis toolkit

Scaled DFT/FFT engines, window coefficients with scale factors, spectral
conversions and a 50% overlap STFT.
"""

from .exceptions import SpectralLabError, InvalidLengthError, PreconditionViolationError
from .dsp_core import (
    TransformConfig,
    frequency_span,
    DFT,
    FFT,
    dft,
    fft,
    ifft,
    WindowType,
    coefficients,
    apply_window,
    scale_factor_signal,
    scale_factor_noise,
    nenbw,
    STFTResult,
    stft,
    istft,
)
from .config import AnalysisConfig, ToneConfig, load_config

__version__ = '0.1.0'

__all__ = [
    'SpectralLabError',
    'InvalidLengthError',
    'PreconditionViolationError',
    'TransformConfig',
    'frequency_span',
    'DFT',
    'FFT',
    'dft',
    'fft',
    'ifft',
    'WindowType',
    'coefficients',
    'apply_window',
    'scale_factor_signal',
    'scale_factor_noise',
    'nenbw',
    'STFTResult',
    'stft',
    'istft',
    'AnalysisConfig',
    'ToneConfig',
    'load_config',
]
