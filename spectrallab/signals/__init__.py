"""
Signal sources for exercising the transforms.
"""

from .generate import (
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

__all__ = [
    'linspace',
    'sine',
    'tone_sampling',
    'tone_cycles',
    'square',
    'saw',
    'triangle',
    'noise_rms',
    'noise_psd',
]
