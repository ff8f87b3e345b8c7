"""
Spectral conversion and analysis of transform output.
"""

from .convert import (
    MIN_POSITIVE,
    real_part,
    imag_part,
    magnitude,
    magnitude_squared,
    magnitude_dbv,
    phase_radians,
    phase_degrees,
    magnitude_to_magnitude_squared,
    magnitude_to_dbv,
    magnitude_squared_to_magnitude,
    magnitude_squared_to_dbv,
)
from .analyze import (
    find_rms,
    find_mean,
    find_max_amplitude,
    find_max_position,
    find_max_frequency,
    remove_mean,
    unwrap_phase_degrees,
    unwrap_phase_radians,
)

__all__ = [
    # Conversions
    'MIN_POSITIVE',
    'real_part',
    'imag_part',
    'magnitude',
    'magnitude_squared',
    'magnitude_dbv',
    'phase_radians',
    'phase_degrees',
    'magnitude_to_magnitude_squared',
    'magnitude_to_dbv',
    'magnitude_squared_to_magnitude',
    'magnitude_squared_to_dbv',
    # Analysis
    'find_rms',
    'find_mean',
    'find_max_amplitude',
    'find_max_position',
    'find_max_frequency',
    'remove_mean',
    'unwrap_phase_degrees',
    'unwrap_phase_radians',
]
