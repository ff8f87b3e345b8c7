"""
Elementwise conversions of transform output.

Log conversions clamp non-positive values to the smallest positive double
before taking the logarithm, so silent bins map to a very low finite level
instead of -inf.
"""

import numpy as np

# Smallest representable positive double (subnormal)
MIN_POSITIVE = np.nextafter(0.0, 1.0)


def real_part(spectrum) -> np.ndarray:
    return np.real(np.asarray(spectrum)).astype(np.float64)


def imag_part(spectrum) -> np.ndarray:
    return np.imag(np.asarray(spectrum)).astype(np.float64)


def magnitude(spectrum) -> np.ndarray:
    """|z| of a complex spectrum."""
    return np.abs(np.asarray(spectrum, dtype=np.complex128))


def magnitude_squared(spectrum) -> np.ndarray:
    """|z|^2 of a complex spectrum."""
    return magnitude(spectrum) ** 2


def magnitude_dbv(spectrum) -> np.ndarray:
    """20*log10(|z|) of a complex spectrum."""
    return magnitude_to_dbv(magnitude(spectrum))


def phase_radians(spectrum) -> np.ndarray:
    """Argument of each bin, atan2(imag, real), in radians."""
    return np.angle(np.asarray(spectrum, dtype=np.complex128))


def phase_degrees(spectrum) -> np.ndarray:
    """Argument of each bin in degrees."""
    return phase_radians(spectrum) * (180.0 / np.pi)


def magnitude_to_magnitude_squared(mag) -> np.ndarray:
    m = np.asarray(mag, dtype=np.float64)
    return m * m


def magnitude_to_dbv(mag) -> np.ndarray:
    """
    Convert linear magnitude to dBV.

    Args:
        mag: Linear magnitude values

    Returns:
        20*log10(max(mag, MIN_POSITIVE))
    """
    m = np.asarray(mag, dtype=np.float64)
    return 20.0 * np.log10(np.where(m > 0.0, m, MIN_POSITIVE))


def magnitude_squared_to_magnitude(mag_squared) -> np.ndarray:
    return np.sqrt(np.asarray(mag_squared, dtype=np.float64))


def magnitude_squared_to_dbv(mag_squared) -> np.ndarray:
    """10*log10(max(mag_squared, MIN_POSITIVE))"""
    m2 = np.asarray(mag_squared, dtype=np.float64)
    return 10.0 * np.log10(np.where(m2 > 0.0, m2, MIN_POSITIVE))
