"""
Transform configuration shared by the DFT and FFT engines.

A TransformConfig is created once per (input length, zero padding) pair and
never mutated. It fixes the one-sided output length and the scale factor that
every engine applies, so that DFT and FFT produce identical spectra.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numba import jit

from ..exceptions import InvalidLengthError, PreconditionViolationError


@dataclass(frozen=True)
class TransformConfig:
    """
    Immutable transform setup.

    Attributes:
        input_length: Number of real samples supplied by the caller (N)
        zero_padding_length: Number of zeros appended before transforming (Z)
        total_length: N + Z
        half_length: total_length // 2 + 1 (DC through Nyquist)
        scale_factor: sqrt(2) / total_length * total_length / N
        log2_length: log2(total_length) for power-of-two lengths, else None
    """
    input_length: int
    zero_padding_length: int
    total_length: int
    half_length: int
    scale_factor: float
    log2_length: Optional[int] = None

    @classmethod
    def create(
        cls,
        input_length: int,
        zero_padding_length: int = 0,
        require_power_of_two: bool = False
    ) -> 'TransformConfig':
        """
        Validate lengths and derive the configuration.

        Args:
            input_length: Length of the time series (must be > 0)
            zero_padding_length: Zero padding appended to the time series (>= 0)
            require_power_of_two: Reject totals that are not an exact power of two

        Returns:
            TransformConfig
        """
        input_length = _as_length(input_length, 'input_length')
        zero_padding_length = _as_length(zero_padding_length, 'zero_padding_length')
        if input_length <= 0:
            raise InvalidLengthError(f"input_length must be > 0, got {input_length}")

        total = input_length + zero_padding_length
        log2_length = None
        if is_power_of_two(total):
            log2_length = total.bit_length() - 1
        elif require_power_of_two:
            raise InvalidLengthError(
                f"input_length + zero_padding_length = {total} is not a power of 2 "
                f"(input_length={input_length}, zero_padding_length={zero_padding_length})"
            )

        # Natural DFT scale, then the zero padding correction
        scale = math.sqrt(2.0) / total
        scale *= total / input_length

        return cls(
            input_length=input_length,
            zero_padding_length=zero_padding_length,
            total_length=total,
            half_length=total // 2 + 1,
            scale_factor=scale,
            log2_length=log2_length,
        )

    def frequency_span(self, sampling_rate: float) -> np.ndarray:
        """Frequency axis in Hz for a spectrum produced with this configuration."""
        return frequency_span(sampling_rate, self.half_length)

    def prepare_input(self, series, allow_complex: bool = True) -> np.ndarray:
        """
        Copy ``series`` into a zero-padded complex buffer of ``total_length``.

        Raises:
            PreconditionViolationError: if the series is longer than total_length
        """
        x = np.asarray(series)
        if x.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {x.shape}")
        if not allow_complex and np.iscomplexobj(x):
            raise ValueError("direct() expects a real time series; use execute() for complex input")
        if x.shape[0] > self.total_length:
            raise PreconditionViolationError(
                f"Input length {x.shape[0]} is greater than the configured total length "
                f"{self.total_length}"
            )

        buffer = np.zeros(self.total_length, dtype=np.complex128)
        buffer[:x.shape[0]] = x
        return buffer

    def full_spectrum(self, spectrum) -> np.ndarray:
        """
        Return a ``total_length`` spectrum.

        A one-sided spectrum of ``half_length`` bins is expanded with the
        conjugate mirror X[k] = conj(X[total - k]); a full spectrum is copied.
        """
        s = np.asarray(spectrum, dtype=np.complex128)
        if s.ndim != 1:
            raise ValueError(f"Spectrum must be 1D, got shape {s.shape}")

        n = self.total_length
        if s.shape[0] == n:
            return s.copy()
        if s.shape[0] != self.half_length:
            raise PreconditionViolationError(
                f"Spectrum length {s.shape[0]} matches neither half_length "
                f"{self.half_length} nor total_length {n}"
            )

        full = np.empty(n, dtype=np.complex128)
        full[:self.half_length] = s
        k = np.arange(self.half_length, n)
        full[self.half_length:] = np.conj(s[n - k])
        return full


def frequency_span(sampling_rate: float, points: int) -> np.ndarray:
    """
    Linearly spaced frequency axis from 0 to sampling_rate / 2.

    Args:
        sampling_rate: Sampling rate in Hz
        points: Number of bins (half_length of the transform)

    Returns:
        Array of ``points`` frequencies in Hz
    """
    if sampling_rate <= 0:
        raise ValueError("sampling_rate must be > 0")
    if points < 2:
        raise ValueError("points must be >= 2")
    increment = (sampling_rate / 2.0) / (points - 1.0)
    return increment * np.arange(points, dtype=np.float64)


def is_power_of_two(n: int) -> bool:
    return n >= 2 and (n & (n - 1)) == 0


@jit(nopython=True, cache=True)
def bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def bit_reverse_table(n: int, n_bits: int) -> np.ndarray:
    """Target index after bit reversal for every position 0..n-1."""
    table = np.empty(n, dtype=np.int64)
    for i in range(n):
        table[i] = bit_reverse(i, n_bits)
    return table


def _as_length(value, name: str) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidLengthError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < 0:
        raise InvalidLengthError(f"{name} must be >= 0, got {value}")
    return value
