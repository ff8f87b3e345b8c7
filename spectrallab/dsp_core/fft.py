"""
Radix-2 FFT engine using Numba JIT

The butterfly network works in place on a flat complex array:
1. log2(N) stages, butterfly span halving and twiddle step doubling per stage
2. Twiddle factors advanced by complex multiplication, no per-element trig calls
3. Output left in bit-reversed order, unscrambled with a precomputed table

Scaling follows the one-sided spectrum convention of this package: every bin
carries sqrt(2)/N (zero padding corrected), and the DC and Nyquist bins are
divided by a further sqrt(2). ``FFT.inverse`` undoes exactly that convention.
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np
from numba import jit

from .config import TransformConfig, bit_reverse_table, is_power_of_two
from ..exceptions import PreconditionViolationError

logger = logging.getLogger(__name__)

_SQRT2 = math.sqrt(2.0)


@jit(nopython=True, cache=True)
def _butterfly_network(x: np.ndarray, log_n: int) -> None:
    """
    Unscaled radix-2 butterfly network, in place.

    Stage s processes butterflies of span N >> (s + 1):
        top' = top + bottom
        bottom' = (top - bottom) * w
    Results are left in bit-reversed order.
    """
    n = x.shape[0]
    num_flies = n >> 1
    span = n >> 1
    spacing = n
    w_index_step = 1

    for stage in range(log_n):
        w_angle_inc = w_index_step * -2.0 * math.pi / n
        w_mul = complex(math.cos(w_angle_inc), math.sin(w_angle_inc))

        for start in range(0, n, spacing):
            top = start
            bot = start + span
            w = 1.0 + 0.0j

            for fly in range(num_flies):
                x_top = x[top]
                x_bot = x[bot]
                x[top] = x_top + x_bot
                x[bot] = (x_top - x_bot) * w

                top += 1
                bot += 1
                w = w * w_mul

        num_flies >>= 1
        span >>= 1
        spacing >>= 1
        w_index_step <<= 1


@jit(nopython=True, cache=True)
def _unscramble(x: np.ndarray, rev_target: np.ndarray) -> np.ndarray:
    out = np.empty_like(x)
    for k in range(x.shape[0]):
        out[rev_target[k]] = x[k]
    return out


class FFT:
    """
    Radix-2 Fast Fourier Transform engine.

    Call ``initialize`` first, and again whenever the setup changes. The
    total length (input + zero padding) must be an exact power of two.

    Examples
    --------
    >>> engine = FFT().initialize(1024)
    >>> spectrum = engine.direct(signal)      # 513 complex bins
    >>> samples = engine.inverse(spectrum)    # 1024 complex samples
    """

    def __init__(self):
        # (config, bit reversal table), replaced as a whole by initialize()
        self._plan: Optional[Tuple[TransformConfig, np.ndarray]] = None

    def initialize(self, input_length: int, zero_padding_length: int = 0) -> 'FFT':
        """
        Configure the FFT.

        Args:
            input_length: Length of the time series
            zero_padding_length: Number of zeros appended before transforming

        Returns:
            self, for chaining

        Raises:
            InvalidLengthError: if input_length + zero_padding_length is not a power of 2
        """
        config = TransformConfig.create(input_length, zero_padding_length, require_power_of_two=True)
        rev_target = bit_reverse_table(config.total_length, config.log2_length)

        self._plan = (config, rev_target)
        logger.debug(
            "FFT initialized: N=%d, Z=%d, total=%d, half=%d, log2=%d",
            config.input_length, config.zero_padding_length, config.total_length,
            config.half_length, config.log2_length,
        )
        return self

    @property
    def config(self) -> TransformConfig:
        return self._require_plan()[0]

    def direct(self, time_series) -> np.ndarray:
        """
        Forward transform of a real time series.

        Args:
            time_series: Real samples, length <= total_length (zero-padded)

        Returns:
            One-sided complex spectrum of half_length bins
        """
        config, rev_target = self._require_plan()
        x = config.prepare_input(time_series, allow_complex=False)
        return _forward(x, config, rev_target)

    def execute(self, series) -> np.ndarray:
        """Forward transform of a real or complex series. See ``direct``."""
        config, rev_target = self._require_plan()
        return _forward(config.prepare_input(series), config, rev_target)

    def inverse(self, spectrum) -> np.ndarray:
        """
        Inverse of this engine's own forward scaling.

        The real and imaginary parts are swapped, the same unscaled butterfly
        network is run, the parts are swapped back and the whole result is
        multiplied by 1/sqrt(2). This is not a normalized textbook IFFT: the
        DC and Nyquist bins come back attenuated by 1/sqrt(2).

        Args:
            spectrum: half_length one-sided or total_length full spectrum

        Returns:
            total_length complex samples
        """
        config, rev_target = self._require_plan()
        full = config.full_spectrum(spectrum)

        x = full.imag + 1j * full.real
        _butterfly_network(x, config.log2_length)
        x = _unscramble(x, rev_target)

        return (x.imag + 1j * x.real) / _SQRT2

    def frequency_span(self, sampling_rate: float) -> np.ndarray:
        """Frequency axis (Hz) matching the output of ``direct``."""
        return self.config.frequency_span(sampling_rate)

    def _require_plan(self) -> Tuple[TransformConfig, np.ndarray]:
        plan = self._plan
        if plan is None:
            raise PreconditionViolationError("FFT not initialized. Call initialize() first.")
        return plan


def _forward(x: np.ndarray, config: TransformConfig, rev_target: np.ndarray) -> np.ndarray:
    _butterfly_network(x, config.log2_length)
    x = _unscramble(x, rev_target)

    result = x[:config.half_length] * config.scale_factor

    # DC and Fs/2 have no mirrored counterpart, scale them differently
    result[0] = complex(result[0].real / _SQRT2, 0.0)
    last = config.half_length - 1
    result[last] = complex(result[last].real / _SQRT2, 0.0)
    return result


def fft(x, zero_padding_length: int = 0) -> np.ndarray:
    """
    One-shot forward FFT of a real time series.

    Examples
    --------
    >>> x = np.array([1.0, 2.0, 1.0, -1.0, 1.5, 1.0, 0.5, -0.5])
    >>> X = fft(x)  # 5 one-sided bins
    """
    x = np.asarray(x, dtype=np.float64)
    return FFT().initialize(x.shape[0], zero_padding_length).direct(x)


def ifft(spectrum, zero_padding_length: int = 0) -> np.ndarray:
    """
    One-shot inverse of ``fft``.

    Accepts either a full spectrum (power-of-two length) or the one-sided
    output of ``fft``, whose total length is 2 * (len(spectrum) - 1).
    Trailing zero-padded samples are dropped from the result.
    """
    spectrum = np.asarray(spectrum, dtype=np.complex128)
    n = spectrum.shape[0]
    total = n if is_power_of_two(n) else 2 * (n - 1)
    result = FFT().initialize(total).inverse(spectrum)
    return result[:total - zero_padding_length]


if __name__ == "__main__":
    # python -m spectrallab.dsp_core.fft
    import time

    print("=" * 70)
    print("Radix-2 FFT vs numpy.fft.rfft (scaled to this package's convention)")
    print("=" * 70)

    rng = np.random.default_rng(0)
    for n in [64, 256, 1024, 4096]:
        x = rng.standard_normal(n)
        engine = FFT().initialize(n)
        _ = engine.direct(x)

        start = time.time()
        ours = engine.direct(x)
        elapsed = (time.time() - start) * 1000

        ref = np.fft.rfft(x) * _SQRT2 / n
        ref[0] = ref[0].real / _SQRT2
        ref[-1] = ref[-1].real / _SQRT2
        error = np.abs(ours - ref).max()
        status = "✓" if error < 1e-10 else "✗"
        print(f"  N={n:5d}: max_error={error:.2e} time={elapsed:.3f} ms {status}")
