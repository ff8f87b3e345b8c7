"""
Discrete Fourier Transform engine (brute force and cached).

Every output bin is accumulated independently, so bins are spread over
threads with ``numba.prange``; the compiled call returns only once every bin
is written. Works for any total length, which makes it the cross-check for
the radix-2 FFT and the engine of choice for non-power-of-two frames.

Pre-calculating the sine/cosine terms speeds the transform up several times
but costs two half_length x total_length tables. When the tables cannot be
allocated the engine silently falls back to brute force; ``is_using_cache``
reports which path is active.
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np
from numba import jit, prange

from .config import TransformConfig
from ..exceptions import PreconditionViolationError

logger = logging.getLogger(__name__)

_SQRT2 = math.sqrt(2.0)


@jit(nopython=True, cache=True, parallel=True)
def _fill_tables(cos_term: np.ndarray, sin_term: np.ndarray, scale: float) -> None:
    half, total = cos_term.shape
    sf = 2.0 * math.pi / total
    for j in prange(half):
        for k in range(total):
            a = ((j * k) % total) * sf
            cos_term[j, k] = math.cos(a) * scale
            sin_term[j, k] = math.sin(a) * scale


@jit(nopython=True, cache=True, parallel=True)
def _dft_brute(x: np.ndarray, half: int, scale: float) -> np.ndarray:
    """Brute force DFT of a complex series, one prange task per bin."""
    total = x.shape[0]
    sf = 2.0 * math.pi / total
    re_in = x.real.copy()
    im_in = x.imag.copy()
    out = np.empty(half, dtype=np.complex128)

    for j in prange(half):
        acc_re = 0.0
        acc_im = 0.0
        for k in range(total):
            a = ((j * k) % total) * sf
            c = math.cos(a) * scale
            s = math.sin(a) * scale
            acc_re += re_in[k] * c + im_in[k] * s
            acc_im += im_in[k] * c - re_in[k] * s
        out[j] = complex(acc_re, acc_im)

    return out


@jit(nopython=True, cache=True, parallel=True)
def _dft_cached(x: np.ndarray, cos_term: np.ndarray, sin_term: np.ndarray) -> np.ndarray:
    """DFT reading pre-scaled terms from the tables instead of calling trig."""
    half, total = cos_term.shape
    re_in = x.real.copy()
    im_in = x.imag.copy()
    out = np.empty(half, dtype=np.complex128)

    for j in prange(half):
        acc_re = 0.0
        acc_im = 0.0
        for k in range(total):
            c = cos_term[j, k]
            s = sin_term[j, k]
            acc_re += re_in[k] * c + im_in[k] * s
            acc_im += im_in[k] * c - re_in[k] * s
        out[j] = complex(acc_re, acc_im)

    return out


@jit(nopython=True, cache=True, parallel=True)
def _idft_brute(full: np.ndarray) -> np.ndarray:
    """Unscaled inverse accumulation, one prange task per output sample."""
    total = full.shape[0]
    sf = 2.0 * math.pi / total
    re_in = full.real.copy()
    im_in = full.imag.copy()
    out = np.empty(total, dtype=np.complex128)

    for n in prange(total):
        acc_re = 0.0
        acc_im = 0.0
        for k in range(total):
            a = ((n * k) % total) * sf
            c = math.cos(a)
            s = math.sin(a)
            acc_re += re_in[k] * c - im_in[k] * s
            acc_im += im_in[k] * c + re_in[k] * s
        out[n] = complex(acc_re, acc_im)

    return out


class DFT:
    """
    DFT engine with optional pre-calculated sine/cosine tables.

    Call ``initialize`` first, and again whenever the setup changes. Any
    total length is accepted.

    Attributes:
        cache_limit_bytes: Largest combined size of the two tables that the
            engine will try to allocate. Larger setups run uncached.
    """

    cache_limit_bytes: int = 512 * 1024 * 1024

    def __init__(self):
        # (config, cos table, sin table), replaced as a whole by initialize()
        self._plan: Optional[Tuple[TransformConfig, Optional[np.ndarray], Optional[np.ndarray]]] = None

    def initialize(
        self,
        input_length: int,
        zero_padding_length: int = 0,
        force_no_cache: bool = False
    ) -> 'DFT':
        """
        Configure the DFT.

        Args:
            input_length: Length of the time series
            zero_padding_length: Number of zeros appended before transforming
            force_no_cache: True skips the pre-calculated tables entirely

        Returns:
            self, for chaining
        """
        config = TransformConfig.create(input_length, zero_padding_length)
        cos_term, sin_term = self._build_tables(config, force_no_cache)

        self._plan = (config, cos_term, sin_term)
        logger.debug(
            "DFT initialized: N=%d, Z=%d, total=%d, half=%d, cached=%s",
            config.input_length, config.zero_padding_length, config.total_length,
            config.half_length, cos_term is not None,
        )
        return self

    @property
    def config(self) -> TransformConfig:
        return self._require_plan()[0]

    @property
    def is_using_cache(self) -> bool:
        """True when the current setup runs from pre-calculated tables."""
        plan = self._plan
        return plan is not None and plan[1] is not None

    def direct(self, time_series) -> np.ndarray:
        """
        Forward transform of a real time series.

        Args:
            time_series: Real samples, length <= total_length (zero-padded)

        Returns:
            One-sided complex spectrum of half_length bins
        """
        plan = self._require_plan()
        x = plan[0].prepare_input(time_series, allow_complex=False)
        return _forward(x, *plan)

    def execute(self, series) -> np.ndarray:
        """Forward transform of a real or complex series. See ``direct``."""
        plan = self._require_plan()
        return _forward(plan[0].prepare_input(series), *plan)

    def inverse(self, spectrum) -> np.ndarray:
        """
        Inverse of this engine's own forward scaling.

        Same convention as ``FFT.inverse``: unscaled inverse accumulation
        followed by a single 1/sqrt(2).

        Args:
            spectrum: half_length one-sided or total_length full spectrum

        Returns:
            total_length complex samples
        """
        config = self._require_plan()[0]
        full = config.full_spectrum(spectrum)
        return _idft_brute(full) / _SQRT2

    def frequency_span(self, sampling_rate: float) -> np.ndarray:
        """Frequency axis (Hz) matching the output of ``direct``."""
        return self.config.frequency_span(sampling_rate)

    def _build_tables(self, config: TransformConfig, force_no_cache: bool):
        if force_no_cache:
            return None, None

        table_bytes = 2 * config.half_length * config.total_length * np.dtype(np.float64).itemsize
        if table_bytes > self.cache_limit_bytes:
            logger.info(
                "DFT cache needs %.1f MiB (limit %.1f MiB); using brute force",
                table_bytes / 2**20, self.cache_limit_bytes / 2**20,
            )
            return None, None

        try:
            cos_term = np.empty((config.half_length, config.total_length), dtype=np.float64)
            sin_term = np.empty((config.half_length, config.total_length), dtype=np.float64)
        except MemoryError:
            logger.warning(
                "Out of memory allocating DFT cache for total length %d; using brute force",
                config.total_length,
            )
            return None, None

        _fill_tables(cos_term, sin_term, config.scale_factor)
        return cos_term, sin_term

    def _require_plan(self):
        plan = self._plan
        if plan is None:
            raise PreconditionViolationError("DFT not initialized. Call initialize() first.")
        return plan


def _forward(
    x: np.ndarray,
    config: TransformConfig,
    cos_term: Optional[np.ndarray],
    sin_term: Optional[np.ndarray]
) -> np.ndarray:
    if cos_term is None:
        result = _dft_brute(x, config.half_length, config.scale_factor)
    else:
        result = _dft_cached(x, cos_term, sin_term)

    # DC and Fs/2 have no mirrored counterpart, scale them differently
    result[0] = complex(result[0].real / _SQRT2, 0.0)
    last = config.half_length - 1
    result[last] = complex(result[last].real / _SQRT2, 0.0)
    return result


def dft(x, zero_padding_length: int = 0, force_no_cache: bool = False) -> np.ndarray:
    """One-shot forward DFT of a real time series."""
    x = np.asarray(x, dtype=np.float64)
    engine = DFT().initialize(x.shape[0], zero_padding_length, force_no_cache=force_no_cache)
    return engine.direct(x)
