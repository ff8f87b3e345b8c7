"""
Short-Time Fourier Transform with 50% overlapping frames.

Frames of ``frame_length`` samples are taken every ``frame_length // 2``
samples, multiplied by a window and transformed with one engine that is
configured once and reused for every frame. The inverse overlap-adds the
real part of each frame's inverse transform at its hop offset.

Note:
    ``istft`` applies no window-gain compensation. Reconstruction is only
    exact for windows that overlap-add to a constant at 50% hop (Hann is;
    Hamming is approximately; flat-tops are not), and because the engine
    inverse attenuates the DC and Nyquist bins, frames whose windowed
    content has energy in those bins come back slightly off.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Union

import numpy as np

from .dft import DFT
from .fft import FFT
from .window import WindowType, coefficients
from ..exceptions import InvalidLengthError

logger = logging.getLogger(__name__)

ENGINES = ('fft', 'dft')


@dataclass
class STFTResult:
    """
    Ordered frame spectra of one STFT.

    ``spectra[i]`` is the one-sided spectrum of the frame starting at
    ``i * hop_length``; the order is temporal and ``istft`` relies on it.
    """
    spectra: List[np.ndarray] = field(default_factory=list)
    frame_length: int = 1024
    zero_padding_length: int = 0
    window_type: WindowType = WindowType.HANN
    engine: str = 'fft'

    @property
    def hop_length(self) -> int:
        return self.frame_length // 2

    @property
    def n_frames(self) -> int:
        return len(self.spectra)

    def __len__(self) -> int:
        return len(self.spectra)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self.spectra)

    def __getitem__(self, index):
        return self.spectra[index]

    def as_matrix(self) -> np.ndarray:
        """Spectra stacked as (n_frames, n_bins), for bin-vs-time slicing."""
        if not self.spectra:
            raise ValueError("STFT result has no frames")
        return np.stack(self.spectra, axis=0)


def make_engine(engine: str, frame_length: int, zero_padding_length: int = 0) -> Union[FFT, DFT]:
    """Build and initialize the transform engine used for every frame."""
    if engine == 'fft':
        return FFT().initialize(frame_length, zero_padding_length)
    if engine == 'dft':
        return DFT().initialize(frame_length, zero_padding_length)
    raise ValueError(f"Unknown engine: {engine} (expected one of {ENGINES})")


def stft(
    wavein,
    window_type: Union[str, WindowType] = WindowType.HANN,
    frame_length: int = 1024,
    zero_padding_length: int = 0,
    engine: str = 'fft'
) -> STFTResult:
    """
    Compute the STFT of a real signal.

    Parameters
    ----------
    wavein : array-like
        Real input samples
    window_type : str or WindowType
        Analysis window applied to each frame
    frame_length : int
        Samples per frame; must be even. A power of two with 'fft'.
    zero_padding_length : int
        Zeros appended to every frame before transforming
    engine : str
        'fft' (radix-2) or 'dft' (any length)

    Returns
    -------
    STFTResult
        len(wavein) // (frame_length // 2) - 1 frame spectra in time order

    Examples
    --------
    >>> y = np.random.randn(8192)
    >>> result = stft(y, 'hann', frame_length=1024)
    >>> len(result)  # 15 frames of 513 bins
    """
    x = np.asarray(wavein, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    _validate_frame_length(frame_length)

    window_type = WindowType.from_name(window_type)
    hop = frame_length // 2
    n_frames = x.shape[0] // hop - 1
    if n_frames < 1:
        raise ValueError(
            f"Signal of {x.shape[0]} samples is shorter than one frame of {frame_length}"
        )

    transform = make_engine(engine, frame_length, zero_padding_length)
    w = coefficients(window_type, frame_length)

    spectra = []
    for i in range(n_frames):
        frame = x[i * hop:i * hop + frame_length] * w
        spectra.append(transform.direct(frame))

    logger.debug(
        "STFT: %d frames of %d samples (hop %d, window %s, engine %s)",
        n_frames, frame_length, hop, window_type.value, engine,
    )
    return STFTResult(
        spectra=spectra,
        frame_length=frame_length,
        zero_padding_length=zero_padding_length,
        window_type=window_type,
        engine=engine,
    )


def istft(result: STFTResult) -> np.ndarray:
    """
    Overlap-add reconstruction of an STFT.

    Each frame's inverse transform (real part, zero-padded tail dropped) is
    added into the output at ``frame_index * hop_length``. The zero padding
    gain of the forward transform is undone; window gain is not.

    Returns
    -------
    np.ndarray
        (n_frames + 1) * hop_length samples
    """
    if len(result) == 0:
        raise ValueError("STFT result has no frames")

    frame_length = result.frame_length
    hop = result.hop_length
    transform = make_engine(result.engine, frame_length, result.zero_padding_length)
    config = transform.config
    padding_gain = config.input_length / config.total_length

    waveout = np.zeros((len(result) + 1) * hop)
    for i, spectrum in enumerate(result):
        frame = transform.inverse(spectrum).real[:frame_length]
        if result.zero_padding_length:
            frame = frame * padding_gain
        waveout[i * hop:i * hop + frame_length] += frame

    return waveout


def _validate_frame_length(frame_length: int) -> None:
    if isinstance(frame_length, bool) or not isinstance(frame_length, (int, np.integer)):
        raise InvalidLengthError(f"frame_length must be an integer, got {frame_length!r}")
    if frame_length < 2 or frame_length % 2:
        raise InvalidLengthError(f"frame_length must be even and >= 2, got {frame_length}")
