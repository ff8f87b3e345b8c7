"""
Configuration for spectrum analysis runs.

The transform engines themselves take plain integers; this module only
describes a complete analysis (signal, window, engine, reporting) so that
runs can be driven from YAML files.
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .dsp_core.stft import ENGINES
from .dsp_core.window import WindowType


@dataclass
class ToneConfig:
    """Test tone synthesized for the analysis."""
    amplitude_vrms: float = 1.0
    frequency_hz: float = 1000.0
    dc: float = 0.0
    phase_deg: float = 0.0
    noise_vrms: float = 0.0
    seed: Optional[int] = None

    def validate(self) -> None:
        if self.amplitude_vrms < 0:
            raise ValueError(f"tone.amplitude_vrms must be >= 0, got {self.amplitude_vrms}")
        if self.frequency_hz < 0:
            raise ValueError(f"tone.frequency_hz must be >= 0, got {self.frequency_hz}")
        if self.noise_vrms < 0:
            raise ValueError(f"tone.noise_vrms must be >= 0, got {self.noise_vrms}")


@dataclass
class AnalysisConfig:
    """
    One analysis run.

    Attributes:
        sampling_rate: Sampling rate in Hz
        length: Samples per transform
        zero_padding: Zeros appended before transforming
        engine: 'dft' or 'fft'
        window: WindowType name
        force_no_cache: Run the DFT without its twiddle tables
        edge_bins: Bins skipped at each edge for noise floor estimates
        frame_length: STFT frame length, 0 to skip the spectrogram
        tone: Test tone settings
    """
    sampling_rate: float = 100000.0
    length: int = 1024
    zero_padding: int = 0
    engine: str = 'fft'
    window: str = 'hann'
    force_no_cache: bool = False
    edge_bins: int = 10
    frame_length: int = 0
    tone: ToneConfig = field(default_factory=ToneConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'AnalysisConfig':
        """
        Build a config from a plain dict, e.g. parsed YAML.

        Raises:
            ValueError: on unknown keys or invalid values
        """
        data = dict(data or {})
        tone_data = data.pop('tone', None) or {}
        if not isinstance(tone_data, dict):
            raise ValueError(f"tone must be a mapping, got {type(tone_data).__name__}")

        _reject_unknown(data, cls, ignore={'tone'})
        _reject_unknown(tone_data, ToneConfig, prefix='tone.')

        config = cls(tone=ToneConfig(**tone_data), **data)
        config.validate()
        return config

    def validate(self) -> None:
        if self.sampling_rate <= 0:
            raise ValueError(f"sampling_rate must be > 0, got {self.sampling_rate}")
        if not isinstance(self.length, int) or self.length <= 0:
            raise ValueError(f"length must be a positive integer, got {self.length!r}")
        if not isinstance(self.zero_padding, int) or self.zero_padding < 0:
            raise ValueError(f"zero_padding must be an integer >= 0, got {self.zero_padding!r}")
        if self.engine not in ENGINES:
            raise ValueError(f"engine must be one of {ENGINES}, got {self.engine!r}")
        try:
            WindowType.from_name(self.window)
        except ValueError as e:
            raise ValueError(f"window: {e}") from e
        if self.edge_bins < 0:
            raise ValueError(f"edge_bins must be >= 0, got {self.edge_bins}")
        if self.frame_length < 0 or self.frame_length % 2:
            raise ValueError(f"frame_length must be 0 or a positive even integer, got {self.frame_length}")
        self.tone.validate()

    @property
    def window_type(self) -> WindowType:
        return WindowType.from_name(self.window)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Union[str, Path]) -> AnalysisConfig:
    """Load an AnalysisConfig from a YAML file."""
    with open(config_path, 'r') as f:
        return AnalysisConfig.from_dict(yaml.safe_load(f))


def _reject_unknown(data: Dict[str, Any], cls, ignore=(), prefix: str = '') -> None:
    known = {f.name for f in fields(cls)} - set(ignore)
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config key: {prefix}{unknown[0]}")
