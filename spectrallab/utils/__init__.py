"""
Utility modules.
"""

from .logging import setup_logging, get_logger, log_section
from .plot import plot_spectrum, plot_spectrogram

__all__ = ['setup_logging', 'get_logger', 'log_section', 'plot_spectrum', 'plot_spectrogram']
