"""
Logging setup for analysis runs.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, by the runner scripts, under the ``spectrallab`` logger.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: str = None,
    name: str = None
) -> logging.Logger:
    """
    Attach a quiet console handler and an optional file handler to a logger.

    Args:
        log_file: File receiving every record at ``level`` and above
        level: Level of the logger and of the file handler
        format_string: Overrides LOG_FORMAT
        name: Logger to configure ('spectrallab' for the whole package)

    Returns:
        The configured logger
    """
    formatter = logging.Formatter(format_string or LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Results go to the rich console; only problems reach stdout
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.WARNING)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Shorthand for ``logging.getLogger``."""
    return logging.getLogger(name)


def log_section(logger: logging.Logger, title: str, values: dict) -> None:
    """Log a titled block of key/value pairs, nested dicts indented."""
    logger.info("=" * 60)
    logger.info(title)
    logger.info("=" * 60)
    _log_dict(logger, values, indent=2)


def _log_dict(logger: logging.Logger, d: dict, indent: int = 0) -> None:
    prefix = " " * indent
    for key, value in d.items():
        if isinstance(value, dict):
            logger.info(f"{prefix}{key}:")
            _log_dict(logger, value, indent + 2)
        elif isinstance(value, float):
            logger.info(f"{prefix}{key}: {value:.6g}")
        else:
            logger.info(f"{prefix}{key}: {value}")
