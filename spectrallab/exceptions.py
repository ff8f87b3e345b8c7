"""
Error taxonomy for the transform engines.

Both fatal errors subclass ValueError so callers that already guard
argument errors with ``except ValueError`` keep working.
"""


class SpectralLabError(Exception):
    """Base class for errors raised by spectrallab."""


class InvalidLengthError(SpectralLabError, ValueError):
    """A transform was configured with a length it cannot support."""


class PreconditionViolationError(SpectralLabError, ValueError):
    """An engine was called with data that does not fit its configuration."""
