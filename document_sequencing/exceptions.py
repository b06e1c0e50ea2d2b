class SequencingError(Exception):
    """Base class for errors raised by the sequencing core."""


class InputError(SequencingError):
    """A document handed to the pipeline is not a string."""


class ConfigError(SequencingError, ValueError):
    """An option is outside its valid range. Raised when the config is built."""


class InternalInvariantViolation(SequencingError, AssertionError):
    """Vocabulary and index spaces disagree. Not recoverable."""
