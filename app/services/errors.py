"""Errors raised by the calendar and timer core"""


class CoreError(ValueError):
    """Base class for local, recoverable errors of the core services"""


class ValidationError(CoreError):
    """Out-of-range slot index, non-positive duration, bad break count"""


class FormatError(CoreError):
    """Unparseable duration string"""


class StateError(CoreError):
    """Operation not allowed in the current timer or drag state"""
