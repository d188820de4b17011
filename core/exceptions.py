# core/exceptions.py

class SParamError(Exception):
    """Base exception for S-parameter engine errors."""
    pass

class UnsupportedPortCountError(SParamError):
    """Raised when an operation does not support the network's port count."""
    pass

class UnsupportedFormatError(SParamError):
    """Raised when a Touchstone data format cannot be handled."""
    pass

class ExportIOError(SParamError):
    """Raised when an export destination cannot be written."""
    pass

class TouchstoneParseError(SParamError):
    """Raised when a Touchstone file cannot be parsed."""
    pass

class PortIndexError(SParamError, KeyError):
    """Raised when a (destination, source) port pair is not allocated."""
    pass

class InvariantViolationError(SParamError):
    """Raised when input would break a trace or network invariant."""
    pass

class UnsortedFrequencyError(InvariantViolationError):
    """Raised when trace frequencies are not non-decreasing."""
    pass

class InvalidFrequencyError(InvariantViolationError):
    """Raised for negative or non-finite frequencies."""
    pass

class PortCountMismatchError(InvariantViolationError):
    """Raised when cascading networks with different port counts."""
    pass

class GridMismatchError(InvariantViolationError):
    """Raised when traces that must share a frequency grid do not."""
    pass
