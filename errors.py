# errors.py


class SimulationError(Exception):
    """Base class for every recoverable failure raised by the engines."""


class ValidationError(SimulationError, ValueError):
    """Malformed or out-of-range input (non-positive size, bad frame count...)."""


class InvalidRangeError(ValidationError):
    """A disk position lies outside [0, disk_size)."""


class NoFitError(SimulationError):
    """No memory block has enough free space for the request."""


class UnknownAllocationError(SimulationError, LookupError):
    """Strict free of an allocation that does not exist or is already freed."""
