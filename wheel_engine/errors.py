"""
Wheel Engine Exceptions

Only conditions the caller must act on are raised. Recoverable planning
failures (unknown target, non-finite delta) are returned as values by the
planner instead.
"""


class WheelEngineError(Exception):
    """Base class for wheel engine errors."""


class DegenerateIndexError(WheelEngineError):
    """Raised when a spin or resolution is attempted with no entities."""

    def __init__(self, message: str = "Cannot spin a wheel with no entities"):
        super().__init__(message)


class MalformedQueueError(WheelEngineError, ValueError):
    """Raised when a fixed-target queue replacement fails validation.

    The queue is left exactly as it was before the call.
    """
