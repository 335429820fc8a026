"""Exception types for the stop game core."""


class StopGameError(Exception):
    """Base class for all game errors."""


class ValidationError(StopGameError, ValueError):
    """Raised when a letter, answer set or verdict has the wrong shape."""


class SessionStateError(StopGameError):
    """Raised when a session operation is invoked in the wrong stage."""
