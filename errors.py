class TimelineError(Exception):
    """Base class for timeline contract violations."""


class NotFoundError(TimelineError, LookupError):
    """Unknown clip or track id."""


class InvalidArgumentError(TimelineError, ValueError):
    """Negative time, non-positive duration or malformed project data."""


class InvalidStateError(TimelineError, RuntimeError):
    """Operation called out of sequence, e.g. a second drag while one is active."""
