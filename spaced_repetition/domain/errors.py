class ReviewSchedulerError(Exception):
    """Base class for every error raised by the review scheduler."""


class ValidationError(ReviewSchedulerError, ValueError):
    """Malformed input: unknown rating, negative interval, blank key..."""


class NotFoundError(ReviewSchedulerError, LookupError):
    """The card does not exist, or does not belong to the caller."""


class PersistenceError(ReviewSchedulerError):
    """The card store failed. The original exception is chained as __cause__."""
