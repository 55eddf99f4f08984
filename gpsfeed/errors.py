"""Caller-visible errors of the position service.

Each error carries the short ``code`` string reported to remote callers.
Decode failures and stream errors are not represented here: they are
handled inside the feed and never reach a caller.
"""

__all__ = [
    "BadIdError",
    "GPSFeedError",
    "MissingIdError",
    "ResourceExhaustedError",
    "SubscriptionFailedError",
    "UnknownTypeError",
]


class GPSFeedError(Exception):
    """Base class for errors reported to a caller of the query surface."""

    code = "error"


class UnknownTypeError(GPSFeedError):
    """The requested representation type name is not known."""

    code = "unknown-type"


class MissingIdError(GPSFeedError):
    """An unsubscribe request did not name a subscription id."""

    code = "missing-id"


class BadIdError(GPSFeedError):
    """The subscription id is malformed or not registered."""

    code = "bad-id"


class ResourceExhaustedError(GPSFeedError):
    """No room for another subscription; nothing was registered."""

    code = "out-of-memory"


class SubscriptionFailedError(GPSFeedError):
    """The subscription request could not be honoured."""

    code = "failed"
