"""Exception types raised by the festboard services."""


class FestboardError(Exception):
    """Base class for all festboard errors.

    ``str(exc)`` is safe to show to API callers.
    """


class ValidationError(FestboardError):
    """A write request is missing required fields or carries malformed ones."""


class AuthenticationError(FestboardError):
    """Wrong access code, or a missing/malformed/mis-signed/expired token."""


class PersistenceError(FestboardError):
    """The snapshot could not be written to durable storage."""
