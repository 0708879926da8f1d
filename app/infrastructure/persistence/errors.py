"""Errors raised by the persistence layer."""


class PersistenceError(Exception):
    """Raised when the database rejects or fails an operation."""


class NotFoundError(Exception):
    """Raised when a requested record does not exist.

    This is an expected outcome, not a failure of the store, and callers
    should handle it separately from PersistenceError.
    """
