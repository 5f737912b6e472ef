"""
Scheduling Errors

Exception types raised by the scheduling services. The split between
ValidationError and TransientStoreError tells callers whether a failed
mutation is known to have changed nothing or might have been applied.
"""


class SundayTableError(Exception):
    """Base class for all scheduling errors."""

    applied = False

    def to_dict(self):
        return {'error': str(self), 'applied': self.applied}


class ValidationError(SundayTableError):
    """Raised when a request is rejected before anything is written."""
    pass


class TransientStoreError(SundayTableError):
    """
    Raised when the database is unavailable during a read or write.

    maybe_applied is True when the failure happened while committing, in
    which case the change may or may not be durable. Re-read the record
    before retrying a confirmation.
    """

    def __init__(self, message, maybe_applied=False):
        super().__init__(message)
        self.maybe_applied = maybe_applied

    @property
    def applied(self):
        return 'unknown' if self.maybe_applied else False


class ConflictError(TransientStoreError):
    """Raised when a record kept changing underneath every retry."""

    def __init__(self, message):
        super().__init__(message, maybe_applied=False)


class ExternalServiceError(SundayTableError):
    """Raised inside the suggestion adapter when the service call fails."""
    pass
