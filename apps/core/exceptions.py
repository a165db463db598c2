"""Exceptions raised inside the backend client before they become envelope errors."""


class BackendError(Exception):
    """Base exception for backend client operations."""
    pass


class RecordNotFoundError(BackendError):
    """Raised when a point read, update or delete targets a missing record."""
    pass
