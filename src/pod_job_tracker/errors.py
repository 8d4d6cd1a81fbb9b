from abc import ABC


class UserError(ABC, Exception):
    """Base class for caller-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the caller. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested pod is not found or is excluded by the label selector."""

    def __init__(self, message: str = "Pod not found") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when request input is missing or malformed."""


class RequestCancelledError(UserError):
    """Raised when the caller goes away before the update finished."""

    def __init__(self, message: str = "Client closed request") -> None:
        super().__init__(message)


class CounterError(Exception):
    """Base class for server-side counter update failures.

    The message is a short diagnostic that is safe to return to the caller.
    The underlying cause is chained and only goes to the logs.
    """


class CorruptCounterError(CounterError):
    """Raised when the counter label holds a value that is not a base-10 integer."""


class StoreUnavailableError(CounterError):
    """Raised when the record store cannot be reached or rejects a request."""


class WriteConflictError(CounterError):
    """Raised by a store when a conditional write loses against a concurrent writer."""

    def __init__(self, message: str = "Pod was modified concurrently") -> None:
        super().__init__(message)


class ConflictRetriesExhaustedError(CounterError):
    """Raised when every allowed attempt ended in a write conflict."""


class InvalidCounterValueError(CounterError):
    """Raised when a computed counter value cannot be stored as a label value."""
