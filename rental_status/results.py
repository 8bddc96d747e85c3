"""Typed operation results returned by the status rules."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rental_status.exceptions import (
    EntityNotFoundError,
    InvalidArgumentsError,
    InvalidTransitionError,
    NoAssociatedBookingError,
)


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    NO_ASSOCIATED_BOOKING = "NoAssociatedBooking"
    INVALID_ARGUMENTS = "InvalidArguments"
    INVALID_TRANSITION = "InvalidTransition"
    PERSISTENCE = "Persistence"


# Checked in order, so subclasses must precede their bases.
_ERROR_KINDS: list[tuple[type[Exception], ErrorKind]] = [
    (EntityNotFoundError, ErrorKind.NOT_FOUND),
    (NoAssociatedBookingError, ErrorKind.NO_ASSOCIATED_BOOKING),
    (InvalidArgumentsError, ErrorKind.INVALID_ARGUMENTS),
    (InvalidTransitionError, ErrorKind.INVALID_TRANSITION),
]

_HTTP_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NO_ASSOCIATED_BOOKING: 404,
    ErrorKind.INVALID_ARGUMENTS: 400,
    ErrorKind.INVALID_TRANSITION: 409,
    ErrorKind.PERSISTENCE: 500,
}


@dataclass
class OperationResult:
    """Outcome of a rule operation.

    ``success`` is False for every expected failure; ``error`` then names
    the failure kind and ``message`` carries the human-readable reason.
    Extra payload (the booking, old/new status, ...) lives in ``data``.
    """

    success: bool
    message: str = ""
    error: ErrorKind | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str = "", **data: Any) -> "OperationResult":
        """Build a successful result."""
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "OperationResult":
        """Build a failed result."""
        return cls(success=False, message=message, error=error)

    @classmethod
    def from_exception(cls, exc: Exception) -> "OperationResult":
        """Translate an exception into a failed result.

        Known rule errors map onto their ``ErrorKind``; anything else is
        treated as a persistence fault.
        """
        for exc_type, kind in _ERROR_KINDS:
            if isinstance(exc, exc_type):
                return cls.fail(kind, str(exc))
        return cls.fail(ErrorKind.PERSISTENCE, str(exc))

    @property
    def http_status(self) -> int:
        """HTTP status code a request handler should answer with."""
        if self.success:
            return 200
        return _HTTP_STATUS.get(self.error, 500)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]
