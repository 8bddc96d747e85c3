"""Custom exception hierarchy for rental-status."""


class RentalStatusError(Exception):
    """Base exception for all rental-status errors."""


class EntityNotFoundError(RentalStatusError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class NoAssociatedBookingError(RentalStatusError):
    """Raised when a payment resolves to no booking, directly or via its agreement."""


class InvalidArgumentsError(RentalStatusError):
    """Raised when a required identifier or status value is missing."""


class InvalidTransitionError(RentalStatusError):
    """Raised when a status change is not in the allowed-transition table."""

    def __init__(self, old_status: str, new_status: str) -> None:
        super().__init__(f"Invalid status transition from {old_status} to {new_status}")
        self.old_status = old_status
        self.new_status = new_status


class ConfigurationError(RentalStatusError):
    """Raised when configuration is invalid or missing."""


class SinkError(RentalStatusError):
    """Raised when a sink operation fails."""
