"""Status rules for agreements, bookings and payments."""

from rental_status.rules.booking import BookingStatusManager
from rental_status.rules.expiration import ExpirationSweeper, SweepReport, find_expired, sweep
from rental_status.rules.lease import ValidationResult, validate_lease_period
from rental_status.rules.payment import (
    VALID_TRANSITIONS,
    PaymentStatusValidator,
    is_valid_transition,
)

__all__ = [
    "BookingStatusManager",
    "ExpirationSweeper",
    "PaymentStatusValidator",
    "SweepReport",
    "VALID_TRANSITIONS",
    "ValidationResult",
    "find_expired",
    "is_valid_transition",
    "sweep",
    "validate_lease_period",
]
