"""Booking model."""

from dataclasses import dataclass
from datetime import datetime

from rental_status.models.rental.enums import BookingStatus


@dataclass
class Booking:
    """A renter's reservation against a property."""

    booking_id: int
    property_id: int
    status: BookingStatus
    renter_name: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
