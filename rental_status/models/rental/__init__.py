"""Rental domain models."""

from rental_status.models.rental.agreement import Agreement
from rental_status.models.rental.booking import Booking
from rental_status.models.rental.enums import (
    AgreementStatus,
    BookingStatus,
    PaymentStatus,
    PropertyStatus,
)
from rental_status.models.rental.payment import Payment
from rental_status.models.rental.property import Property

__all__ = [
    "Agreement",
    "AgreementStatus",
    "Booking",
    "BookingStatus",
    "Payment",
    "PaymentStatus",
    "Property",
    "PropertyStatus",
]
