"""Sample-data generators for the rental domain."""

from rental_status.generators.rental import (
    AgreementGenerator,
    BookingGenerator,
    PaymentGenerator,
    PropertyGenerator,
)

__all__ = [
    "AgreementGenerator",
    "BookingGenerator",
    "PaymentGenerator",
    "PropertyGenerator",
]
