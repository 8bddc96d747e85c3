"""Record generators for the rental domain."""

from __future__ import annotations

import random
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterator

from rental_status.generators.base import BaseGenerator
from rental_status.models.rental import (
    Agreement,
    AgreementStatus,
    Booking,
    BookingStatus,
    Payment,
    PaymentStatus,
    Property,
    PropertyStatus,
)


class PropertyGenerator(BaseGenerator):
    """Generate synthetic rental properties."""

    TITLES = ["Apartment", "Room", "Flat", "House", "Studio"]

    def generate(self, status: PropertyStatus = PropertyStatus.AVAILABLE) -> Property:
        """Generate a property.

        Returns
        -------
        Property
            Generated property.
        """
        rent = random.randint(8, 80) * 1000
        return Property(
            property_id=self.next_id(),
            status=status,
            title=f"{random.choice(self.TITLES)} in {self.fake.city()}",
            address=self.fake.street_address(),
            city=self.fake.city(),
            landlord_name=self.fake.name(),
            monthly_rent=Decimal(rent),
            created_at=datetime.now() - timedelta(days=random.randint(30, 720)),
        )

    def generate_batch(self, count: int) -> Iterator[Property]:
        for _ in range(count):
            yield self.generate()


class BookingGenerator(BaseGenerator):
    """Generate bookings against existing properties."""

    def generate(self, property_id: int, status: BookingStatus = BookingStatus.PENDING) -> Booking:
        return Booking(
            booking_id=self.next_id(),
            property_id=property_id,
            status=status,
            renter_name=self.fake.name(),
            created_at=datetime.now(),
        )


class AgreementGenerator(BaseGenerator):
    """Generate lease agreements for bookings."""

    LEASE_MONTHS = [3, 6, 12, 24]

    def generate(
        self,
        booking_id: int,
        start_date: date,
        months: int | None = None,
        status: AgreementStatus = AgreementStatus.ACTIVE,
    ) -> Agreement:
        """Generate an agreement starting on ``start_date``.

        The lease runs ``months`` months (random when omitted) and ends the
        day before the same day-of-month.
        """
        months = months or random.choice(self.LEASE_MONTHS)
        return Agreement(
            agreement_id=self.next_id(),
            booking_id=booking_id,
            start_date=start_date,
            end_date=_add_months(start_date, months) - timedelta(days=1),
            status=status,
        )


class PaymentGenerator(BaseGenerator):
    """Generate rent payments for agreements."""

    def generate(
        self,
        agreement_id: int | None,
        amount: Decimal,
        status: PaymentStatus = PaymentStatus.PENDING,
        booking_id: int | None = None,
        payment_date: datetime | None = None,
    ) -> Payment:
        return Payment(
            payment_id=self.next_id(),
            payment_status=status,
            agreement_id=agreement_id,
            booking_id=booking_id,
            amount=amount,
            payment_date=payment_date or datetime.now(),
            transaction_id=(
                self.fake.bothify("??##??##").upper()
                if status == PaymentStatus.COMPLETED
                else None
            ),
        )


def _add_months(start: date, months: int) -> date:
    """Same day ``months`` later, clamped to the end of shorter months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    next_month = date(year + month // 12, month % 12 + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return date(year, month, min(start.day, last_day))
