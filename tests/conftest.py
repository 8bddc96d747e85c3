"""Pytest configuration and fixtures."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

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
from rental_status.store.rental import RentalDataStore


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sweep_agreements() -> list[Agreement]:
    """Four agreements: two lapsed by mid-April 2024, one current, one already expired."""
    return [
        Agreement(1, 101, date(2024, 1, 1), date(2024, 3, 31), AgreementStatus.ACTIVE),
        Agreement(2, 102, date(2024, 2, 1), date(2025, 1, 31), AgreementStatus.ACTIVE),
        Agreement(3, 103, date(2023, 1, 1), date(2023, 12, 31), AgreementStatus.ACTIVE),
        Agreement(4, 104, date(2023, 6, 1), date(2023, 11, 30), AgreementStatus.EXPIRED),
    ]


@pytest.fixture
def sweep_bookings() -> list[Booking]:
    return [
        Booking(101, 201, BookingStatus.CONFIRMED),
        Booking(102, 202, BookingStatus.CONFIRMED),
        Booking(103, 203, BookingStatus.CONFIRMED),
        Booking(104, 204, BookingStatus.EXPIRED),
    ]


@pytest.fixture
def sweep_properties() -> list[Property]:
    return [
        Property(201, PropertyStatus.RENTED),
        Property(202, PropertyStatus.RENTED),
        Property(203, PropertyStatus.RENTED),
        Property(204, PropertyStatus.AVAILABLE),
    ]


@pytest.fixture
def store() -> RentalDataStore:
    """Store holding one booking reachable from several payments.

    - payment 123: references agreement 456 and booking 789 directly
    - payment 124: references agreement 456 only
    - payment 125: references neither
    - agreement 457: has no booking
    """
    store = RentalDataStore()
    store.add_property(
        Property(101, PropertyStatus.AVAILABLE, title="Budget Room", monthly_rent=Decimal("15000"))
    )
    store.add_property(Property(102, PropertyStatus.AVAILABLE, title="Family House"))
    store.add_booking(Booking(789, 101, BookingStatus.PENDING, renter_name="Test Renter"))
    store.add_agreement(
        Agreement(456, 789, date(2024, 1, 1), date(2024, 12, 31), AgreementStatus.APPROVED)
    )
    store.add_agreement(
        Agreement(457, None, date(2024, 1, 1), date(2024, 12, 31), AgreementStatus.PENDING)
    )
    store.add_payment(
        Payment(
            123,
            PaymentStatus.PENDING,
            agreement_id=456,
            booking_id=789,
            amount=Decimal("15000"),
            payment_date=datetime(2024, 1, 1, 9, 0),
        )
    )
    store.add_payment(
        Payment(
            124,
            PaymentStatus.PENDING,
            agreement_id=456,
            amount=Decimal("15000"),
            payment_date=datetime(2024, 2, 1, 9, 0),
        )
    )
    store.add_payment(Payment(125, PaymentStatus.PENDING))
    return store
