"""Rental domain data store with referential integrity."""

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator

from rental_status.exceptions import ReferentialIntegrityError
from rental_status.models.rental import (
    Agreement,
    Booking,
    BookingStatus,
    Payment,
    PaymentStatus,
    Property,
    PropertyStatus,
)

logger = logging.getLogger(__name__)

_TABLES = ("properties", "bookings", "agreements", "payments")


@dataclass
class RentalDataStore:
    """In-memory store for rental entities.

    Update methods mirror ``UPDATE ... WHERE id = ?`` and return the number
    of rows changed, so callers can tell a missing record from a no-op.
    Writes made inside :meth:`transaction` are undone if the block raises.
    """

    properties: dict[int, Property] = field(default_factory=dict)
    bookings: dict[int, Booking] = field(default_factory=dict)
    agreements: dict[int, Agreement] = field(default_factory=dict)
    payments: dict[int, Payment] = field(default_factory=dict)

    _snapshot: dict[str, dict[int, Any]] | None = field(default=None, init=False, repr=False)

    def add_property(self, prop: Property) -> None:
        """Add a property to the store."""
        if prop.created_at is None:
            prop.created_at = datetime.now()
        self.properties[prop.property_id] = prop

    def add_booking(self, booking: Booking) -> None:
        """Add a booking to the store."""
        if booking.property_id not in self.properties:
            raise ReferentialIntegrityError(f"Property {booking.property_id} not found")

        if booking.created_at is None:
            booking.created_at = datetime.now()
        self.bookings[booking.booking_id] = booking

    def add_agreement(self, agreement: Agreement) -> None:
        """Add an agreement to the store."""
        if agreement.booking_id is not None and agreement.booking_id not in self.bookings:
            raise ReferentialIntegrityError(f"Booking {agreement.booking_id} not found")

        if agreement.created_at is None:
            agreement.created_at = datetime.now()
        self.agreements[agreement.agreement_id] = agreement

    def add_payment(self, payment: Payment) -> None:
        """Add a payment to the store."""
        if payment.agreement_id is not None and payment.agreement_id not in self.agreements:
            raise ReferentialIntegrityError(f"Agreement {payment.agreement_id} not found")

        if payment.booking_id is not None and payment.booking_id not in self.bookings:
            raise ReferentialIntegrityError(f"Booking {payment.booking_id} not found")

        if payment.payment_date is None:
            payment.payment_date = datetime.now()
        self.payments[payment.payment_id] = payment

    # Query methods
    def get_property(self, property_id: int) -> Property | None:
        return self.properties.get(property_id)

    def get_booking(self, booking_id: int) -> Booking | None:
        return self.bookings.get(booking_id)

    def get_agreement(self, agreement_id: int) -> Agreement | None:
        return self.agreements.get(agreement_id)

    def get_payment(self, payment_id: int) -> Payment | None:
        return self.payments.get(payment_id)

    def get_agreement_payments(self, agreement_id: int) -> list[Payment]:
        """Get all payments made against an agreement."""
        return [p for p in self.payments.values() if p.agreement_id == agreement_id]

    def latest_payment_for_agreement(self, agreement_id: int) -> Payment | None:
        """Get the most recent payment for an agreement, by payment date."""
        payments = self.get_agreement_payments(agreement_id)
        if not payments:
            return None
        return max(payments, key=lambda p: p.payment_date or datetime.min)

    # Update methods
    def update_property_status(self, property_id: int, status: PropertyStatus) -> int:
        """Set a property's status. Returns rows changed."""
        return self._set_field(self.properties, property_id, "status", status)

    def update_booking_status(self, booking_id: int, status: BookingStatus) -> int:
        """Set a booking's status. Returns rows changed."""
        return self._set_field(self.bookings, booking_id, "status", status)

    def update_payment_status(self, payment_id: int, status: PaymentStatus) -> int:
        """Set a payment's status. Returns rows changed."""
        return self._set_field(self.payments, payment_id, "payment_status", status)

    def remove_booking(self, booking_id: int) -> int:
        """Delete a booking. Returns rows removed."""
        return 1 if self.bookings.pop(booking_id, None) is not None else 0

    def remove_agreement(self, agreement_id: int) -> int:
        """Delete an agreement. Returns rows removed."""
        return 1 if self.agreements.pop(agreement_id, None) is not None else 0

    @contextmanager
    def transaction(self) -> Iterator["RentalDataStore"]:
        """Run a block of writes atomically.

        On any exception, every table is restored to its state at the start
        of the outermost transaction and the exception is re-raised. Record
        objects are restored in place, so references held by callers see
        the rolled-back values. Nested calls join the enclosing transaction.
        """
        if self._snapshot is not None:
            yield self
            return

        self._snapshot = {name: copy.deepcopy(getattr(self, name)) for name in _TABLES}
        try:
            yield self
        except Exception:
            self._restore(self._snapshot)
            logger.debug("Transaction rolled back")
            raise
        finally:
            self._snapshot = None

    @property
    def in_transaction(self) -> bool:
        return self._snapshot is not None

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {name: len(getattr(self, name)) for name in _TABLES}

    def _set_field(self, table: dict[int, Any], key: int, attr: str, value: Any) -> int:
        record = table.get(key)
        if record is None:
            return 0
        setattr(record, attr, value)
        if hasattr(record, "updated_at"):
            record.updated_at = datetime.now()
        return 1

    def _restore(self, snapshot: dict[str, dict[int, Any]]) -> None:
        for name in _TABLES:
            live = getattr(self, name)
            restored: dict[int, Any] = {}
            for key, saved in snapshot[name].items():
                current = live.get(key)
                if current is not None:
                    vars(current).update(vars(saved))
                    restored[key] = current
                else:
                    restored[key] = saved
            live.clear()
            live.update(restored)
