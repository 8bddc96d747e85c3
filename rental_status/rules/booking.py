"""Booking status transitions driven by payments and direct requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rental_status.exceptions import (
    EntityNotFoundError,
    InvalidArgumentsError,
    NoAssociatedBookingError,
    RentalStatusError,
)
from rental_status.models.rental import BookingStatus, PropertyStatus
from rental_status.results import OperationResult
from rental_status.store.rental import RentalDataStore

if TYPE_CHECKING:
    from rental_status.events import StatusEventPublisher

logger = logging.getLogger(__name__)


def _missing(value) -> bool:
    return value is None or value == ""


def coerce_booking_status(status: BookingStatus | str) -> BookingStatus:
    """Parse a booking status, raising InvalidArgumentsError when unknown."""
    try:
        return BookingStatus(status)
    except ValueError:
        raise InvalidArgumentsError(f"Unknown booking status: {status}") from None


class BookingStatusManager:
    """Apply booking status changes against a :class:`RentalDataStore`.

    Every public method returns an :class:`OperationResult`; rule violations
    never raise out of this class.
    """

    def __init__(
        self, store: RentalDataStore, publisher: StatusEventPublisher | None = None
    ) -> None:
        self.store = store
        self.publisher = publisher

    def on_payment_completed(self, payment_id: int) -> OperationResult:
        """Accept the booking paid for by ``payment_id`` and rent its property.

        The booking id is taken from the payment itself or, failing that,
        from the payment's agreement. Both writes happen in one transaction.
        """
        try:
            with self.store.transaction():
                payment = self.store.get_payment(payment_id)
                if payment is None:
                    raise EntityNotFoundError("Payment not found")

                booking_id = payment.booking_id
                if booking_id is None and payment.agreement_id is not None:
                    agreement = self.store.get_agreement(payment.agreement_id)
                    if agreement is not None:
                        booking_id = agreement.booking_id

                if booking_id is None:
                    raise NoAssociatedBookingError("No associated booking found")

                booking = self.store.get_booking(booking_id)
                if booking is None:
                    raise EntityNotFoundError("Booking not found")

                self.store.update_booking_status(booking_id, BookingStatus.ACCEPTED)
                self.store.update_property_status(booking.property_id, PropertyStatus.RENTED)
        except RentalStatusError as e:
            logger.warning(
                "Payment %s completion not applied: %s", payment_id, e, extra={"payment_id": payment_id}
            )
            return OperationResult.from_exception(e)
        except Exception as e:
            logger.exception(
                "Payment %s completion rolled back", payment_id, extra={"payment_id": payment_id}
            )
            return OperationResult.from_exception(e)

        logger.info(
            "Payment %s completed: booking %s accepted, property %s rented",
            payment_id,
            booking.booking_id,
            booking.property_id,
            extra={
                "payment_id": payment_id,
                "booking_id": booking.booking_id,
                "property_id": booking.property_id,
            },
        )
        if self.publisher is not None:
            self.publisher.publish("booking", [booking])
            prop = self.store.get_property(booking.property_id)
            if prop is not None:
                self.publisher.publish("property", [prop])

        return OperationResult.ok("Booking accepted", booking=booking)

    def set_booking_status(
        self, booking_id: int | None, status: BookingStatus | str | None
    ) -> OperationResult:
        """Directly set a booking's status."""
        try:
            if _missing(booking_id) or _missing(status):
                raise InvalidArgumentsError("Booking ID and status are required")
            new_status = coerce_booking_status(status)

            if self.store.update_booking_status(booking_id, new_status) == 0:
                raise EntityNotFoundError("Booking not found or status not updated")
        except RentalStatusError as e:
            logger.warning(
                "Booking %s status not updated: %s", booking_id, e, extra={"booking_id": booking_id}
            )
            return OperationResult.from_exception(e)
        except Exception as e:
            logger.exception(
                "Booking %s status update failed", booking_id, extra={"booking_id": booking_id}
            )
            return OperationResult.from_exception(e)

        logger.info(
            "Booking %s status set to %s",
            booking_id,
            new_status.value,
            extra={"booking_id": booking_id},
        )
        if self.publisher is not None:
            self.publisher.publish("booking", [self.store.get_booking(booking_id)])

        return OperationResult.ok(f"Booking status updated to {new_status.value}")

    def set_status_by_agreement(
        self, agreement_id: int | None, status: BookingStatus | str | None
    ) -> OperationResult:
        """Set the status of the booking an agreement was made for."""
        try:
            if _missing(agreement_id) or _missing(status):
                raise InvalidArgumentsError("Agreement ID and status are required")

            agreement = self.store.get_agreement(agreement_id)
            if agreement is None or agreement.booking_id is None:
                raise EntityNotFoundError("Agreement not found or no booking associated")
        except RentalStatusError as e:
            logger.warning(
                "Agreement %s booking not updated: %s",
                agreement_id,
                e,
                extra={"agreement_id": agreement_id},
            )
            return OperationResult.from_exception(e)
        except Exception as e:
            logger.exception(
                "Agreement %s lookup failed", agreement_id, extra={"agreement_id": agreement_id}
            )
            return OperationResult.from_exception(e)

        return self.set_booking_status(agreement.booking_id, status)

    def cancel_booking(self, booking_id: int | None, agreement_id: int | None) -> OperationResult:
        """Delete an agreement and the booking it covers, together."""
        try:
            if _missing(booking_id) or _missing(agreement_id):
                raise InvalidArgumentsError("Booking ID and agreement ID are required")

            with self.store.transaction():
                if self.store.remove_agreement(agreement_id) == 0:
                    raise EntityNotFoundError(f"Agreement {agreement_id} not found")
                if self.store.remove_booking(booking_id) == 0:
                    raise EntityNotFoundError(f"Booking {booking_id} not found")
        except RentalStatusError as e:
            logger.warning("Booking %s not cancelled: %s", booking_id, e)
            return OperationResult.from_exception(e)
        except Exception as e:
            logger.exception("Cancellation of booking %s rolled back", booking_id)
            return OperationResult.from_exception(e)

        logger.info(
            "Booking %s and agreement %s cancelled",
            booking_id,
            agreement_id,
            extra={"booking_id": booking_id, "agreement_id": agreement_id},
        )
        return OperationResult.ok("Booking cancelled")
