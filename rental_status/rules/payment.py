"""Payment status transition policy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rental_status.exceptions import (
    EntityNotFoundError,
    InvalidArgumentsError,
    InvalidTransitionError,
    RentalStatusError,
)
from rental_status.models.rental import PaymentStatus
from rental_status.results import OperationResult
from rental_status.store.rental import RentalDataStore

if TYPE_CHECKING:
    from rental_status.events import StatusEventPublisher

logger = logging.getLogger(__name__)

VALID_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset(
        {PaymentStatus.COMPLETED, PaymentStatus.FAILED, PaymentStatus.CANCELLED}
    ),
    PaymentStatus.COMPLETED: frozenset(),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PENDING}),
    PaymentStatus.CANCELLED: frozenset({PaymentStatus.PENDING}),
}


def _parse(status: PaymentStatus | str | None) -> PaymentStatus | None:
    try:
        return PaymentStatus(status)
    except ValueError:
        return None


def is_valid_transition(
    current_status: PaymentStatus | str | None,
    new_status: PaymentStatus | str | None,
) -> bool:
    """Check a payment status change against the transition table.

    Unknown statuses on either side are never valid.
    """
    current = _parse(current_status)
    if current is None:
        return False
    return _parse(new_status) in VALID_TRANSITIONS.get(current, frozenset())


class PaymentStatusValidator:
    """Persist payment status changes the transition table allows."""

    def __init__(
        self, store: RentalDataStore, publisher: StatusEventPublisher | None = None
    ) -> None:
        self.store = store
        self.publisher = publisher

    def update_status(
        self, payment_id: int | None, new_status: PaymentStatus | str | None
    ) -> OperationResult:
        """Move a payment to ``new_status``.

        Returns
        -------
        OperationResult
            On success ``data`` holds ``old_status`` and ``new_status``.
        """
        try:
            if payment_id is None or not new_status:
                raise InvalidArgumentsError("Payment ID and status are required")

            payment = self.store.get_payment(payment_id)
            if payment is None:
                raise EntityNotFoundError("Payment not found")

            old_status = payment.payment_status
            if not is_valid_transition(old_status, new_status):
                raise InvalidTransitionError(
                    getattr(old_status, "value", old_status),
                    getattr(new_status, "value", new_status),
                )

            target = PaymentStatus(new_status)
            self.store.update_payment_status(payment_id, target)
        except RentalStatusError as e:
            logger.warning(
                "Payment %s status not updated: %s", payment_id, e, extra={"payment_id": payment_id}
            )
            return OperationResult.from_exception(e)
        except Exception as e:
            logger.exception(
                "Payment %s status update failed", payment_id, extra={"payment_id": payment_id}
            )
            return OperationResult.from_exception(e)

        logger.info(
            "Payment %s: %s -> %s",
            payment_id,
            old_status.value,
            target.value,
            extra={"payment_id": payment_id},
        )
        if self.publisher is not None:
            self.publisher.publish("payment", [payment])

        return OperationResult.ok(
            f"Payment status updated to {target.value}",
            old_status=old_status,
            new_status=target,
        )

    def agreement_payment_status(self, agreement_id: int | None) -> OperationResult:
        """Latest payment for an agreement, alongside the agreement's state."""
        try:
            if agreement_id is None:
                raise InvalidArgumentsError("Agreement ID is required")

            payment = self.store.latest_payment_for_agreement(agreement_id)
            if payment is None:
                raise EntityNotFoundError("No payment found for this agreement")

            agreement = self.store.get_agreement(agreement_id)
            if agreement is None:
                raise EntityNotFoundError("Agreement not found")
        except RentalStatusError as e:
            return OperationResult.from_exception(e)
        except Exception as e:
            logger.exception("Payment lookup for agreement %s failed", agreement_id)
            return OperationResult.from_exception(e)

        return OperationResult.ok(
            payment={
                "payment_id": payment.payment_id,
                "amount": payment.amount,
                "status": payment.payment_status,
                "date": payment.payment_date,
                "payment_gateway": payment.payment_gateway,
                "transaction_id": payment.transaction_id,
            },
            agreement={
                "agreement_id": agreement.agreement_id,
                "status": agreement.status,
                "start_date": agreement.start_date,
                "end_date": agreement.end_date,
            },
        )
