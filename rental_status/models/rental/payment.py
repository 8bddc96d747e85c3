"""Payment model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rental_status.models.rental.enums import PaymentStatus


@dataclass
class Payment:
    """Rent payment, referencing an agreement or directly a booking."""

    payment_id: int
    payment_status: PaymentStatus
    agreement_id: int | None = None
    booking_id: int | None = None
    amount: Decimal = Decimal("0")
    payment_gateway: str = "eSewa"
    payment_date: datetime | None = None
    transaction_id: str | None = None  # Gateway reference once completed
