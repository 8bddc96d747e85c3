"""Lease agreement model."""

from dataclasses import dataclass
from datetime import date, datetime

from rental_status.models.rental.enums import AgreementStatus


@dataclass
class Agreement:
    """Lease linking an approved booking to a date range."""

    agreement_id: int
    booking_id: int | None
    start_date: date
    end_date: date  # Last day of the lease
    status: AgreementStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
