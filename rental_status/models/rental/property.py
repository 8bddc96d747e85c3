"""Rental property model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rental_status.models.rental.enums import PropertyStatus


@dataclass
class Property:
    """Property listed for rent by a landlord."""

    property_id: int
    status: PropertyStatus
    title: str = ""
    address: str = ""
    city: str = ""
    landlord_name: str = ""
    monthly_rent: Decimal = Decimal("0")
    created_at: datetime | None = None  # Record creation timestamp
    updated_at: datetime | None = None
