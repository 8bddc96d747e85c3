"""Enumeration types for rental domain entities.

Values are the capitalised strings the platform stores and sends over the
wire, so ``BookingStatus("Expired")`` round-trips API payloads.
"""

from enum import Enum


class PropertyStatus(str, Enum):
    AVAILABLE = "Available"
    RENTED = "Rented"
    UNAVAILABLE = "Unavailable"


class BookingStatus(str, Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
    EXPIRED = "Expired"
    COMPLETED = "Completed"


class AgreementStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    ACTIVE = "Active"
    EXPIRED = "Expired"
    COMPLETED = "Completed"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"
