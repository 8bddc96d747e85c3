"""Lease period validation for new agreements."""

from dataclasses import dataclass
from datetime import date

MIN_LEASE_MONTHS = 3


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str


def validate_start_date(start_date: date | None, today: date | None = None) -> ValidationResult:
    """A lease cannot start in the past."""
    if start_date is None:
        return ValidationResult(False, "Start date is required")
    today = today or date.today()
    if start_date < today:
        return ValidationResult(False, "Start date cannot be in the past")
    return ValidationResult(True, "Valid start date")


def validate_end_date(start_date: date | None, end_date: date | None) -> ValidationResult:
    """A lease must end after it starts and run at least three whole months.

    Months are counted on the calendar, so Jan 31 to Apr 30 falls one day
    short of three months.
    """
    if end_date is None:
        return ValidationResult(False, "End date is required")
    if start_date is None:
        return ValidationResult(False, "Please select a start date first")
    if end_date <= start_date:
        return ValidationResult(False, "End date must be after start date")

    months = (end_date.year - start_date.year) * 12 + (end_date.month - start_date.month)
    if months < MIN_LEASE_MONTHS or (
        months == MIN_LEASE_MONTHS and end_date.day < start_date.day
    ):
        return ValidationResult(False, f"Lease period must be at least {MIN_LEASE_MONTHS} months")

    return ValidationResult(True, "Valid end date")


def validate_lease_period(
    start_date: date | None,
    end_date: date | None,
    today: date | None = None,
) -> ValidationResult:
    """Validate both ends of a proposed lease."""
    result = validate_start_date(start_date, today)
    if not result.valid:
        return result

    result = validate_end_date(start_date, end_date)
    if not result.valid:
        return result

    return ValidationResult(True, "Valid lease period")
