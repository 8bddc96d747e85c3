"""Agreement expiration sweeping.

An agreement whose end date has passed is marked ``Expired``; the change is
pushed to the booking it covers (``Expired``) and to that booking's
property (``Available``) in the same pass.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import TYPE_CHECKING, Iterable

from rental_status.models.rental import (
    Agreement,
    AgreementStatus,
    Booking,
    BookingStatus,
    Property,
    PropertyStatus,
)
from rental_status.store.rental import RentalDataStore

if TYPE_CHECKING:
    from rental_status.events import StatusEventPublisher

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """Records mutated by one sweep."""

    processed: bool
    message: str
    agreements: list[Agreement] = field(default_factory=list)
    bookings: list[Booking] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)

    @property
    def updated(self) -> dict[str, list]:
        return {
            "agreements": self.agreements,
            "bookings": self.bookings,
            "properties": self.properties,
        }


def _as_datetime(value: date | datetime, tzinfo=None) -> datetime:
    """Midnight of ``value`` when given a plain date."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=tzinfo)


def _as_utc(value: date | datetime) -> datetime:
    """Aware UTC instant; naive values are taken as local time."""
    return _as_datetime(value).astimezone(timezone.utc)


def is_expired(agreement: Agreement, now: date | datetime) -> bool:
    """True when the agreement ended before ``now`` and is not yet marked."""
    if agreement.status == AgreementStatus.EXPIRED:
        return False
    current = _as_datetime(now)
    return _as_datetime(agreement.end_date, current.tzinfo) < current


def find_expired(agreements: Iterable[Agreement], now: date | datetime) -> list[Agreement]:
    """Return agreements past their end date that are not already expired.

    Parameters
    ----------
    agreements : Iterable[Agreement]
        Agreements to scan.
    now : date | datetime
        Reference instant. End dates count as midnight of that day.

    Returns
    -------
    list[Agreement]
        Matching agreements, in input order.
    """
    return [agreement for agreement in agreements if is_expired(agreement, now)]


def sweep(
    agreements: Iterable[Agreement],
    bookings: Iterable[Booking],
    properties: Iterable[Property],
    now: date | datetime,
) -> SweepReport:
    """Expire agreements and cascade to their bookings and properties.

    Records are mutated in place; persisting them is up to the caller.

    Returns
    -------
    SweepReport
        ``processed`` is False, with empty lists, when nothing had expired.
    """
    expired = find_expired(agreements, now)
    if not expired:
        return SweepReport(processed=False, message="No expired agreements found")

    for agreement in expired:
        agreement.status = AgreementStatus.EXPIRED

    booking_ids = {a.booking_id for a in expired if a.booking_id is not None}
    affected_bookings = [b for b in bookings if b.booking_id in booking_ids]
    for booking in affected_bookings:
        booking.status = BookingStatus.EXPIRED

    property_ids = {b.property_id for b in affected_bookings}
    affected_properties = [p for p in properties if p.property_id in property_ids]
    for prop in affected_properties:
        prop.status = PropertyStatus.AVAILABLE

    message = (
        f"Updated {len(expired)} agreements, {len(affected_bookings)} bookings, "
        f"and {len(affected_properties)} properties"
    )
    logger.info(message)

    return SweepReport(
        processed=True,
        message=message,
        agreements=expired,
        bookings=affected_bookings,
        properties=affected_properties,
    )


class ExpirationSweeper:
    """Run :func:`sweep` against a store, one sweep at a time.

    Parameters
    ----------
    store : RentalDataStore
        Backing store; the sweep runs inside one of its transactions.
    publisher : StatusEventPublisher | None
        Receives every record the sweep changed.
    min_interval : timedelta
        Minimum spacing enforced by :meth:`run_if_due`.
    """

    def __init__(
        self,
        store: RentalDataStore,
        publisher: StatusEventPublisher | None = None,
        min_interval: timedelta = timedelta(hours=24),
    ) -> None:
        self.store = store
        self.publisher = publisher
        self.min_interval = min_interval
        # Always UTC-aware
        self.last_run: datetime | None = None
        self._lock = threading.Lock()

    def run(self, now: date | datetime | None = None) -> SweepReport:
        """Sweep the store once and publish the resulting status changes."""
        now = now or datetime.now()
        with self._lock:
            with self.store.transaction():
                report = sweep(
                    list(self.store.agreements.values()),
                    list(self.store.bookings.values()),
                    list(self.store.properties.values()),
                    now,
                )
                stamp = datetime.now()
                for record in (*report.agreements, *report.bookings, *report.properties):
                    record.updated_at = stamp
            self.last_run = _as_utc(now)

        if not report.processed:
            logger.debug("No expired agreements at %s", now)
        elif self.publisher is not None:
            self.publisher.publish_sweep(report)

        return report

    def run_if_due(self, now: date | datetime | None = None) -> SweepReport | None:
        """Run a sweep unless the previous one was within ``min_interval``.

        Naive and aware values of ``now`` may be mixed across calls; the
        interval is measured in UTC.
        """
        now = now or datetime.now()
        if self.last_run is not None:
            elapsed = _as_utc(now) - self.last_run
            if elapsed < self.min_interval:
                logger.debug(
                    "Last expiration sweep was %.1f hours ago, skipping",
                    elapsed.total_seconds() / 3600,
                )
                return None
        return self.run(now)
