"""Lease portfolio scenario: a populated store with some leases already over."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta

from rental_status.generators import (
    AgreementGenerator,
    BookingGenerator,
    PaymentGenerator,
    PropertyGenerator,
)
from rental_status.generators.rental import _add_months
from rental_status.models.rental import (
    AgreementStatus,
    BookingStatus,
    PaymentStatus,
    PropertyStatus,
)
from rental_status.store.rental import RentalDataStore

logger = logging.getLogger(__name__)


class LeasePortfolioScenario:
    """Generate properties, bookings, agreements and payments.

    This scenario creates:
    - Properties, a share of them rented under an active agreement
    - For rented properties: an accepted booking, the agreement and a
      completed first-month payment
    - Among those, a share whose agreement ended before ``reference_date``
      but is still marked active, ready for an expiration sweep
    - Pending bookings on some of the remaining available properties
    """

    def __init__(
        self,
        num_properties: int = 100,
        occupancy_rate: float = 0.60,
        expired_rate: float = 0.25,
        reference_date: date | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize lease portfolio scenario.

        Parameters
        ----------
        num_properties : int
            Number of properties to generate.
        occupancy_rate : float
            Share of properties under an agreement (0.0 to 1.0).
        expired_rate : float
            Share of agreements that ended before ``reference_date``.
        reference_date : date | None
            "Today" for the generated data (default: the real today).
        seed : int | None
            Random seed for reproducibility.
        """
        self.num_properties = num_properties
        self.occupancy_rate = occupancy_rate
        self.expired_rate = expired_rate
        self.reference_date = reference_date or date.today()
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self.store = RentalDataStore()
        self._property_gen = PropertyGenerator(seed=seed)
        self._booking_gen = BookingGenerator(seed=seed)
        self._agreement_gen = AgreementGenerator(seed=seed)
        self._payment_gen = PaymentGenerator(seed=seed)
        self._expired_ids: list[int] = []

    def generate(self) -> RentalDataStore:
        """Generate all data for the scenario.

        Returns
        -------
        RentalDataStore
            Store containing all generated data.
        """
        logger.info(
            "Starting lease portfolio scenario: %d properties, %.0f%% occupied, %.0f%% expired",
            self.num_properties,
            self.occupancy_rate * 100,
            self.expired_rate * 100,
        )

        for prop in self._property_gen.generate_batch(self.num_properties):
            self.store.add_property(prop)

            if random.random() < self.occupancy_rate:
                self._lease(prop.property_id, prop.monthly_rent)
            elif random.random() < 0.5:
                self.store.add_booking(self._booking_gen.generate(prop.property_id))

        logger.info("Scenario complete: %s", self.store.summary())
        return self.store

    def _lease(self, property_id: int, monthly_rent) -> None:
        self.store.update_property_status(property_id, PropertyStatus.RENTED)
        booking = self._booking_gen.generate(property_id, BookingStatus.ACCEPTED)
        self.store.add_booking(booking)

        months = random.choice(AgreementGenerator.LEASE_MONTHS)
        if random.random() < self.expired_rate:
            last_day = self.reference_date - timedelta(days=random.randint(1, 90))
            start = _add_months(last_day + timedelta(days=1), -months)
        else:
            start = self.reference_date - timedelta(days=random.randint(0, 60))

        agreement = self._agreement_gen.generate(
            booking.booking_id, start, months, AgreementStatus.ACTIVE
        )
        self.store.add_agreement(agreement)
        if agreement.end_date < self.reference_date:
            self._expired_ids.append(agreement.agreement_id)

        self.store.add_payment(
            self._payment_gen.generate(
                agreement.agreement_id,
                monthly_rent,
                PaymentStatus.COMPLETED,
                booking_id=booking.booking_id,
            )
        )

    def get_expired_agreement_ids(self) -> list[int]:
        """Ids of the agreements that ended before ``reference_date``."""
        return list(self._expired_ids)
