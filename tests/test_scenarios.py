"""Tests for scenarios."""

from datetime import date

from rental_status.models.rental import AgreementStatus, PaymentStatus, PropertyStatus
from rental_status.rules.expiration import ExpirationSweeper, find_expired
from rental_status.scenarios import LeasePortfolioScenario

REFERENCE = date(2024, 4, 15)


class TestLeasePortfolioScenario:
    """Tests for LeasePortfolioScenario."""

    def test_generate(self, seed: int) -> None:
        scenario = LeasePortfolioScenario(num_properties=30, reference_date=REFERENCE, seed=seed)
        store = scenario.generate()

        assert len(store.properties) == 30
        assert len(store.agreements) == len(store.payments)
        assert all(p.payment_status == PaymentStatus.COMPLETED for p in store.payments.values())

    def test_every_agreement_rents_its_property(self, seed: int) -> None:
        store = LeasePortfolioScenario(num_properties=30, reference_date=REFERENCE, seed=seed).generate()

        for agreement in store.agreements.values():
            booking = store.get_booking(agreement.booking_id)
            assert store.get_property(booking.property_id).status == PropertyStatus.RENTED

    def test_expired_ids_match_find_expired(self, seed: int) -> None:
        scenario = LeasePortfolioScenario(
            num_properties=40, occupancy_rate=1.0, expired_rate=0.5, reference_date=REFERENCE, seed=seed
        )
        store = scenario.generate()

        expired = find_expired(store.agreements.values(), REFERENCE)

        assert [a.agreement_id for a in expired] == scenario.get_expired_agreement_ids()
        assert expired

    def test_sweep_frees_expired_properties(self, seed: int) -> None:
        scenario = LeasePortfolioScenario(
            num_properties=20, occupancy_rate=1.0, expired_rate=1.0, reference_date=REFERENCE, seed=seed
        )
        store = scenario.generate()

        report = ExpirationSweeper(store).run(REFERENCE)

        assert len(report.agreements) == 20
        assert all(a.status == AgreementStatus.EXPIRED for a in store.agreements.values())
        assert all(p.status == PropertyStatus.AVAILABLE for p in store.properties.values())

    def test_no_expiry(self, seed: int) -> None:
        scenario = LeasePortfolioScenario(
            num_properties=20, expired_rate=0.0, reference_date=REFERENCE, seed=seed
        )
        scenario.generate()

        assert scenario.get_expired_agreement_ids() == []
