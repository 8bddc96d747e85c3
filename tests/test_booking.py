"""Tests for booking status transitions."""

from unittest.mock import MagicMock

import pytest

from rental_status.models.rental import BookingStatus, PropertyStatus
from rental_status.results import ErrorKind
from rental_status.rules.booking import BookingStatusManager
from rental_status.store.rental import RentalDataStore


@pytest.fixture
def manager(store: RentalDataStore) -> BookingStatusManager:
    return BookingStatusManager(store)


class TestOnPaymentCompleted:
    """Tests for the payment-completion path."""

    def test_accepts_booking_and_rents_property(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        result = manager.on_payment_completed(123)

        assert result.success is True
        assert result.data["booking"].booking_id == 789
        assert store.get_booking(789).status == BookingStatus.ACCEPTED
        assert store.get_property(101).status == PropertyStatus.RENTED
        assert not store.in_transaction

    def test_resolves_booking_through_agreement(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        result = manager.on_payment_completed(124)

        assert result.success is True
        assert store.get_booking(789).status == BookingStatus.ACCEPTED
        assert store.get_property(101).status == PropertyStatus.RENTED

    def test_payment_not_found(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        result = manager.on_payment_completed(999)

        assert result.success is False
        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Payment not found"
        assert store.get_booking(789).status == BookingStatus.PENDING

    def test_no_associated_booking(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        result = manager.on_payment_completed(125)

        assert result.success is False
        assert result.error == ErrorKind.NO_ASSOCIATED_BOOKING
        assert result.message == "No associated booking found"

    def test_agreement_without_booking(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        store.payments[124].agreement_id = 457

        result = manager.on_payment_completed(124)

        assert result.error == ErrorKind.NO_ASSOCIATED_BOOKING

    def test_booking_not_found(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        store.payments[123].booking_id = 555

        result = manager.on_payment_completed(123)

        assert result.success is False
        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Booking not found"
        assert store.get_property(101).status == PropertyStatus.AVAILABLE

    def test_store_fault_rolls_back_booking(
        self, manager: BookingStatusManager, store: RentalDataStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail(*args, **kwargs):
            raise ConnectionError("database connection lost")

        monkeypatch.setattr(store, "update_property_status", fail)

        result = manager.on_payment_completed(123)

        assert result.success is False
        assert result.error == ErrorKind.PERSISTENCE
        assert result.message == "database connection lost"
        assert result.http_status == 500
        assert store.get_booking(789).status == BookingStatus.PENDING
        assert store.get_property(101).status == PropertyStatus.AVAILABLE
        assert not store.in_transaction

    def test_publishes_booking_and_property(self, store: RentalDataStore) -> None:
        publisher = MagicMock()
        manager = BookingStatusManager(store, publisher=publisher)

        manager.on_payment_completed(123)

        entities = [c.args[0] for c in publisher.publish.call_args_list]
        assert entities == ["booking", "property"]

    def test_failure_publishes_nothing(self, store: RentalDataStore) -> None:
        publisher = MagicMock()
        manager = BookingStatusManager(store, publisher=publisher)

        manager.on_payment_completed(999)

        publisher.publish.assert_not_called()


class TestSetBookingStatus:
    """Tests for direct booking status updates."""

    def test_direct_update(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        result = manager.set_booking_status(789, "Cancelled")

        assert result.success is True
        assert store.get_booking(789).status == BookingStatus.CANCELLED

    def test_accepts_enum(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        result = manager.set_booking_status(789, BookingStatus.REJECTED)

        assert result.success is True
        assert store.get_booking(789).status == BookingStatus.REJECTED

    def test_unknown_booking(self, manager: BookingStatusManager) -> None:
        result = manager.set_booking_status(999, "Cancelled")

        assert result.success is False
        assert result.error == ErrorKind.NOT_FOUND
        assert result.http_status == 404

    def test_missing_status(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        store.update_booking_status = MagicMock()

        result = manager.set_booking_status(789, None)

        assert result.success is False
        assert result.error == ErrorKind.INVALID_ARGUMENTS
        store.update_booking_status.assert_not_called()

    def test_missing_booking_id(self, manager: BookingStatusManager) -> None:
        result = manager.set_booking_status(None, "Cancelled")

        assert result.error == ErrorKind.INVALID_ARGUMENTS
        assert result.http_status == 400

    def test_unknown_status_value(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        result = manager.set_booking_status(789, "Archived")

        assert result.error == ErrorKind.INVALID_ARGUMENTS
        assert store.get_booking(789).status == BookingStatus.PENDING

    def test_store_fault_becomes_persistence_failure(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        store.update_booking_status = MagicMock(side_effect=ConnectionError("db down"))

        result = manager.set_booking_status(789, "Cancelled")

        assert result.success is False
        assert result.error is ErrorKind.PERSISTENCE
        assert result.message == "db down"


class TestSetStatusByAgreement:
    """Tests for agreement-driven booking updates."""

    def test_updates_agreement_booking(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        result = manager.set_status_by_agreement(456, "Rejected")

        assert result.success is True
        assert store.get_booking(789).status == BookingStatus.REJECTED

    def test_unknown_agreement(self, manager: BookingStatusManager) -> None:
        result = manager.set_status_by_agreement(999, "Cancelled")

        assert result.success is False
        assert result.error == ErrorKind.NOT_FOUND

    def test_agreement_without_booking(self, manager: BookingStatusManager) -> None:
        result = manager.set_status_by_agreement(457, "Cancelled")

        assert result.error == ErrorKind.NOT_FOUND
        assert result.message == "Agreement not found or no booking associated"

    def test_missing_arguments(self, manager: BookingStatusManager) -> None:
        assert manager.set_status_by_agreement(None, "Cancelled").error == ErrorKind.INVALID_ARGUMENTS
        assert manager.set_status_by_agreement(456, "").error == ErrorKind.INVALID_ARGUMENTS

    def test_store_fault_becomes_persistence_failure(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        store.update_booking_status = MagicMock(side_effect=ConnectionError("db down"))

        result = manager.set_status_by_agreement(456, "Rejected")

        assert result.error is ErrorKind.PERSISTENCE
        assert store.get_booking(789).status == BookingStatus.PENDING

    def test_lookup_fault_becomes_persistence_failure(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        store.get_agreement = MagicMock(side_effect=ConnectionError("db down"))

        result = manager.set_status_by_agreement(456, "Rejected")

        assert result.error is ErrorKind.PERSISTENCE
        assert result.message == "db down"


class TestCancelBooking:
    """Tests for cancelling an agreement together with its booking."""

    def test_removes_both(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        result = manager.cancel_booking(789, 456)

        assert result.success is True
        assert store.get_agreement(456) is None
        assert store.get_booking(789) is None

    def test_missing_booking_restores_agreement(
        self, manager: BookingStatusManager, store: RentalDataStore
    ) -> None:
        result = manager.cancel_booking(555, 456)

        assert result.success is False
        assert result.error == ErrorKind.NOT_FOUND
        assert store.get_agreement(456) is not None

    def test_missing_agreement(self, manager: BookingStatusManager, store: RentalDataStore) -> None:
        result = manager.cancel_booking(789, 999)

        assert result.error == ErrorKind.NOT_FOUND
        assert store.get_booking(789) is not None

    def test_missing_arguments(self, manager: BookingStatusManager) -> None:
        assert manager.cancel_booking(789, None).error == ErrorKind.INVALID_ARGUMENTS
