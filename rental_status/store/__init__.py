"""In-memory data stores for maintaining entity relationships."""

from rental_status.store.rental import RentalDataStore

__all__ = ["RentalDataStore"]
