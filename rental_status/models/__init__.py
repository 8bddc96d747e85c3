"""Domain models for the rental platform."""

from rental_status.models.base import Event

__all__ = ["Event"]
