"""Status-change events published after rule operations."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from rental_status.exceptions import SinkError
from rental_status.models.base import Event
from rental_status.sinks.serialization import to_dict

if TYPE_CHECKING:
    from rental_status.rules.expiration import SweepReport

logger = logging.getLogger(__name__)

ENTITY_TOPICS = {
    "property": "properties",
    "booking": "bookings",
    "agreement": "agreements",
    "payment": "payments",
}

ID_FIELDS = {
    "property": "property_id",
    "booking": "booking_id",
    "agreement": "agreement_id",
    "payment": "payment_id",
}


class StatusEventPublisher:
    """Wrap changed records in :class:`Event` envelopes and hand them to a sink.

    Parameters
    ----------
    sink : Any
        Anything with ``write_batch(topic, records)``, e.g. ``KafkaSink``.
    source : str
        Value for the envelope's ``source`` field.
    topic_prefix : str
        Events for an entity go to ``"<topic_prefix>.<entity plural>"``.
    """

    def __init__(
        self,
        sink: Any,
        source: str = "rental-status",
        topic_prefix: str = "dev.rental",
    ) -> None:
        self.sink = sink
        self.source = source
        self.topic_prefix = topic_prefix

    def topic_for(self, entity: str) -> str:
        return f"{self.topic_prefix}.{ENTITY_TOPICS[entity]}"

    def build_event(self, entity: str, record: Any, metadata: dict | None = None) -> Event:
        """Build a ``<entity>.status_changed`` envelope for one record."""
        return Event(
            event_id=uuid.uuid4().hex,
            event_type=f"{entity}.status_changed",
            event_time=datetime.now(timezone.utc),
            source=self.source,
            subject=str(getattr(record, ID_FIELDS[entity])),
            data=to_dict(record),
            metadata=metadata or {},
        )

    def publish(self, entity: str, records: list[Any], metadata: dict | None = None) -> list[Event]:
        """Publish one batch of events for records of a single entity type.

        Events follow a committed change, so a sink failure is logged and
        reported as an empty list rather than raised.
        """
        if not records:
            return []
        events = [self.build_event(entity, record, metadata) for record in records]
        try:
            self.sink.write_batch(self.topic_for(entity), events)
        except SinkError as e:
            logger.error("Dropped %d %s events: %s", len(events), entity, e)
            return []
        logger.debug("Published %d %s events", len(events), entity)
        return events

    def publish_sweep(self, report: SweepReport) -> list[Event]:
        """Publish every record an expiration sweep changed."""
        metadata = {"trigger": "agreement_expired"}
        return [
            *self.publish("agreement", report.agreements, metadata),
            *self.publish("booking", report.bookings, metadata),
            *self.publish("property", report.properties, metadata),
        ]
