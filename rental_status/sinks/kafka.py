"""Kafka sink for status-change events."""

import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import Producer

from rental_status.config import KafkaConfig
from rental_status.exceptions import SinkError
from rental_status.models.base import Event
from rental_status.sinks.serialization import to_json

logger = logging.getLogger(__name__)

# Checked in order; the first one a record carries is its own id.
KEY_FIELDS = ("payment_id", "agreement_id", "booking_id", "property_id")


@dataclass
class DeliveryStats:
    """Per-sink delivery counters fed by the producer callback."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def pending(self) -> int:
        return self.sent - self.delivered - self.failed

    @property
    def success_rate(self) -> float:
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


def message_key(record: Any) -> str | None:
    """Kafka key for a record: the id of the entity that changed.

    Keying by entity id keeps every change to one record on one partition,
    in order.
    """
    if isinstance(record, Event):
        return record.subject

    for name in KEY_FIELDS:
        if isinstance(record, dict):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return str(value)
    return None


class KafkaSink:
    """Publish status-change events to Kafka topics as JSON.

    Parameters
    ----------
    config : KafkaConfig | str
        Producer settings, or just the bootstrap servers.
    flush_timeout : float
        Seconds :meth:`flush` waits for outstanding deliveries.
    """

    def __init__(self, config: KafkaConfig | str, flush_timeout: float = 30.0) -> None:
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.flush_timeout = flush_timeout
        self.stats = DeliveryStats()
        self.producer = Producer(config.to_dict())

    def _on_delivery(self, err: Any, msg: Any) -> None:
        if err:
            self.stats.failed += 1
            logger.error("Event delivery to %s failed: %s", msg.topic(), err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, topic: str, record: Any) -> None:
        """Queue one record for ``topic``; delivery is confirmed on flush."""
        key = message_key(record)
        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=to_json(record),
                on_delivery=self._on_delivery,
            )
        except BufferError as e:
            raise SinkError(f"Producer queue full while sending to {topic}") from e
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Send ``records`` to ``topic`` and wait until they are delivered."""
        for record in records:
            self.send(topic, record)
        self.flush()
        logger.info("Published %d events to %s", len(records), topic)

    def flush(self) -> None:
        """Block until queued messages are delivered.

        Raises
        ------
        SinkError
            Messages were still undelivered when ``flush_timeout`` ran out.
        """
        remaining = self.producer.flush(self.flush_timeout)
        if remaining:
            raise SinkError(
                f"{remaining} events still undelivered after {self.flush_timeout}s"
            )

    def close(self) -> None:
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
