"""Configuration management for rental-status."""

import os
from dataclasses import dataclass, field
from typing import Any

from rental_status.exceptions import ConfigurationError


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class SweepConfig:
    """Agreement expiration sweep scheduling."""

    interval_hours: float = 24.0


@dataclass
class EventConfig:
    """Status-change event publishing."""

    topic_prefix: str = "dev.rental"
    source: str = "rental-status"


@dataclass
class RentalStatusConfig:
    """Main configuration for rental-status."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)
    events: EventConfig = field(default_factory=EventConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "RentalStatusConfig":
        """Create config from environment variables."""
        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        sweep = SweepConfig(
            interval_hours=_number("SWEEP_INTERVAL_HOURS", "24", float),
        )

        events = EventConfig(
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.rental"),
            source=os.getenv("EVENT_SOURCE", "rental-status"),
        )

        return cls(
            kafka=kafka,
            sweep=sweep,
            events=events,
            seed=_number("SEED", None, int),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _number(name: str, default: str | None, parse):
    raw = os.getenv(name, default)
    if raw is None or raw == "":
        return None
    try:
        return parse(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
