"""Output sinks for status-change events."""

from rental_status.sinks.console import ConsoleSink
from rental_status.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "KafkaSink"]
