"""Logging setup for rental-status.

Rule operations log through ``logging.getLogger(__name__)`` and attach the
ids they touched with ``extra={"booking_id": ...}``. The JSON format lifts
those ids into top-level fields so log pipelines can filter by entity.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from rental_status.exceptions import ConfigurationError

LOG_FORMATS = ("standard", "json")

CONTEXT_FIELDS = ("property_id", "booking_id", "agreement_id", "payment_id")

NOISY_LOGGERS = ("confluent_kafka", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger with a single stream handler.

    Parameters
    ----------
    level : str
        Log level name; unknown names fall back to INFO.
    format_type : str
        "standard" for pipe-separated text, "json" for one object per line.
    stream : TextIO | None
        Destination, stdout when omitted.

    Raises
    ------
    ConfigurationError
        ``format_type`` is not one of :data:`LOG_FORMATS`.
    """
    if format_type not in LOG_FORMATS:
        raise ConfigurationError(
            f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {format_type!r}"
        )
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with entity ids as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)

