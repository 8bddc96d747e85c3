"""Console sink for watching status changes during development."""

import json
import sys
from collections import Counter
from typing import Any, TextIO

from rental_status.models.base import Event
from rental_status.sinks.serialization import to_dict


def describe(record: Any) -> str:
    """One-line summary of a status-change event."""
    if not isinstance(record, Event):
        return json.dumps(to_dict(record), ensure_ascii=False, default=str)
    status = record.data.get("status") or record.data.get("payment_status")
    line = f"{record.event_type} {record.subject} -> {status}"
    trigger = record.metadata.get("trigger")
    return f"{line} ({trigger})" if trigger else line


class ConsoleSink:
    """Print status-change events instead of publishing them.

    Parameters
    ----------
    pretty : bool
        Dump each record as indented JSON instead of a one-line summary.
    max_records : int | None
        Cap on records printed per batch; the rest are only counted.
    stream : TextIO | None
        Destination, stdout when omitted.
    """

    def __init__(
        self,
        pretty: bool = False,
        max_records: int | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.pretty = pretty
        self.max_records = max_records
        self.stream = stream
        self.counts: Counter[str] = Counter()

    def _print(self, text: str) -> None:
        print(text, file=self.stream or sys.stdout)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        self._print(f"--- {topic} ({len(records)} records)")

        shown = records[: self.max_records] if self.max_records else records
        for record in shown:
            if self.pretty:
                self._print(json.dumps(to_dict(record), indent=2, ensure_ascii=False, default=str))
            else:
                self._print(describe(record))

        hidden = len(records) - len(shown)
        if hidden:
            self._print(f"... and {hidden} more records")

        self.counts[topic] += len(records)

    def close(self) -> None:
        """Print how many records each topic received."""
        self._print("--- Console Sink Summary")
        for topic, count in sorted(self.counts.items()):
            self._print(f"  {topic}: {count} records")
