"""Console sink: print records as JSON for inspection."""

import json
import sys
from typing import Any, TextIO

from obra_metrics.sinks.serialization import to_dict

RULE = "=" * 60


class ConsoleSink:
    """Print record batches to a text stream (stdout by default)."""

    def __init__(
        self,
        pretty: bool = True,
        max_records: int | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Indent the JSON of each record.
        max_records : int | None
            Records shown per batch (None for all). The rest are only counted.
        stream : TextIO | None
            Destination, resolved to ``sys.stdout`` at write time when omitted.
        """
        self.pretty = pretty
        self.max_records = max_records
        self._stream = stream
        self._counts: dict[str, int] = {}

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a titled batch of records."""
        self._section(f"Entity: {entity_type} ({len(records)} records)")

        shown = records if self.max_records is None else records[: self.max_records]
        indent = 2 if self.pretty else None
        for record in shown:
            self._print(json.dumps(to_dict(record, decimal_as=float), indent=indent, ensure_ascii=False, default=str))

        hidden = len(records) - len(shown)
        if hidden > 0:
            self._print(f"... and {hidden} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print how many records of each type were written."""
        self._section("Console Sink Summary")
        for entity_type, count in self._counts.items():
            self._print(f"  {entity_type}: {count} records")

    def _section(self, title: str) -> None:
        self._print(f"\n{RULE}\n{title}\n{RULE}")

    def _print(self, text: str) -> None:
        print(text, file=self._stream or sys.stdout)
