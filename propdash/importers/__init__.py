"""Importers that turn external files into propdash records."""

from propdash.importers.events_csv import (
    AcceptedRow,
    ImportReport,
    RejectedRow,
    parse_event_row,
    parse_events_csv,
    parse_events_file,
)

__all__ = [
    "AcceptedRow",
    "ImportReport",
    "RejectedRow",
    "parse_event_row",
    "parse_events_csv",
    "parse_events_file",
]
