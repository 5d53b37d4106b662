"""CSV import of prop-firm events.

Expected header: ``date,propFirm,type,amount``. Every data row is parsed into
either an :class:`AcceptedRow` or a :class:`RejectedRow`; invalid rows never
abort the import.
"""

import csv
import io
import logging
import math
import re
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from propdash.models import Event

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "propFirm", "type", "amount")
IMPORTABLE_TYPES = ("payout", "fee")

# Plain decimal amounts: "4233", "522.2", ".5". No exponents or separators.
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


class AcceptedRow(BaseModel):
    """A CSV row that became an event."""

    line: int = Field(..., description="Line number in the source file")
    event: Event

    model_config = {"frozen": True}


class RejectedRow(BaseModel):
    """A CSV row that was dropped, with the reason."""

    line: int = Field(..., description="Line number in the source file")
    reason: str
    row: dict[str, Optional[str]] = Field(default_factory=dict)

    model_config = {"frozen": True}


RowResult = Union[AcceptedRow, RejectedRow]


class ImportReport(BaseModel):
    """Outcome of an events CSV import."""

    accepted: list[AcceptedRow] = Field(default_factory=list)
    rejected: list[RejectedRow] = Field(default_factory=list)
    error: Optional[str] = Field(default=None, description="Set when the file could not be read")

    @property
    def events(self) -> list[Event]:
        return [row.event for row in self.accepted]

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.accepted)


def _column_key(name: str) -> str:
    return name.strip().replace("_", "").replace(" ", "").lower()


_COLUMN_LOOKUP = {_column_key(name): name for name in REQUIRED_COLUMNS}


def _normalize_row(row: dict) -> dict[str, Optional[str]]:
    """Map header variants (prop_firm, PropFirm, ' amount ') to canonical names."""
    normalized: dict[str, Optional[str]] = {}
    for key, value in row.items():
        if key is None:
            # Extra cells beyond the header.
            continue
        canonical = _COLUMN_LOOKUP.get(_column_key(key), key.strip())
        normalized[canonical] = value.strip() if isinstance(value, str) else value
    return normalized


def parse_event_row(row: dict, line: int = 0) -> RowResult:
    """Validate one CSV row.

    Args:
        row: Mapping of column name to cell text.
        line: Source line number, for reporting.

    Returns:
        AcceptedRow with the event, or RejectedRow with the reason.
    """
    cells = _normalize_row(row)

    for column in ("date", "propFirm", "type"):
        if not cells.get(column):
            return RejectedRow(line=line, reason=f"missing {column}", row=cells)

    event_type = cells["type"].lower()
    if event_type not in IMPORTABLE_TYPES:
        return RejectedRow(line=line, reason=f"unsupported type {cells['type']!r}", row=cells)

    raw_amount = cells.get("amount") or ""
    if not DECIMAL_PATTERN.fullmatch(raw_amount):
        return RejectedRow(line=line, reason=f"amount {raw_amount!r} is not a number", row=cells)
    amount = float(raw_amount)
    if not math.isfinite(amount) or amount < 0:
        return RejectedRow(line=line, reason=f"amount {raw_amount!r} out of range", row=cells)

    event = Event(
        date=cells["date"],
        prop_firm=cells["propFirm"],
        type=event_type,
        amount=amount,
    )
    return AcceptedRow(line=line, event=event)


def parse_events_csv(text: str) -> ImportReport:
    """Parse events CSV text.

    Blank rows are skipped. A reader failure is reported in ``error`` and
    discards any rows parsed so far.

    Args:
        text: CSV content with a header row.

    Returns:
        ImportReport with accepted and rejected rows.
    """
    report = ImportReport()
    reader = csv.DictReader(io.StringIO(text))
    try:
        for row in reader:
            if not any((v or "").strip() for k, v in row.items() if k is not None):
                continue
            result = parse_event_row(row, line=reader.line_num)
            if isinstance(result, AcceptedRow):
                report.accepted.append(result)
            else:
                report.rejected.append(result)
    except csv.Error as e:
        logger.warning("Error parsing CSV: %s", e)
        return ImportReport(error=f"line {reader.line_num}: {e}")

    logger.info(
        "Parsed events CSV: %d accepted, %d rejected",
        len(report.accepted),
        len(report.rejected),
    )
    return report


def parse_events_file(path: Path) -> ImportReport:
    """Parse an events CSV file. Unreadable files are reported, not raised."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return ImportReport(error=str(e))
    return parse_events_csv(text)
