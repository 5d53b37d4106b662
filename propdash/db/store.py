"""Record stores for the journal and prop-firm dashboards.

Each store owns its collection exclusively. Aggregations only ever read
copies of it.
"""

import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from propdash.data.seed import seed_accounts, seed_events
from propdash.db.backends import MemoryStorage, StorageBackend
from propdash.importers.events_csv import ImportReport, parse_events_csv, parse_events_file
from propdash.models import Account, Event, Trade

logger = logging.getLogger(__name__)

JOURNAL_KEY = "journal_trades_v1"
EVENTS_KEY = "prop_events_v1"

# Fields assigned by the store and never replaced on edit.
_IMMUTABLE_TRADE_FIELDS = frozenset({"id", "created_at"})


def _field_names(fields: dict) -> dict:
    """Map camelCase aliases to Trade field names.

    Raises:
        ValueError: If a key is neither a field name nor an alias.
    """
    by_alias = {info.alias or to_camel(name): name for name, info in Trade.model_fields.items()}
    named = {by_alias.get(key, key): value for key, value in fields.items()}
    unknown = set(named) - set(Trade.model_fields)
    if unknown:
        raise ValueError(f"Unknown trade fields: {sorted(unknown)}")
    return named


def _load_blob(backend: StorageBackend, key: str) -> Optional[list]:
    """Read a JSON array from storage, or None if absent or corrupt."""
    raw = backend.get(key)
    if not raw:
        return None
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("Discarding corrupt data under %r: %s", key, e)
        return None
    if not isinstance(payload, list):
        logger.warning("Discarding data under %r: expected a list, got %s", key, type(payload).__name__)
        return None
    return payload


class JournalStore:
    """Trade journal collection mirrored to a storage backend."""

    def __init__(self, backend: Optional[StorageBackend] = None, key: str = JOURNAL_KEY):
        """Initialize the store and load persisted trades.

        Args:
            backend: Storage backend. Defaults to in-memory storage.
            key: Key under which the trade blob is stored.
        """
        self._backend = backend if backend is not None else MemoryStorage()
        self._key = key
        self._trades: list[Trade] = []
        self.load()

    @property
    def trades(self) -> list[Trade]:
        """Copy of the trades in store order (newest entry first)."""
        return list(self._trades)

    def __len__(self) -> int:
        return len(self._trades)

    def load(self) -> list[Trade]:
        """Load trades from the backend.

        Missing or corrupt data yields an empty collection. Records that fail
        validation, or repeat an id, are dropped.

        Returns:
            The loaded trades.
        """
        payload = _load_blob(self._backend, self._key) or []
        trades: list[Trade] = []
        seen: set[str] = set()
        for index, item in enumerate(payload):
            try:
                trade = Trade.model_validate(item)
            except ValidationError as e:
                logger.warning("Dropping invalid trade #%d: %s", index, e.error_count())
                continue
            if trade.id in seen:
                logger.warning("Dropping duplicate trade id %s", trade.id)
                continue
            seen.add(trade.id)
            trades.append(trade)
        self._trades = trades
        return self.trades

    def save(self) -> None:
        """Persist the full collection."""
        blob = json.dumps(
            [trade.model_dump(mode="json", by_alias=True) for trade in self._trades]
        )
        self._backend.set(self._key, blob)
        logger.info("Saved %d trades under %r", len(self._trades), self._key)

    def get(self, trade_id: str) -> Optional[Trade]:
        """Get a trade by id, or None."""
        for trade in self._trades:
            if trade.id == trade_id:
                return trade
        return None

    def _next_created_at(self) -> int:
        now_ms = int(time.time() * 1000)
        latest = max((t.created_at for t in self._trades), default=0)
        return max(now_ms, latest + 1)

    def add(self, **fields: Any) -> Trade:
        """Create a trade with a new id and creation timestamp.

        The trade is placed first in the collection.

        Args:
            **fields: Trade fields, by name or camelCase alias.

        Returns:
            The created trade.

        Raises:
            ValueError: If id/created_at or unknown fields are supplied, or a
                field is invalid.
        """
        fields = _field_names(fields)
        self._reject_immutable(fields)
        trade = Trade.model_validate(
            {**fields, "id": str(uuid.uuid4()), "created_at": self._next_created_at()}
        )
        self._trades.insert(0, trade)
        self.save()
        return trade

    def update(self, trade_id: str, **fields: Any) -> Trade:
        """Replace fields of an existing trade.

        Args:
            trade_id: Id of the trade to edit.
            **fields: Fields to replace.

        Returns:
            The updated trade.

        Raises:
            KeyError: If no trade has this id.
            ValueError: If id/created_at or unknown fields are supplied, or a
                field is invalid.
        """
        fields = _field_names(fields)
        self._reject_immutable(fields)
        for index, trade in enumerate(self._trades):
            if trade.id == trade_id:
                updated = Trade.model_validate({**trade.model_dump(), **fields})
                self._trades[index] = updated
                self.save()
                return updated
        raise KeyError(trade_id)

    def delete(self, trade_id: str) -> bool:
        """Delete a trade.

        Callers are expected to have confirmed the deletion.

        Returns:
            True if a trade was removed.
        """
        remaining = [t for t in self._trades if t.id != trade_id]
        if len(remaining) == len(self._trades):
            return False
        self._trades = remaining
        self.save()
        return True

    @staticmethod
    def _reject_immutable(fields: dict) -> None:
        blocked = _IMMUTABLE_TRADE_FIELDS.intersection(fields)
        if blocked:
            raise ValueError(f"Cannot set store-assigned fields: {sorted(blocked)}")


class PropStore:
    """Prop-firm events and accounts.

    Accounts are static. Events start from the seed data (or a previously
    imported set) and are only ever replaced wholesale.
    """

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        events: Optional[list[Event]] = None,
        accounts: Optional[list[Account]] = None,
        key: str = EVENTS_KEY,
    ):
        self._backend = backend
        self._key = key
        self._accounts = list(accounts) if accounts is not None else seed_accounts()
        if events is not None:
            self._events = list(events)
        else:
            self._events = self._load_events()

    def _load_events(self) -> list[Event]:
        if self._backend is None:
            return seed_events()
        payload = _load_blob(self._backend, self._key)
        if payload is None:
            return seed_events()
        events = []
        for index, item in enumerate(payload):
            try:
                events.append(Event.model_validate(item))
            except ValidationError as e:
                logger.warning("Dropping invalid event #%d: %s", index, e.error_count())
        return events

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    @property
    def accounts(self) -> list[Account]:
        return list(self._accounts)

    def replace_events(self, events: list[Event]) -> None:
        """Replace the whole event collection and persist it."""
        self._events = list(events)
        if self._backend is not None:
            blob = json.dumps([e.model_dump(mode="json", by_alias=True) for e in self._events])
            self._backend.set(self._key, blob)
        logger.info("Replaced events with %d records", len(self._events))

    def reset_events(self) -> None:
        """Drop any imported events and go back to the seed data."""
        if self._backend is not None:
            self._backend.delete(self._key)
        self._events = seed_events()

    def import_events_csv(self, text: str) -> ImportReport:
        """Import events from CSV text.

        The collection is only replaced when at least one row is valid.

        Returns:
            The import report, including rejected rows.
        """
        return self._apply_import(parse_events_csv(text))

    def import_events_file(self, path: Path) -> ImportReport:
        """Import events from a CSV file. See import_events_csv."""
        return self._apply_import(parse_events_file(path))

    def _apply_import(self, report: ImportReport) -> ImportReport:
        if report.error:
            logger.warning("CSV import failed, keeping existing events: %s", report.error)
        elif not report.accepted:
            logger.warning(
                "CSV import produced no valid rows (%d rejected), keeping existing events",
                len(report.rejected),
            )
        else:
            self.replace_events(report.events)
        return report
