"""Filter stage: predicate filters over journal trades and prop-firm records."""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Literal, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from propdash.models import Account, Event, Trade

ALL = "ALL"
ALL_FIRMS = "All"

DateRange = Literal["ALL", "7D", "30D", "90D"]
ResultFilter = Literal["ALL", "WINS", "LOSSES"]
AlignmentFilter = Literal["ALL", "With", "Against", "Neutral"]
PlanFilter = Literal["ALL", "YES", "NO"]

DATE_RANGE_DAYS: dict[str, int] = {"7D": 7, "30D": 30, "90D": 90}

R = TypeVar("R", Event, Account)


class JournalFilter(BaseModel):
    """Independent filter selections for the journal. Every field defaults to ALL."""

    date_range: DateRange = Field(default="ALL", description="Rolling date window")
    instrument: str = Field(default=ALL, description="Instrument or ALL")
    result: ResultFilter = Field(default="ALL", description="Wins, losses or ALL")
    alignment: AlignmentFilter = Field(default="ALL", description="Macro alignment or ALL")
    plan: PlanFilter = Field(default="ALL", description="Plan followed (YES/NO) or ALL")

    model_config = {"frozen": True}


class FilteredTrades(BaseModel):
    """Trades that passed every filter, in both display and chronological order."""

    newest_first: list[Trade] = Field(default_factory=list)
    oldest_first: list[Trade] = Field(default_factory=list)

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.newest_first)


def parse_day(value: str) -> Optional[date]:
    """Parse a YYYY-MM-DD day. Returns None when the text is not a valid date."""
    try:
        return date.fromisoformat(value.strip()[:10])
    except (AttributeError, ValueError):
        return None


def date_cutoff(date_range: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Start of a rolling window counted back from ``now``. None for ALL.

    An aware ``now`` is converted to naive local time, since trade days carry
    no timezone.
    """
    days = DATE_RANGE_DAYS.get(date_range)
    if days is None:
        return None
    now = now or datetime.now()
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return now - timedelta(days=days)


def _matches(trade: Trade, criteria: JournalFilter, cutoff: Optional[datetime]) -> bool:
    if cutoff is not None:
        day = parse_day(trade.date)
        # Unparseable dates are kept.
        if day is not None and datetime.combine(day, time.min) < cutoff:
            return False
    if criteria.instrument != ALL and trade.instrument != criteria.instrument:
        return False
    if criteria.result == "WINS" and not trade.is_win:
        return False
    if criteria.result == "LOSSES" and not trade.is_loss:
        return False
    if criteria.alignment != ALL and trade.macro_alignment != criteria.alignment:
        return False
    if criteria.plan != ALL and trade.followed_plan != (criteria.plan == "YES"):
        return False
    return True


def sort_by_date(records: Sequence, newest_first: bool = False) -> list:
    """Stable sort on the ``date`` attribute.

    Equal dates keep their original order in both directions. Records with an
    unparseable date go last.
    """
    dated = []
    undated = []
    for record in records:
        day = parse_day(record.date)
        if day is None:
            undated.append(record)
        else:
            dated.append((day, record))
    dated.sort(key=lambda pair: pair[0], reverse=newest_first)
    return [record for _, record in dated] + undated


def filter_trades(
    trades: Iterable[Trade],
    criteria: Optional[JournalFilter] = None,
    now: Optional[datetime] = None,
) -> FilteredTrades:
    """Apply the conjunction of all filter selections.

    Args:
        trades: Trades in store order.
        criteria: Filter selections. Defaults to no filtering.
        now: Reference instant for the rolling date window.

    Returns:
        FilteredTrades with newest-first and oldest-first views.
    """
    criteria = criteria or JournalFilter()
    cutoff = date_cutoff(criteria.date_range, now)
    kept = [t for t in trades if _matches(t, criteria, cutoff)]
    return FilteredTrades(
        newest_first=sort_by_date(kept, newest_first=True),
        oldest_first=sort_by_date(kept),
    )


def instrument_options(trades: Iterable[Trade]) -> list[str]:
    """Distinct instruments present in the journal, sorted."""
    return sorted({t.instrument for t in trades if t.instrument})


def firm_options(events: Iterable[Event], accounts: Iterable[Account]) -> list[str]:
    """Distinct non-empty firm names across events and accounts, sorted."""
    firms = {e.prop_firm for e in events} | {a.prop_firm for a in accounts}
    return sorted(f for f in firms if f)


def filter_by_firm(records: Iterable[R], firm: Optional[str] = None) -> list[R]:
    """Keep records of one prop firm. ``All`` (any case) or None keeps everything."""
    records = list(records)
    if not firm or firm.lower() == ALL_FIRMS.lower():
        return records
    return [r for r in records if r.prop_firm == firm]
