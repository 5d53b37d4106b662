"""Prop-firm aggregations over events and accounts."""

from typing import Iterable, Optional

from pydantic import BaseModel, Field

from propdash.analytics.filters import filter_by_firm, sort_by_date
from propdash.models import (
    STAGE_ORDER,
    Account,
    AccountMetrics,
    Event,
    FirmPayout,
    FunnelRates,
    MonthlyBar,
    PnlPoint,
    PnlSummary,
    SizeSlice,
)

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Stages counted as having passed each funnel step. Phase 2 passes and
# funded accounts deliberately share the same stages.
PHASE1_PASSED = frozenset(STAGE_ORDER[1:])
PHASE2_PASSED = frozenset(STAGE_ORDER[2:])
FUNDED_REACHED = frozenset(STAGE_ORDER[2:])
PAYOUT_REACHED = frozenset(STAGE_ORDER[3:])


def to_percent(count: int, total: int) -> float:
    return 0.0 if total == 0 else count / total * 100


def month_label(month_key: str) -> str:
    """'2025-03' -> 'Mar 25'. Unrecognised keys are returned unchanged."""
    year, _, month = month_key.partition("-")
    try:
        index = int(month)
    except ValueError:
        return month_key
    if not 1 <= index <= 12:
        return month_key
    return f"{MONTH_NAMES[index - 1]} {year[2:]}"


def pnl_summary(events: Iterable[Event]) -> PnlSummary:
    """Total payouts, total fees and their difference. Purchases are ignored."""
    events = list(events)
    payouts = sum(e.amount for e in events if e.type == "payout")
    fees = sum(e.amount for e in events if e.type == "fee")
    return PnlSummary(total_payouts=payouts, total_fees=fees, current_pnl=payouts - fees)


def monthly_performance(events: Iterable[Event]) -> list[MonthlyBar]:
    """Payouts and (negated) fees per calendar month, oldest month first."""
    months: dict[str, list[float]] = {}
    for event in events:
        totals = months.setdefault(event.month_key, [0.0, 0.0])
        if event.type == "payout":
            totals[0] += event.amount
        elif event.type == "fee":
            totals[1] += event.amount
    return [
        MonthlyBar(month=key, label=month_label(key), payouts=payouts, fees=-fees)
        for key, (payouts, fees) in sorted(months.items())
    ]


def pnl_history(events: Iterable[Event]) -> list[PnlPoint]:
    """Running PnL, one point per event from oldest to newest.

    Payouts add; fees and purchases subtract.
    """
    history = []
    running = 0.0
    for event in sort_by_date(list(events)):
        if event.type == "payout":
            running += event.amount
        else:
            running -= event.amount
        history.append(PnlPoint(date=event.date, pnl=running))
    return history


def size_label(size: float) -> str:
    """Account size in thousands, e.g. 100000 -> '$100K'."""
    return f"${int(round(size / 1000))}K"


def account_size_distribution(accounts: Iterable[Account]) -> list[SizeSlice]:
    """Evaluation accounts grouped by size, in first-seen order."""
    evaluations = [a for a in accounts if a.is_evaluation]
    counts: dict[str, int] = {}
    for account in evaluations:
        label = size_label(account.size)
        counts[label] = counts.get(label, 0) + 1
    return [
        SizeSlice(name=name, count=count, percentage=to_percent(count, len(evaluations)))
        for name, count in counts.items()
    ]


def funnel_rates(accounts: Iterable[Account]) -> FunnelRates:
    """Share of evaluation accounts that reached each stage.

    Note that phase 2 passes and funded accounts are counted over the same
    stages, so those two rates are always equal.
    """
    stages = [a.stage for a in accounts if a.is_evaluation]
    total = len(stages)

    def rate(passed: frozenset) -> float:
        return to_percent(sum(1 for s in stages if s in passed), total)

    return FunnelRates(
        total=total,
        phase1_pass_rate=rate(PHASE1_PASSED),
        phase2_pass_rate=rate(PHASE2_PASSED),
        funded_rate=rate(FUNDED_REACHED),
        payout_rate=rate(PAYOUT_REACHED),
    )


def payouts_by_firm(events: Iterable[Event]) -> list[FirmPayout]:
    """Payout totals per firm, in first-seen order."""
    totals: dict[str, float] = {}
    for event in events:
        if event.type == "payout":
            totals[event.prop_firm] = totals.get(event.prop_firm, 0.0) + event.amount
    return [FirmPayout(firm=firm, payouts=amount) for firm, amount in totals.items()]


def account_metrics(accounts: Iterable[Account]) -> AccountMetrics:
    accounts = list(accounts)
    active_funded = [a for a in accounts if a.type == "funded" and a.is_active]
    return AccountMetrics(
        funded_amount=sum(a.size for a in active_funded),
        total_evaluations=sum(1 for a in accounts if a.is_evaluation),
        active_evaluations=sum(1 for a in accounts if a.is_evaluation and a.is_active),
        active_funded=len(active_funded),
        failed_challenges=sum(1 for a in accounts if a.stage == "failed"),
    )


class PropReport(BaseModel):
    """Everything the prop-firm dashboard shows for one firm selection."""

    firm: str = Field(default="All")
    events: list[Event] = Field(default_factory=list)
    pnl: PnlSummary
    accounts: AccountMetrics
    funnel: FunnelRates
    monthly: list[MonthlyBar] = Field(default_factory=list)
    history: list[PnlPoint] = Field(default_factory=list)
    sizes: list[SizeSlice] = Field(default_factory=list)
    by_firm: list[FirmPayout] = Field(default_factory=list)

    model_config = {"frozen": True}


def build_prop_report(
    events: Iterable[Event],
    accounts: Iterable[Account],
    firm: Optional[str] = None,
) -> PropReport:
    """Apply the firm filter to both data sets and compute every aggregation."""
    events = filter_by_firm(events, firm)
    accounts = filter_by_firm(accounts, firm)
    return PropReport(
        firm=firm or "All",
        events=events,
        pnl=pnl_summary(events),
        accounts=account_metrics(accounts),
        funnel=funnel_rates(accounts),
        monthly=monthly_performance(events),
        history=pnl_history(events),
        sizes=account_size_distribution(accounts),
        by_firm=payouts_by_firm(events),
    )
