"""Journal aggregations.

Pure reductions over a filtered list of trades. Every function returns a
zeroed value object on empty input.
"""

from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from propdash.analytics.filters import FilteredTrades, JournalFilter, filter_trades, sort_by_date
from propdash.models import (
    AlignmentSplit,
    EquityPoint,
    GroupStats,
    PlanSplit,
    RiskStats,
    SummaryStats,
    Trade,
)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def summary_stats(trades: Iterable[Trade]) -> SummaryStats:
    """Count, win rate, mean R and total R.

    Breakeven trades count toward the total but not as wins.
    """
    results = [t.result_r for t in trades]
    if not results:
        return SummaryStats()
    total = len(results)
    wins = sum(1 for r in results if r > 0)
    total_r = sum(results)
    return SummaryStats(
        total=total,
        win_rate=wins / total * 100,
        avg_r=total_r / total,
        total_r=total_r,
    )


def group_stats(trades: Iterable[Trade]) -> GroupStats:
    results = [t.result_r for t in trades]
    return GroupStats(count=len(results), avg_r=_mean(results))


def alignment_split(trades: Iterable[Trade]) -> AlignmentSplit:
    """Results of trades taken with and against the macro thesis."""
    trades = list(trades)
    return AlignmentSplit(
        with_macro=group_stats(t for t in trades if t.macro_alignment == "With"),
        against_macro=group_stats(t for t in trades if t.macro_alignment == "Against"),
    )


def plan_split(trades: Iterable[Trade]) -> PlanSplit:
    """Results of trades that followed the plan versus those that did not."""
    trades = list(trades)
    followed = group_stats(t for t in trades if t.followed_plan)
    broken = group_stats(t for t in trades if not t.followed_plan)
    return PlanSplit(
        count_yes=followed.count,
        avg_yes=followed.avg_r,
        count_no=broken.count,
        avg_no=broken.avg_r,
    )


def risk_stats(trades: Iterable[Trade]) -> RiskStats:
    risks = [t.risk_percent for t in trades]
    if not risks:
        return RiskStats()
    return RiskStats(avg_risk=_mean(risks), max_risk=max(risks))


def equity_curve(trades: Iterable[Trade]) -> list[EquityPoint]:
    """Cumulative R, one point per trade from oldest to newest.

    Trades sharing a date each get their own point, in collection order.
    """
    points = []
    running = 0.0
    for trade in sort_by_date(list(trades)):
        running += trade.result_r
        points.append(EquityPoint(date=trade.date, value=running))
    return points


class JournalReport(BaseModel):
    """Everything the journal dashboard shows for one filter selection."""

    criteria: JournalFilter
    trades: list[Trade] = Field(default_factory=list, description="Filtered, newest first")
    summary: SummaryStats
    alignment: AlignmentSplit
    plan: PlanSplit
    risk: RiskStats
    equity: list[EquityPoint] = Field(default_factory=list)

    model_config = {"frozen": True}


def build_journal_report(
    trades: Iterable[Trade],
    criteria: Optional[JournalFilter] = None,
    now: Optional[datetime] = None,
) -> JournalReport:
    """Filter the trades and compute every journal aggregation."""
    criteria = criteria or JournalFilter()
    filtered: FilteredTrades = filter_trades(trades, criteria, now=now)
    return JournalReport(
        criteria=criteria,
        trades=filtered.newest_first,
        summary=summary_stats(filtered.newest_first),
        alignment=alignment_split(filtered.newest_first),
        plan=plan_split(filtered.newest_first),
        risk=risk_stats(filtered.newest_first),
        equity=equity_curve(filtered.oldest_first),
    )
