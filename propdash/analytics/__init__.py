"""Filter stage and aggregation engine."""

from propdash.analytics.filters import (
    FilteredTrades,
    JournalFilter,
    filter_by_firm,
    filter_trades,
    firm_options,
    instrument_options,
)
from propdash.analytics.journal import (
    JournalReport,
    alignment_split,
    build_journal_report,
    equity_curve,
    plan_split,
    risk_stats,
    summary_stats,
)
from propdash.analytics.prop import (
    PropReport,
    account_metrics,
    account_size_distribution,
    build_prop_report,
    funnel_rates,
    monthly_performance,
    payouts_by_firm,
    pnl_history,
    pnl_summary,
)

__all__ = [
    "FilteredTrades",
    "JournalFilter",
    "JournalReport",
    "PropReport",
    "account_metrics",
    "account_size_distribution",
    "alignment_split",
    "build_journal_report",
    "build_prop_report",
    "equity_curve",
    "filter_by_firm",
    "filter_trades",
    "firm_options",
    "funnel_rates",
    "instrument_options",
    "monthly_performance",
    "payouts_by_firm",
    "plan_split",
    "pnl_history",
    "pnl_summary",
    "risk_stats",
    "summary_stats",
]
