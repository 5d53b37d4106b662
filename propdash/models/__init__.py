"""Data models for propdash."""

from propdash.models.account import STAGE_ORDER, Account
from propdash.models.event import Event
from propdash.models.trade import Trade
from propdash.models.results import (
    AccountMetrics,
    AlignmentSplit,
    EquityPoint,
    FirmPayout,
    FunnelRates,
    GroupStats,
    MonthlyBar,
    PlanSplit,
    PnlPoint,
    PnlSummary,
    RiskStats,
    SizeSlice,
    SummaryStats,
)

__all__ = [
    "Account",
    "AccountMetrics",
    "AlignmentSplit",
    "EquityPoint",
    "Event",
    "FirmPayout",
    "FunnelRates",
    "GroupStats",
    "MonthlyBar",
    "PlanSplit",
    "PnlPoint",
    "PnlSummary",
    "RiskStats",
    "SizeSlice",
    "STAGE_ORDER",
    "SummaryStats",
    "Trade",
]
