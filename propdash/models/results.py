"""Value objects returned by the aggregation engine."""

from pydantic import BaseModel, Field


class SummaryStats(BaseModel):
    """Headline journal statistics."""

    total: int = Field(default=0, ge=0, description="Number of trades")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")
    avg_r: float = Field(default=0.0, description="Mean result in R")
    total_r: float = Field(default=0.0, description="Sum of results in R")

    model_config = {"frozen": True}


class GroupStats(BaseModel):
    """Count and mean result of a subset of trades."""

    count: int = Field(default=0, ge=0, description="Number of trades")
    avg_r: float = Field(default=0.0, description="Mean result in R")

    model_config = {"frozen": True}


class AlignmentSplit(BaseModel):
    """Results split by macro alignment."""

    with_macro: GroupStats = Field(default_factory=GroupStats)
    against_macro: GroupStats = Field(default_factory=GroupStats)

    model_config = {"frozen": True}


class PlanSplit(BaseModel):
    """Results split by plan discipline."""

    count_yes: int = Field(default=0, ge=0, description="Trades that followed the plan")
    avg_yes: float = Field(default=0.0, description="Mean R when the plan was followed")
    count_no: int = Field(default=0, ge=0, description="Trades that broke the plan")
    avg_no: float = Field(default=0.0, description="Mean R when the plan was broken")

    model_config = {"frozen": True}


class RiskStats(BaseModel):
    """Risk taken per trade."""

    avg_risk: float = Field(default=0.0, ge=0, description="Mean risk percent")
    max_risk: float = Field(default=0.0, ge=0, description="Largest risk percent")

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """One point of the cumulative R curve."""

    date: str
    value: float

    model_config = {"frozen": True}


class MonthlyBar(BaseModel):
    """Payouts and fees of one calendar month. Fees are negated for charting."""

    month: str = Field(..., description="Month key (YYYY-MM)")
    label: str = Field(..., description="Short label (e.g., 'Mar 25')")
    payouts: float = Field(default=0.0, ge=0)
    fees: float = Field(default=0.0, le=0)

    model_config = {"frozen": True}


class PnlPoint(BaseModel):
    """One point of the cumulative prop-firm PnL history."""

    date: str
    pnl: float

    model_config = {"frozen": True}


class SizeSlice(BaseModel):
    """Share of evaluation accounts of one size."""

    name: str = Field(..., description="Size label (e.g., '$100K')")
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class FunnelRates(BaseModel):
    """Evaluation funnel pass rates, in percent."""

    total: int = Field(default=0, ge=0, description="Evaluation accounts counted")
    phase1_pass_rate: float = Field(default=0.0, ge=0, le=100)
    phase2_pass_rate: float = Field(default=0.0, ge=0, le=100)
    funded_rate: float = Field(default=0.0, ge=0, le=100)
    payout_rate: float = Field(default=0.0, ge=0, le=100)

    model_config = {"frozen": True}


class FirmPayout(BaseModel):
    """Total payouts received from one firm."""

    firm: str
    payouts: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}


class PnlSummary(BaseModel):
    """Payouts minus fees."""

    total_payouts: float = Field(default=0.0, ge=0)
    total_fees: float = Field(default=0.0, ge=0)
    current_pnl: float = Field(default=0.0)

    model_config = {"frozen": True}


class AccountMetrics(BaseModel):
    """Account counts shown on the prop-firm dashboard."""

    funded_amount: float = Field(default=0.0, description="Size of active funded accounts")
    total_evaluations: int = Field(default=0, ge=0)
    active_evaluations: int = Field(default=0, ge=0)
    active_funded: int = Field(default=0, ge=0)
    failed_challenges: int = Field(default=0, ge=0)

    model_config = {"frozen": True}
