"""Prop-firm Event data model."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from propdash.models.fields import RECORD_CONFIG, coerce_number

EventType = Literal["payout", "fee", "purchase"]


class Event(BaseModel):
    """A dated money movement with a prop firm (payout, fee or purchase)."""

    date: str = Field(..., description="Event day (YYYY-MM-DD)")
    prop_firm: str = Field(..., description="Prop firm name, used as grouping key")
    type: EventType = Field(..., description="Event type")
    amount: float = Field(..., ge=0, description="Amount in account currency")

    model_config = RECORD_CONFIG

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        return coerce_number(value)

    @property
    def month_key(self) -> str:
        """Calendar year-month of the event (YYYY-MM)."""
        parts = self.date.split("-")
        return "-".join(parts[:2])
