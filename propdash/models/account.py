"""Prop-firm Account data model."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from propdash.models.fields import RECORD_CONFIG, coerce_number

AccountType = Literal["evaluation", "funded"]
Stage = Literal["phase1", "phase2", "funded", "payout", "failed"]

# Main progression; "failed" is an absorbing exit outside of it.
STAGE_ORDER: tuple[str, ...] = ("phase1", "phase2", "funded", "payout")


class Account(BaseModel):
    """A prop-firm evaluation or funded account."""

    id: str = Field(..., min_length=1, description="Account identifier")
    prop_firm: str = Field(..., description="Prop firm name")
    size: float = Field(..., description="Account notional size")
    type: AccountType = Field(..., description="Account type")
    stage: Stage = Field(default="phase1", description="Progression stage")
    is_active: bool = Field(default=True, description="Whether the account is active")

    model_config = RECORD_CONFIG

    @field_validator("size", mode="before")
    @classmethod
    def _coerce_size(cls, value):
        return coerce_number(value)

    @property
    def is_evaluation(self) -> bool:
        return self.type == "evaluation"
