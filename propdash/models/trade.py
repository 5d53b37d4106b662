"""Trade data model."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from propdash.models.fields import RECORD_CONFIG, coerce_number


class Trade(BaseModel):
    """Represents a single journaled trade."""

    id: str = Field(..., min_length=1, description="Unique trade identifier")
    date: str = Field(..., description="Trade day (YYYY-MM-DD)")
    instrument: str = Field(..., description="Traded instrument (e.g., XAUUSD)")
    direction: Literal["LONG", "SHORT"] = Field(..., description="Trade direction")
    session: str = Field(default="", description="Session label (e.g., London)")
    setup: str = Field(default="", description="Setup description")
    macro_alignment: Literal["With", "Against", "Neutral"] = Field(
        default="Neutral", description="Alignment with the macro thesis"
    )
    risk_percent: float = Field(
        default=0.0, ge=0, description="Percent of account risked"
    )
    planned_rr: float = Field(
        default=0.0, alias="plannedRR", description="Planned reward:risk ratio"
    )
    result_r: float = Field(default=0.0, description="Result in R-multiples")
    followed_plan: bool = Field(default=True, description="Whether the plan was followed")
    emotion_note: str = Field(default="", description="Free-text emotion note")
    created_at: int = Field(default=0, ge=0, description="Creation time (epoch ms)")

    model_config = RECORD_CONFIG

    @field_validator("risk_percent", "planned_rr", "result_r", mode="before")
    @classmethod
    def _coerce_numbers(cls, value):
        return coerce_number(value)

    @field_validator("setup", "emotion_note", mode="before")
    @classmethod
    def _strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @property
    def is_win(self) -> bool:
        return self.result_r > 0

    @property
    def is_loss(self) -> bool:
        return self.result_r < 0
