"""Tests for the record models."""

import pytest
from pydantic import ValidationError

from propdash.models import Account, Event, Trade
from propdash.models.fields import coerce_number


class TestCoercion:
    @pytest.mark.parametrize(
        "value, expected",
        [(2, 2.0), ("1.5", 1.5), (" -3 ", -3.0), ("abc", 0.0), (None, 0.0), (float("nan"), 0.0), (float("inf"), 0.0)],
    )
    def test_coerce_number(self, value, expected):
        assert coerce_number(value) == expected

    def test_trade_coerces_results(self):
        trade = Trade(id="a", date="2025-01-01", instrument="EURUSD", direction="LONG", result_r="oops")

        assert trade.result_r == 0.0

    def test_event_coerces_amount(self):
        event = Event.model_validate({"date": "2025-01-01", "propFirm": "FTMO", "type": "fee", "amount": "12.5"})

        assert event.amount == 12.5
        assert event.month_key == "2025-01"


class TestValidation:
    def test_negative_risk_rejected(self):
        with pytest.raises(ValidationError):
            Trade(id="a", date="2025-01-01", instrument="EURUSD", direction="LONG", risk_percent=-1)

    def test_unknown_stage_rejected(self):
        with pytest.raises(ValidationError):
            Account(id="a", prop_firm="X", size=1, type="evaluation", stage="phase3")

    def test_frozen(self):
        trade = Trade(id="a", date="2025-01-01", instrument="EURUSD", direction="LONG")

        with pytest.raises(ValidationError):
            trade.result_r = 5

    def test_camel_case_serialization(self):
        account = Account(id="a", prop_firm="FTMO", size=100000, type="funded", stage="funded")

        dumped = account.model_dump(by_alias=True)

        assert dumped["propFirm"] == "FTMO"
        assert dumped["isActive"] is True

    def test_win_and_loss_flags(self):
        win = Trade(id="a", date="2025-01-01", instrument="EURUSD", direction="LONG", result_r=1)
        flat = Trade(id="b", date="2025-01-01", instrument="EURUSD", direction="LONG", result_r=0)

        assert win.is_win and not win.is_loss
        assert not flat.is_win and not flat.is_loss
