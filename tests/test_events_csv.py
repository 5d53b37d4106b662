"""Tests for the events CSV importer.

**Feature: prop-dashboard**
"""

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from propdash.importers.events_csv import (
    AcceptedRow,
    RejectedRow,
    parse_event_row,
    parse_events_csv,
    parse_events_file,
)


class TestParseEventRow:
    def test_valid_payout(self):
        result = parse_event_row(
            {"date": "2025-08-21", "propFirm": "5ERS", "type": "payout", "amount": "4233"}, line=2
        )

        assert isinstance(result, AcceptedRow)
        assert result.line == 2
        assert result.event.prop_firm == "5ERS"
        assert result.event.amount == 4233.0

    def test_type_is_case_insensitive(self):
        result = parse_event_row({"date": "2025-08-21", "propFirm": "E8", "type": " FEE ", "amount": "1.5"})

        assert isinstance(result, AcceptedRow)
        assert result.event.type == "fee"

    def test_header_variants(self):
        result = parse_event_row({"Date": "2025-08-21", "prop_firm": "E8", "TYPE": "fee", " Amount ": "10"})

        assert isinstance(result, AcceptedRow)

    def test_missing_fields(self):
        for column in ("date", "propFirm", "type"):
            row = {"date": "2025-08-21", "propFirm": "E8", "type": "fee", "amount": "10"}
            row[column] = "  "

            result = parse_event_row(row)

            assert isinstance(result, RejectedRow)
            assert result.reason == f"missing {column}"

    def test_purchase_is_not_importable(self):
        result = parse_event_row({"date": "2025-08-21", "propFirm": "E8", "type": "purchase", "amount": "10"})

        assert isinstance(result, RejectedRow)
        assert "unsupported type" in result.reason

    def test_non_numeric_amount(self):
        for amount in ("abc", "", "nan", "-5", "inf"):
            result = parse_event_row({"date": "2025-08-21", "propFirm": "E8", "type": "fee", "amount": amount})

            assert isinstance(result, RejectedRow), amount

    def test_amount_must_be_plain_decimal(self):
        for amount in ("1_000", "1e3", "1,000", "0x10", "\u0661\u0660"):
            result = parse_event_row({"date": "2025-08-21", "propFirm": "E8", "type": "fee", "amount": amount})

            assert isinstance(result, RejectedRow), amount
            assert "is not a number" in result.reason

        for amount, expected in ((".5", 0.5), ("+10", 10.0), ("12.", 12.0)):
            result = parse_event_row({"date": "2025-08-21", "propFirm": "E8", "type": "fee", "amount": amount})

            assert result.event.amount == expected


class TestParseEventsCsv:
    """
    **Feature: prop-dashboard, Property 12: Import Never Aborts On Bad Rows**

    *For any* mix of valid and invalid rows, every row ends up either
    accepted or rejected.
    """

    def test_mixed_rows(self):
        text = (
            "date,propFirm,type,amount\n"
            "2025-09-22,FTMO,fee,522.2\n"
            "2025-09-25,5ERS,payout,4184\n"
            "2025-09-26,5ERS,bonus,1\n"
            "\n"
            "2025-09-27,,fee,1\n"
            "2025-09-28,E8,fee,lots\n"
        )

        report = parse_events_csv(text)

        assert [e.amount for e in report.events] == [522.2, 4184.0]
        assert [r.line for r in report.rejected] == [4, 6, 7]
        assert report.error is None
        assert report.ok

    def test_short_rows(self):
        report = parse_events_csv("date,propFirm,type,amount\n2025-01-01,FTMO\n")

        assert report.accepted == []
        assert report.rejected[0].reason == "missing type"

    def test_header_only(self):
        report = parse_events_csv("date,propFirm,type,amount\n")

        assert report.accepted == []
        assert report.rejected == []
        assert not report.ok

    def test_bom_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "events.csv"
            path.write_text("\ufeffdate,propFirm,type,amount\n2025-01-01,FTMO,fee,10\n", encoding="utf-8")

            report = parse_events_file(path)

        assert len(report.accepted) == 1

    def test_missing_file(self):
        report = parse_events_file(Path("/nonexistent/events.csv"))

        assert report.error is not None
        assert not report.ok

    @given(
        rows=st.lists(
            st.tuples(
                st.sampled_from(["2025-01-01", "", "2025-02-30"]),
                st.sampled_from(["FTMO", "", "5ERS"]),
                st.sampled_from(["payout", "fee", "purchase", ""]),
                st.sampled_from(["10", "0", "x", "-1", "2.5"]),
            ),
            max_size=30,
        )
    )
    @settings(max_examples=100)
    def test_every_row_is_accounted_for(self, rows):
        lines = ["date,propFirm,type,amount"] + [",".join(r) for r in rows]
        report = parse_events_csv("\n".join(lines) + "\n")

        blank = sum(1 for r in rows if not any(r))
        assert len(report.accepted) + len(report.rejected) == len(rows) - blank
        assert all(e.type in ("payout", "fee") and e.amount >= 0 for e in report.events)
