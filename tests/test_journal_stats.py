"""Property-based tests for the journal aggregations.

**Feature: prop-dashboard**
"""

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from propdash.analytics.journal import (
    alignment_split,
    equity_curve,
    group_stats,
    plan_split,
    risk_stats,
    summary_stats,
)
from strategies import make_trade, trade_strategy


class TestSummaryStats:
    """
    **Feature: prop-dashboard, Property 1: Summary Statistics Consistency**

    *For any* non-empty set of trades, the win rate is a percentage and
    the mean R times the count equals the total R.
    """

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=50))
    @settings(max_examples=100)
    def test_win_rate_bounds(self, trades):
        stats = summary_stats(trades)

        assert 0.0 <= stats.win_rate <= 100.0

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=50))
    @settings(max_examples=100)
    def test_avg_times_total_equals_total_r(self, trades):
        stats = summary_stats(trades)

        assert stats.total == len(trades)
        assert math.isclose(stats.avg_r * stats.total, stats.total_r, rel_tol=1e-9, abs_tol=1e-9)

    def test_two_trade_scenario(self):
        """A +2R trade on plan and a -1R trade off plan."""
        trades = [
            make_trade(id="a", result_r=2, followed_plan=True),
            make_trade(id="b", result_r=-1, followed_plan=False),
        ]

        stats = summary_stats(trades)
        plan = plan_split(trades)

        assert stats.total == 2
        assert stats.win_rate == 50.0
        assert stats.avg_r == 0.5
        assert stats.total_r == 1.0
        assert plan.avg_yes == 2.0
        assert plan.avg_no == -1.0

    def test_total_r_is_sum_of_results(self):
        trades = [make_trade(id="a", result_r=2), make_trade(id="b", result_r=-1.5)]

        assert summary_stats(trades).total_r == 0.5

    def test_empty_trades_are_zeroed(self):
        stats = summary_stats([])

        assert stats.total == 0
        assert stats.win_rate == 0.0
        assert stats.avg_r == 0.0
        assert stats.total_r == 0.0

    def test_breakeven_counts_in_total_but_not_wins(self):
        trades = [make_trade(id="a", result_r=0), make_trade(id="b", result_r=1)]

        stats = summary_stats(trades)

        assert stats.total == 2
        assert stats.win_rate == 50.0


class TestAlignmentAndPlanSplits:
    """
    **Feature: prop-dashboard, Property 2: Group Split Accuracy**

    *For any* set of trades, each group count matches the trades in it and
    its mean is the mean of those trades' results.
    """

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=50))
    @settings(max_examples=100)
    def test_alignment_counts(self, trades):
        split = alignment_split(trades)

        assert split.with_macro.count == sum(1 for t in trades if t.macro_alignment == "With")
        assert split.against_macro.count == sum(1 for t in trades if t.macro_alignment == "Against")

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=50))
    @settings(max_examples=100)
    def test_plan_counts_cover_all_trades(self, trades):
        split = plan_split(trades)

        assert split.count_yes + split.count_no == len(trades)

    def test_alignment_means(self):
        trades = [
            make_trade(id="a", macro_alignment="With", result_r=3),
            make_trade(id="b", macro_alignment="With", result_r=-1),
            make_trade(id="c", macro_alignment="Against", result_r=-1),
            make_trade(id="d", macro_alignment="Neutral", result_r=5),
        ]

        split = alignment_split(trades)

        assert split.with_macro.count == 2
        assert split.with_macro.avg_r == 1.0
        assert split.against_macro.count == 1
        assert split.against_macro.avg_r == -1.0

    def test_empty_groups_are_zeroed(self):
        split = alignment_split([make_trade(macro_alignment="Neutral", result_r=2)])

        assert split.with_macro.count == 0
        assert split.with_macro.avg_r == 0.0
        assert split.against_macro.avg_r == 0.0

    def test_group_stats(self):
        stats = group_stats([make_trade(id="a", result_r=2), make_trade(id="b", result_r=-1)])

        assert stats.count == 2
        assert stats.avg_r == 0.5
        assert group_stats([]).avg_r == 0.0


class TestRiskStats:
    """
    **Feature: prop-dashboard, Property 3: Risk Bounds**

    *For any* non-empty set of trades, the mean risk never exceeds the
    maximum risk.
    """

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=50))
    @settings(max_examples=100)
    def test_avg_not_above_max(self, trades):
        stats = risk_stats(trades)

        assert stats.max_risk == max(t.risk_percent for t in trades)
        assert stats.avg_risk <= stats.max_risk + 1e-9

    def test_values(self):
        trades = [make_trade(id="a", risk_percent=0.5), make_trade(id="b", risk_percent=1.5)]

        stats = risk_stats(trades)

        assert stats.avg_risk == 1.0
        assert stats.max_risk == 1.5

    def test_empty(self):
        stats = risk_stats([])

        assert stats.avg_risk == 0.0
        assert stats.max_risk == 0.0


class TestEquityCurve:
    """
    **Feature: prop-dashboard, Property 4: Equity Curve Completeness**

    *For any* set of trades, the curve has one point per trade and ends at
    the total R.
    """

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=50))
    @settings(max_examples=100)
    def test_length_and_final_value(self, trades):
        curve = equity_curve(trades)

        assert len(curve) == len(trades)
        assert math.isclose(curve[-1].value, summary_stats(trades).total_r, rel_tol=1e-9, abs_tol=1e-9)

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=50))
    @settings(max_examples=50)
    def test_dates_ascending(self, trades):
        dates = [p.date for p in equity_curve(trades)]

        assert dates == sorted(dates)

    def test_same_day_trades_are_separate_points(self):
        trades = [
            make_trade(id="late", date="2025-02-01", result_r=1),
            make_trade(id="a", date="2025-01-10", result_r=2),
            make_trade(id="b", date="2025-01-10", result_r=-1),
        ]

        curve = equity_curve(trades)

        assert [(p.date, p.value) for p in curve] == [
            ("2025-01-10", 2.0),
            ("2025-01-10", 1.0),
            ("2025-02-01", 2.0),
        ]

    def test_empty(self):
        assert equity_curve([]) == []
