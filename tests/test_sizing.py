"""Property-based tests for the position-sizing calculator.

**Feature: trade-journal**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics.sizing import compute_sizing
from tradejournal.journal import TradeDraft


balances = st.floats(min_value=1.0, max_value=10_000_000.0, allow_nan=False, allow_infinity=False)
risks = st.floats(min_value=0.01, max_value=100.0, allow_nan=False, allow_infinity=False)
points = st.floats(min_value=0.01, max_value=100_000.0, allow_nan=False, allow_infinity=False)


class TestSizingExamples:
    """
    Worked examples of the points-based sizing model.
    """

    def test_without_take_profit(self):
        result = compute_sizing(1000, 1, 500)

        assert result.risk_amount == 10
        assert result.position_size == pytest.approx(0.02)
        assert result.reward_risk_ratio == 0
        assert result.potential_profit == 0

    def test_with_take_profit(self):
        result = compute_sizing(1000, 1, 500, 1000)

        assert result.risk_amount == 10
        assert result.position_size == pytest.approx(0.02)
        assert round(result.reward_risk_ratio, 2) == 2.00
        assert round(result.potential_profit, 2) == 20.00

    def test_text_inputs(self):
        result = compute_sizing("1000", "1", "500", "1000")
        assert result.position_size == pytest.approx(0.02)
        assert result.reward_risk_ratio == pytest.approx(2.0)

    def test_invalid_take_profit_is_ignored(self):
        result = compute_sizing(1000, 1, 500, "abc")
        assert result.position_size == pytest.approx(0.02)
        assert result.reward_risk_ratio == 0
        assert result.potential_profit == 0

    def test_negative_take_profit_is_ignored(self):
        result = compute_sizing(1000, 1, 500, -100)
        assert result.reward_risk_ratio == 0
        assert result.potential_profit == 0


class TestSizingDegenerateCase:
    """
    *For any* balance and risk, a stop-loss distance that is zero,
    negative or not a number gives all-zero results without raising.
    """

    @pytest.mark.parametrize("sl", [0, "0", -10, "", None, "abc", "nan"])
    def test_zero_outputs(self, sl):
        result = compute_sizing(1000, 1, sl, 1000)

        assert result.risk_amount == 0
        assert result.position_size == 0
        assert result.reward_risk_ratio == 0
        assert result.potential_profit == 0

    @given(balance=balances, risk=risks, tp=points)
    @settings(max_examples=50)
    def test_zero_stop_loss_for_any_inputs(self, balance: float, risk: float, tp: float):
        result = compute_sizing(balance, risk, 0, tp)
        assert (
            result.risk_amount,
            result.position_size,
            result.reward_risk_ratio,
            result.potential_profit,
        ) == (0, 0, 0, 0)


class TestSizingProperties:
    """
    *For any* positive inputs, the size risks exactly the risk amount
    at the stop-loss and the profit follows the reward:risk ratio.
    """

    @given(balance=balances, risk=risks, sl=points)
    @settings(max_examples=100)
    def test_loss_at_stop_equals_risk_amount(self, balance: float, risk: float, sl: float):
        result = compute_sizing(balance, risk, sl)

        assert result.risk_amount == pytest.approx(balance * risk / 100)
        assert result.position_size * sl == pytest.approx(result.risk_amount)

    @given(balance=balances, risk=risks, sl=points, tp=points)
    @settings(max_examples=100)
    def test_profit_is_risk_times_ratio(self, balance: float, risk: float, sl: float, tp: float):
        result = compute_sizing(balance, risk, sl, tp)

        assert result.reward_risk_ratio == pytest.approx(tp / sl)
        assert result.potential_profit == pytest.approx(
            result.risk_amount * result.reward_risk_ratio
        )

    @given(balance=balances, risk=risks, sl=points, tp=points)
    @settings(max_examples=50)
    def test_idempotent(self, balance: float, risk: float, sl: float, tp: float):
        assert compute_sizing(balance, risk, sl, tp) == compute_sizing(balance, risk, sl, tp)


class TestApplySizing:
    """
    Applying a sizing result to a trade draft rounds the size to 2 decimals.
    """

    def test_rounds_to_two_decimals(self):
        draft = TradeDraft(pair="EURUSD", entry_price="1.1")
        draft.apply_sizing(compute_sizing(1000, 1, 3))

        assert draft.position_size == "3.33"

    def test_example_size(self):
        draft = TradeDraft(pair="XAUUSD", entry_price="2350")
        draft.apply_sizing(compute_sizing(1000, 1, 500, 1000))

        assert draft.position_size == "0.02"
