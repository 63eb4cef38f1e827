"""Property-based tests for trade PnL calculation.

**Feature: trade-journal**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics.pnl import (
    classify_result,
    compute_pnl,
    parse_number,
    round_money,
)
from tradejournal.errors import ParseError


prices = st.floats(min_value=0.0001, max_value=1_000_000.0, allow_nan=False, allow_infinity=False)
sizes = st.floats(min_value=0.01, max_value=10_000.0, allow_nan=False, allow_infinity=False)


class TestParseNumber:
    """
    Form values parse to finite floats; anything else is a ParseError.
    """

    @pytest.mark.parametrize("value,expected", [
        (100, 100.0),
        (0.5, 0.5),
        ("1.25", 1.25),
        ("  42 ", 42.0),
        ("-3", -3.0),
        ("1e3", 1000.0),
    ])
    def test_valid_values(self, value, expected):
        assert parse_number(value) == expected

    @pytest.mark.parametrize("value", [
        None, "", "   ", "abc", "12abc", "nan", "inf", "-inf",
        float("nan"), float("inf"), True, [1],
    ])
    def test_invalid_values(self, value):
        with pytest.raises(ParseError):
            parse_number(value)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_number("x", "entry price")

    def test_parse_error_names_field(self):
        with pytest.raises(ParseError, match="entry price"):
            parse_number("x", "entry price")


class TestPnLExamples:
    """
    Worked examples of PnL and classification.
    """

    def test_long_win(self):
        pnl = compute_pnl("Long", 100, 110, 2)
        assert pnl == 20.00
        assert classify_result(pnl, has_exit=True) == "Win"

    def test_long_loss(self):
        pnl = compute_pnl("Long", 100, 90, 2)
        assert pnl == -20.00
        assert classify_result(pnl, has_exit=True) == "Loss"

    def test_long_breakeven(self):
        pnl = compute_pnl("Long", 100, 100, 5)
        assert pnl == 0.00
        assert classify_result(pnl, has_exit=True) == "BreakEven"

    def test_short_profits_when_price_falls(self):
        assert compute_pnl("Short", 100, 90, 2) == 20.00

    def test_text_inputs(self):
        assert compute_pnl("Long", "1.1000", "1.1050", "10000") == 50.0

    def test_rounded_to_two_decimals(self):
        assert compute_pnl("Long", "1", "1.333333", "1") == 0.33

    def test_exact_half_cent_rounds_away_from_zero(self):
        assert compute_pnl("Long", 100, 100.125, 1) == 0.13
        assert compute_pnl("Short", 100, 100.125, 1) == -0.13
        assert compute_pnl("Long", 10, 10.625, 1) == 0.63

    def test_inexact_half_cent_follows_binary_value(self):
        # 1.005 is stored as 1.00499999...
        assert round_money(1.005) == 1.0
        assert round_money(-0.125) == -0.13

    def test_sub_cent_pnl_is_breakeven(self):
        pnl = compute_pnl("Long", 100, 100.001, 1)
        assert pnl == 0.0
        assert classify_result(pnl, has_exit=True) == "BreakEven"

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            compute_pnl("Sideways", 1, 2, 3)


class TestIncompleteInput:
    """
    *For any* input where entry, exit or size fails to parse, no PnL
    is produced.
    """

    @pytest.mark.parametrize("entry,exit_,size", [
        ("", 110, 2),
        (100, "", 2),
        (100, 110, ""),
        ("abc", 110, 2),
        (100, None, 2),
        (100, 110, "nan"),
    ])
    def test_returns_none(self, entry, exit_, size):
        assert compute_pnl("Long", entry, exit_, size) is None
        assert compute_pnl("Short", entry, exit_, size) is None


class TestDirectionSymmetry:
    """
    *For any* finite entry, exit and size, the Long PnL is the negation
    of the Short PnL.
    """

    @given(entry=prices, exit_=prices, size=sizes)
    @settings(max_examples=200)
    def test_long_is_negated_short(self, entry: float, exit_: float, size: float):
        long_pnl = compute_pnl("Long", entry, exit_, size)
        short_pnl = compute_pnl("Short", entry, exit_, size)

        assert long_pnl is not None and short_pnl is not None
        assert long_pnl == -short_pnl

    @given(entry=prices, exit_=prices, size=sizes)
    @settings(max_examples=100)
    def test_matches_formula(self, entry: float, exit_: float, size: float):
        exact = (exit_ - entry) * size
        pnl = compute_pnl("Long", entry, exit_, size)

        assert abs(pnl - exact) <= 0.005 + 1e-5
        assert pnl == round_money(exact)

    @given(entry=prices, exit_=prices, size=sizes)
    @settings(max_examples=100)
    def test_idempotent(self, entry: float, exit_: float, size: float):
        first = compute_pnl("Long", entry, exit_, size)
        second = compute_pnl("Long", entry, exit_, size)
        assert first == second


class TestClassification:
    """
    *For any* PnL, a trade without exit price is Pending; otherwise the
    sign decides Win, Loss or BreakEven.
    """

    @given(pnl=st.one_of(st.none(), st.floats(allow_nan=False)))
    @settings(max_examples=100)
    def test_no_exit_is_pending(self, pnl):
        assert classify_result(pnl, has_exit=False) == "Pending"

    @given(pnl=st.floats(allow_nan=False, allow_infinity=False))
    @settings(max_examples=100)
    def test_sign_decides(self, pnl: float):
        result = classify_result(pnl, has_exit=True)
        if pnl > 0:
            assert result == "Win"
        elif pnl < 0:
            assert result == "Loss"
        else:
            assert result == "BreakEven"

    def test_missing_pnl_with_exit_is_pending(self):
        assert classify_result(None, has_exit=True) == "Pending"

    def test_negative_zero_is_breakeven(self):
        assert classify_result(-0.0, has_exit=True) == "BreakEven"
