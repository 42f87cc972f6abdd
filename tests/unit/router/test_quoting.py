"""Tests for the pure router quoting functions."""

import pytest

from pairpool.errors import InsufficientReserve, ZeroReserve
from pairpool.math import gross_of_tax
from pairpool.router import Router, match_liquidity, quote_swap_output, swap_amount

E18 = 10**18
R_NATIVE = 30_000 * E18
R_TOKEN = 120_000 * E18
TOTAL = 60_000 * E18


class TestMatchLiquidity:
    """match_liquidity returns the other side of a balanced deposit."""

    def test_first_deposit_returns_goal(self):
        """With no shares outstanding the caller sets the ratio."""
        assert match_liquidity(123, 0, 0, 0, False, True) == 123

    def test_native_goal(self):
        """3,000 native matches 12,000 token at 1:4."""
        assert match_liquidity(3_000 * E18, R_NATIVE, R_TOKEN, TOTAL, False, False) == 12_000 * E18

    def test_token_goal(self):
        assert match_liquidity(12_000 * E18, R_TOKEN, R_NATIVE, TOTAL, False, True) == 3_000 * E18

    def test_rounds_up(self):
        """The matched amount is never short of the exact ratio."""
        assert match_liquidity(1, 3, 10, 5, False, False) == 4

    def test_zero_reserve_with_supply(self):
        with pytest.raises(ZeroReserve):
            match_liquidity(1, 0, R_TOKEN, TOTAL, False, True)

    def test_taxed_token_goal_uses_net(self):
        """A 12,000 token goal only delivers 11,760, matched by 2,940 native."""
        assert match_liquidity(12_000 * E18, R_TOKEN, R_NATIVE, TOTAL, True, True) == 2_940 * E18

    def test_taxed_native_goal_grosses_up(self):
        """The token side is grossed up so 12,000 still arrives."""
        matched = match_liquidity(3_000 * E18, R_NATIVE, R_TOKEN, TOTAL, True, False)
        assert matched == gross_of_tax(12_000 * E18, 200)

    def test_custom_tax_rate(self):
        matched = match_liquidity(100, 100, 100, 100, True, True, tax_bps=1_000)
        assert matched == 90

    def test_router_exposes_helpers(self):
        """The Router class carries the quoting helpers."""
        assert Router.match_liquidity(3, 3, 6, 1, False, False) == 6
        assert Router.swap_amount(1, 2, 2) == 2


class TestMatchingSymmetry:
    """Matching native -> token -> native returns within one unit."""

    @pytest.mark.parametrize("amount", [1, 7, 999, 10**6 + 3, 1_234 * E18 + 17])
    def test_round_trip(self, amount):
        r_native, r_token, total = 30_001 * E18, 120_007 * E18, 60_000 * E18
        token = match_liquidity(amount, r_native, r_token, total, False, False)
        back = match_liquidity(token, r_token, r_native, total, False, True)
        assert abs(back - amount) <= 1


class TestSwapAmount:
    """swap_amount is the minimum input for an exact output."""

    def test_reference(self):
        """118,800 token out of (30,000, 120,000) needs 2,970,000 native."""
        assert swap_amount(118_800 * E18, R_TOKEN, R_NATIVE) == 2_970_000 * E18

    def test_reference_with_fee(self):
        """With a 1% fee the same output needs exactly 3,000,000."""
        assert swap_amount(118_800 * E18, R_TOKEN, R_NATIVE, fee_bps=100) == 3_000_000 * E18

    def test_rounds_up(self):
        """ceil(30000e18 * 1000e18 / 119000e18)."""
        expected = -(-R_NATIVE * 1_000 * E18 // (R_TOKEN - 1_000 * E18))
        assert swap_amount(1_000 * E18, R_TOKEN, R_NATIVE) == expected
        assert (R_NATIVE * 1_000 * E18) % (R_TOKEN - 1_000 * E18) != 0

    def test_output_at_reserve(self):
        with pytest.raises(InsufficientReserve):
            swap_amount(R_TOKEN, R_TOKEN, R_NATIVE)

    def test_zero_output(self):
        assert swap_amount(0, R_TOKEN, R_NATIVE) == 0

    def test_zero_input_reserve(self):
        with pytest.raises(ZeroReserve):
            swap_amount(1, R_TOKEN, 0)


class TestQuoteSwapOutput:
    """quote_swap_output is the exact-input counterpart (floored)."""

    def test_inverse_of_swap_amount(self):
        """Paying swap_amount(out) buys at least out."""
        needed = swap_amount(1_000 * E18, R_TOKEN, R_NATIVE)
        assert quote_swap_output(needed, R_NATIVE, R_TOKEN) >= 1_000 * E18
        assert quote_swap_output(needed - 1, R_NATIVE, R_TOKEN) < 1_000 * E18

    def test_fee_lowers_output(self):
        assert quote_swap_output(E18, R_NATIVE, R_TOKEN, 30) < quote_swap_output(E18, R_NATIVE, R_TOKEN)

    def test_empty_inputs(self):
        assert quote_swap_output(0, R_NATIVE, R_TOKEN) == 0
        assert quote_swap_output(1, 0, R_TOKEN) == 0
