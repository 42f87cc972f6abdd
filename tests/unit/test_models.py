"""Tests for API models and shared types."""

import pytest
from pydantic import ValidationError

from pairpool.math import UINT256_MAX
from pairpool.models import (
    GoalAsset,
    LiquidityQuoteRequest,
    SwapQuoteRequest,
    is_valid_address,
    normalize_address,
)
from pairpool.models.types import validate_uint256


class TestUint256:
    def test_accepts_int_and_str(self):
        assert validate_uint256(5) == "5"
        assert validate_uint256("007") == "7"

    def test_rejects_negative_bool_and_overflow(self):
        for bad in (-1, True, UINT256_MAX + 1, "1.5", 1.0):
            with pytest.raises(ValueError):
                validate_uint256(bad)

    def test_max(self):
        assert validate_uint256(UINT256_MAX) == str(UINT256_MAX)


class TestAddresses:
    def test_normalize(self):
        assert normalize_address("AB" * 20) == "0x" + "ab" * 20

    def test_normalize_validates(self):
        with pytest.raises(ValueError):
            normalize_address("0x12", validate=True)

    def test_is_valid(self):
        assert is_valid_address("0x" + "0" * 40)
        assert not is_valid_address("0x" + "g" * 40)
        assert not is_valid_address(123)  # type: ignore[arg-type]


class TestRequests:
    def test_liquidity_request(self):
        request = LiquidityQuoteRequest.model_validate({"goal": "token", "amount": "100"})
        assert request.goal is GoalAsset.TOKEN
        assert request.amount == "100"

    def test_liquidity_request_bad_goal(self):
        with pytest.raises(ValidationError):
            LiquidityQuoteRequest.model_validate({"goal": "eth", "amount": "1"})

    def test_swap_request_single_output(self):
        request = SwapQuoteRequest.model_validate({"amountTokenOut": "10"})
        assert request.amount_native_out == "0"

    @pytest.mark.parametrize("body", [{}, {"amountTokenOut": "1", "amountNativeOut": "1"}])
    def test_swap_request_needs_exactly_one_output(self, body):
        with pytest.raises(ValidationError):
            SwapQuoteRequest.model_validate(body)
