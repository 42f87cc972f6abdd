"""Pydantic models and shared types for the quote API."""

from pairpool.models.api import (
    GoalAsset,
    LiquidityQuoteRequest,
    LiquidityQuoteResponse,
    PoolState,
    SwapQuoteRequest,
    SwapQuoteResponse,
)
from pairpool.models.types import Address, Uint256, is_valid_address, normalize_address

__all__ = [
    # Types
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    # API models
    "GoalAsset",
    "PoolState",
    "LiquidityQuoteRequest",
    "LiquidityQuoteResponse",
    "SwapQuoteRequest",
    "SwapQuoteResponse",
]
