"""Router quoting functions and the orchestration Router."""

from pairpool.router.quoting import match_liquidity, quote_swap_output, swap_amount
from pairpool.router.router import (
    LiquidityReceipt,
    Router,
    SwapQuote,
    SwapReceipt,
    WithdrawReceipt,
)

__all__ = [
    "match_liquidity",
    "swap_amount",
    "quote_swap_output",
    "Router",
    "LiquidityReceipt",
    "WithdrawReceipt",
    "SwapQuote",
    "SwapReceipt",
]
