"""Constant-product pool and its share ledger."""

from pairpool.pool.pool import BurnResult, Pool, Reserves, SwapResult
from pairpool.pool.shares import ZERO_ADDRESS, ShareLedger

__all__ = [
    "Pool",
    "Reserves",
    "BurnResult",
    "SwapResult",
    "ShareLedger",
    "ZERO_ADDRESS",
]
