"""Transferable assets: the native value asset and the taxed token."""

from pairpool.assets.base import BalanceTable, TransferableAsset
from pairpool.assets.native import NativeAsset
from pairpool.assets.taxed_token import TaxedToken

__all__ = [
    "BalanceTable",
    "TransferableAsset",
    "NativeAsset",
    "TaxedToken",
]
