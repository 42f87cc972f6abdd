"""Integer math helpers for reserve, share and tax arithmetic."""

from pairpool.math.safe_int import (
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Underflow,
    isqrt,
    mul_div,
    mul_div_up,
)
from pairpool.math.tax import gross_of_tax, net_of_tax, tax_of

__all__ = [
    "UINT256_MAX",
    "DivisionByZero",
    "S",
    "SafeInt",
    "SafeIntError",
    "Underflow",
    "isqrt",
    "mul_div",
    "mul_div_up",
    "gross_of_tax",
    "net_of_tax",
    "tax_of",
]
