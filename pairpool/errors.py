"""Pool and router error classes.

Every failure aborts the whole operation. Callers see one of these and decide
whether to resubmit with different amounts; nothing is retried internally.
"""


class PoolError(Exception):
    """Base error for pool, router and asset operations."""

    pass


class InsufficientLiquidityMinted(PoolError):
    """A deposit would mint zero (or fewer) shares."""

    pass


class InsufficientLiquidityBurned(PoolError):
    """A withdrawal redeems zero shares or pays out nothing."""

    pass


class InsufficientOutputAmount(PoolError):
    """A swap asked for no output at all."""

    pass


class InvariantViolation(PoolError):
    """A swap would decrease the constant product."""

    pass


class ZeroReserve(PoolError):
    """A reserve is zero while shares are outstanding."""

    pass


class InsufficientReserve(PoolError):
    """Requested output is not strictly below the reserve."""

    pass


class SlippageExceeded(PoolError):
    """Required input is above the caller's maximum."""

    pass


class InvalidSwapRequest(PoolError):
    """Router swaps need exactly one nonzero output leg."""

    pass


class TransferFailed(PoolError):
    """An asset transfer could not be delivered."""

    pass


class InsufficientBalance(TransferFailed):
    """Sender balance is below the transfer amount."""

    pass


class InsufficientAllowance(TransferFailed):
    """Spender allowance is below the transfer amount."""

    pass
