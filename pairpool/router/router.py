"""Router: turns caller intent into exact pool calls.

The router holds no balances between calls. Each entry point quotes against
the pool's live reserves and the token's live tax rate, moves the caller's
assets into the pool, invokes the pool, and returns any unused native value,
all inside one atomic unit. If any step fails (including the refund) the
whole call is undone.

Supports:
- Adding liquidity led by either asset (the other side is matched)
- Removing liquidity with an allowance on the caller's shares
- Exact-output swaps in both directions with a maximum-input bound
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog

from pairpool.atomic import atomic
from pairpool.constants import DEFAULT_ROUTER_ADDRESS
from pairpool.errors import InvalidSwapRequest, SlippageExceeded, TransferFailed
from pairpool.events import Refund
from pairpool.models.types import normalize_address
from pairpool.pool import Pool
from pairpool.router.quoting import match_liquidity, swap_amount

logger = structlog.get_logger()


@dataclass(frozen=True)
class LiquidityReceipt:
    """Outcome of Router.add_liquidity."""

    shares: int
    amount_native: int
    token_sent: int
    token_received: int
    refund: int


@dataclass(frozen=True)
class WithdrawReceipt:
    """Outcome of Router.burn_liquidity.

    `amount_token` is what reached the caller after any transfer tax.
    """

    shares: int
    amount_native: int
    amount_token: int


@dataclass(frozen=True)
class SwapQuote:
    """Amounts a router swap will move.

    pool_output is what the pool pays out; for a token output it is grossed
    up so the caller still receives the requested amount after tax.
    """

    input_is_native: bool
    amount_in: int
    pool_output: int


@dataclass(frozen=True)
class SwapReceipt:
    """Outcome of Router.swap."""

    input_is_native: bool
    amount_in: int
    amount_out: int
    refund: int


class Router:
    """Stateless orchestration layer in front of one Pool.

    Args:
        pool: The pool to route into; its assets are used for custody.
        address: Address the router acts under (spender of allowances and
            temporary holder of native value sent with a call).
    """

    match_liquidity = staticmethod(match_liquidity)
    swap_amount = staticmethod(swap_amount)

    def __init__(self, pool: Pool, address: str = DEFAULT_ROUTER_ADDRESS) -> None:
        self.pool = pool
        self.native = pool.native
        self.token = pool.token
        self.address = normalize_address(address, validate=True)

    # --- Quotes against live state ---

    def matching_amount(self, goal_amount: int, goal_is_token: bool) -> int:
        """match_liquidity against the pool's current reserves and tax rate."""
        reserves = self.pool.get_reserves()
        if goal_is_token:
            reserve_goal, reserve_other = reserves.token, reserves.native
        else:
            reserve_goal, reserve_other = reserves.native, reserves.token
        return match_liquidity(
            goal_amount,
            reserve_goal,
            reserve_other,
            self.pool.total_supply,
            self.token.tax_enabled,
            goal_is_token,
            self.token.tax_bps,
        )

    def quote_swap(self, amount_token_out: int, amount_native_out: int) -> SwapQuote:
        """Required input for an exact-output swap at current reserves.

        Raises:
            InvalidSwapRequest: Unless exactly one output is nonzero
            InsufficientReserve: If the output cannot be paid from the reserve
        """
        if amount_token_out < 0 or amount_native_out < 0:
            raise InvalidSwapRequest("Swap outputs cannot be negative")
        if (amount_token_out > 0) == (amount_native_out > 0):
            raise InvalidSwapRequest(
                f"Exactly one output must be nonzero, got token={amount_token_out} "
                f"native={amount_native_out}"
            )

        reserves = self.pool.get_reserves()
        fee = self.pool.fee_bps
        if amount_token_out:
            pool_output = self.token.gross_amount(amount_token_out)
            amount_in = swap_amount(pool_output, reserves.token, reserves.native, fee)
            return SwapQuote(input_is_native=True, amount_in=amount_in, pool_output=pool_output)

        required_net = swap_amount(amount_native_out, reserves.native, reserves.token, fee)
        amount_in = self.token.gross_amount(required_net)
        return SwapQuote(input_is_native=False, amount_in=amount_in, pool_output=amount_native_out)

    # --- Entry points ---

    def add_liquidity(self, caller: str, goal_token_amount: int, value: int = 0) -> LiquidityReceipt:
        """Deposit in the pool's current ratio.

        With `goal_token_amount > 0` the token leads and the native side is
        matched; with 0 the native `value` leads and the token side is
        matched. On the very first deposit both are used as given.

        Args:
            caller: Depositor; must have approved the router for the token
            goal_token_amount: Token amount to lead with (0 = native leads)
            value: Native amount sent with the call

        Raises:
            TransferFailed: If `value` is short of the matched native amount
                or the refund of the excess cannot be delivered
            InsufficientAllowance / InsufficientBalance: token pull failed
            InsufficientLiquidityMinted: If the deposit is worth no shares
        """
        caller = normalize_address(caller, validate=True)
        total = self.pool.total_supply

        if total == 0:
            required_native, token_amount = value, goal_token_amount
        elif goal_token_amount > 0:
            token_amount = goal_token_amount
            required_native = self.matching_amount(goal_token_amount, goal_is_token=True)
        else:
            required_native = value
            token_amount = self.matching_amount(value, goal_is_token=False)

        if value < required_native:
            raise TransferFailed(
                f"{self.native.symbol} transfer failed: sent {value}, need {required_native}"
            )

        with self._atomic():
            if value:
                self.native.transfer(caller, self.address, value)
            token_received = 0
            if token_amount:
                token_received = self.token.transfer_from(
                    self.address, caller, self.pool.address, token_amount
                )
            if required_native:
                self.native.transfer(self.address, self.pool.address, required_native)
            shares = self.pool.mint(caller, sender=self.address)
            refund = self._refund(caller, value - required_native)

        logger.info(
            "router_liquidity_added",
            caller=caller,
            shares=shares,
            amount_native=required_native,
            token_sent=token_amount,
            token_received=token_received,
            refund=refund,
        )
        return LiquidityReceipt(
            shares=shares,
            amount_native=required_native,
            token_sent=token_amount,
            token_received=token_received,
            refund=refund,
        )

    def burn_liquidity(self, caller: str, share_amount: int) -> WithdrawReceipt:
        """Redeem `share_amount` of the caller's shares (needs a share allowance)."""
        caller = normalize_address(caller, validate=True)
        with self._atomic():
            self.pool.transfer_shares_from(self.address, caller, self.pool.address, share_amount)
            result = self.pool.burn(caller, sender=self.address)

        logger.info(
            "router_liquidity_removed",
            caller=caller,
            shares=result.shares,
            amount_native=result.amount_native,
            amount_token=result.token_received,
        )
        return WithdrawReceipt(
            shares=result.shares,
            amount_native=result.amount_native,
            amount_token=result.token_received,
        )

    def swap(
        self,
        caller: str,
        amount_token_out: int,
        amount_native_out: int,
        max_amount_in: int,
        value: int = 0,
    ) -> SwapReceipt:
        """Exact-output swap with a maximum-input bound.

        Token out: the input is native, paid from `value`; the excess is
        refunded. Native out: the input is token, pulled with the caller's
        allowance, and all of `value` is refunded.

        Raises:
            InvalidSwapRequest: Unless exactly one output is nonzero
            SlippageExceeded: If the required input exceeds max_amount_in
            TransferFailed: If `value` does not cover a native input, or a
                refund/payout cannot be delivered
        """
        caller = normalize_address(caller, validate=True)
        quote = self.quote_swap(amount_token_out, amount_native_out)

        if quote.amount_in > max_amount_in:
            logger.warning(
                "router_swap_slippage",
                caller=caller,
                required_in=quote.amount_in,
                max_amount_in=max_amount_in,
            )
            raise SlippageExceeded(
                f"Swap needs {quote.amount_in} in, caller allows at most {max_amount_in}"
            )
        if quote.input_is_native and value < quote.amount_in:
            raise TransferFailed(
                f"{self.native.symbol} transfer failed: sent {value}, need {quote.amount_in}"
            )

        with self._atomic():
            if value:
                self.native.transfer(caller, self.address, value)
            if quote.input_is_native:
                self.native.transfer(self.address, self.pool.address, quote.amount_in)
                result = self.pool.swap(caller, quote.pool_output, 0, sender=self.address)
                amount_out = result.token_received
                refund = self._refund(caller, value - quote.amount_in)
            else:
                self.token.transfer_from(self.address, caller, self.pool.address, quote.amount_in)
                result = self.pool.swap(caller, 0, quote.pool_output, sender=self.address)
                amount_out = result.amount_native_out
                refund = self._refund(caller, value)

        logger.info(
            "router_swap",
            caller=caller,
            input_is_native=quote.input_is_native,
            amount_in=quote.amount_in,
            amount_out=amount_out,
            refund=refund,
        )
        return SwapReceipt(
            input_is_native=quote.input_is_native,
            amount_in=quote.amount_in,
            amount_out=amount_out,
            refund=refund,
        )

    # --- Internals ---

    def _refund(self, caller: str, amount: int) -> int:
        if amount <= 0:
            return 0
        self.native.transfer(self.address, caller, amount)
        self.pool.events.emit(Refund(recipient=caller, amount=amount))
        return amount

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        with atomic(self.pool, self.pool.shares, self.pool.events, self.native, self.token):
            yield

    def __repr__(self) -> str:
        return f"Router(address={self.address!r}, pool={self.pool.address!r})"
