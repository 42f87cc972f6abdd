"""Two-asset constant-product pool.

The pool holds a native reserve and a token reserve and issues shares
against them. It never trusts caller-declared amounts: every entry point
compares the pool's real balances against its recorded reserves
("balance-diff") to learn what was deposited, and verifies the constant
product against real balances after paying out a swap. This keeps it correct
for a token whose transfers arrive short because of a transfer tax.

Share issuance:
    first deposit:  isqrt(a * b) - MINIMUM_LIQUIDITY   (lock gets the rest)
    later deposits: min(a * T / reserve_native, b * T / reserve_token)

Swap check (fee in basis points, 0 by default):
    (bal_n * 10000 - in_n * fee) * (bal_t * 10000 - in_t * fee)
        >= reserve_n * reserve_t * 10000**2
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import structlog

from pairpool.assets import NativeAsset, TaxedToken
from pairpool.atomic import atomic
from pairpool.config import DEFAULT_POOL_CONFIG, PoolConfig
from pairpool.constants import BPS_DENOMINATOR, DEFAULT_POOL_ADDRESS
from pairpool.errors import (
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientOutputAmount,
    InsufficientReserve,
    InvariantViolation,
    ZeroReserve,
)
from pairpool.events import Deposit, EventLog, Swap, Sync, Withdraw
from pairpool.math import S, isqrt, mul_div
from pairpool.models.types import normalize_address
from pairpool.pool.shares import ShareLedger

logger = structlog.get_logger()


@dataclass(frozen=True)
class Reserves:
    """Recorded reserves of the pair."""

    native: int
    token: int

    @property
    def k(self) -> int:
        """Constant product of the two reserves."""
        return self.native * self.token


@dataclass(frozen=True)
class BurnResult:
    """Amounts paid out by a burn.

    `amount_token` is what left the pool; `token_received` is what reached
    the recipient after any transfer tax.
    """

    shares: int
    amount_native: int
    amount_token: int
    token_received: int


@dataclass(frozen=True)
class SwapResult:
    """Net amounts that entered and left the pool in one swap."""

    amount_native_in: int
    amount_token_in: int
    amount_native_out: int
    amount_token_out: int
    token_received: int = 0


class Pool:
    """Constant-product pool over a native asset and a taxed token.

    The pool is the only writer of its reserves. All entry points run inside
    `atomic`, so a failure leaves reserves, shares, asset balances and the
    event log exactly as they were.

    Args:
        native: Native (untaxed) asset ledger
        token: Tax-bearing token ledger
        address: Address the pool holds its balances under
        config: Minimum liquidity, swap fee and lock address
        events: Event log to record into (a new one if omitted)
    """

    def __init__(
        self,
        native: NativeAsset,
        token: TaxedToken,
        address: str = DEFAULT_POOL_ADDRESS,
        config: PoolConfig = DEFAULT_POOL_CONFIG,
        events: EventLog | None = None,
    ) -> None:
        self.native = native
        self.token = token
        self.address = normalize_address(address, validate=True)
        self.config = config
        self.events = events if events is not None else EventLog()
        self.shares = ShareLedger(config.lock_address, self.events)
        self._reserve_native = 0
        self._reserve_token = 0

    # --- Views ---

    @property
    def reserve_native(self) -> int:
        return self._reserve_native

    @property
    def reserve_token(self) -> int:
        return self._reserve_token

    def get_reserves(self) -> Reserves:
        return Reserves(native=self._reserve_native, token=self._reserve_token)

    @property
    def k(self) -> int:
        return self._reserve_native * self._reserve_token

    @property
    def total_supply(self) -> int:
        """All shares in existence, including the locked minimum."""
        return self.shares.total_supply

    @property
    def circulating_supply(self) -> int:
        """Shares that some holder can actually redeem."""
        return self.shares.total_supply - self.shares.locked

    @property
    def fee_bps(self) -> int:
        return self.config.fee_bps

    def share_balance_of(self, address: str) -> int:
        return self.shares.balance_of(address)

    def quote_withdraw(self, shares: int) -> tuple[int, int]:
        """Native and token amounts (before tax) that burning `shares` would pay now.

        Priced against balances, the same way burn pays out.
        """
        total = self.shares.total_supply
        if shares <= 0 or total == 0:
            return 0, 0
        balance_native, balance_token = self._balances()
        return (
            mul_div(shares, balance_native, total),
            mul_div(shares, balance_token, total),
        )

    # --- State changes ---

    def mint(self, recipient: str, *, sender: str | None = None) -> int:
        """Issue shares for whatever arrived since the last reserve update.

        Returns:
            Shares credited to recipient

        Raises:
            InsufficientLiquidityMinted: If the deposit is worth no shares
            ZeroReserve: If shares exist but a reserve is zero
        """
        recipient = normalize_address(recipient, validate=True)
        with self._atomic():
            balance_native, balance_token = self._balances()
            amount_native = (S(balance_native) - self._reserve_native).value
            amount_token = (S(balance_token) - self._reserve_token).value
            total = self.shares.total_supply
            minimum = self.config.minimum_liquidity

            if total == 0:
                root = isqrt(amount_native * amount_token)
                if root <= minimum:
                    raise InsufficientLiquidityMinted(
                        f"First deposit mints {root} shares, must exceed minimum {minimum}"
                    )
                shares = root - minimum
                if minimum:
                    self.shares.mint(self.config.lock_address, minimum)
            else:
                if self._reserve_native == 0 or self._reserve_token == 0:
                    raise ZeroReserve(
                        f"Reserves ({self._reserve_native}, {self._reserve_token}) "
                        f"with {total} shares outstanding"
                    )
                shares = min(
                    mul_div(amount_native, total, self._reserve_native),
                    mul_div(amount_token, total, self._reserve_token),
                )
                if shares <= 0:
                    raise InsufficientLiquidityMinted(
                        f"Deposit of ({amount_native}, {amount_token}) mints no shares"
                    )

            self.shares.mint(recipient, shares)
            self._update(balance_native, balance_token)
            self.events.emit(
                Deposit(
                    sender=normalize_address(sender or recipient),
                    recipient=recipient,
                    amount_native=amount_native,
                    amount_token=amount_token,
                    shares=shares,
                )
            )

        logger.info(
            "liquidity_minted",
            recipient=recipient,
            amount_native=amount_native,
            amount_token=amount_token,
            shares=shares,
            total_supply=self.shares.total_supply,
        )
        return shares

    def burn(self, recipient: str, *, sender: str | None = None) -> BurnResult:
        """Redeem the shares the pool itself holds and pay both assets out.

        Payouts are a pro-rata share of the pool's balances (unsynced
        donations included), floored so rounding favours remaining holders.

        Raises:
            InsufficientLiquidityBurned: If no shares were sent in or the
                payout rounds to zero on either side
        """
        recipient = normalize_address(recipient, validate=True)
        with self._atomic():
            shares = self.shares.balance_of(self.address)
            if shares == 0:
                raise InsufficientLiquidityBurned("Insufficient liquidity burned: no shares sent")

            balance_native, balance_token = self._balances()
            total = self.shares.total_supply
            amount_native = mul_div(shares, balance_native, total)
            amount_token = mul_div(shares, balance_token, total)
            if amount_native == 0 or amount_token == 0:
                raise InsufficientLiquidityBurned(
                    f"Insufficient liquidity burned: {shares} shares pay "
                    f"({amount_native}, {amount_token})"
                )

            self.shares.burn(self.address, shares)
            self.native.transfer(self.address, recipient, amount_native)
            token_received = self.token.transfer(self.address, recipient, amount_token)
            self._update(*self._balances())
            self.events.emit(
                Withdraw(
                    sender=normalize_address(sender or recipient),
                    recipient=recipient,
                    amount_native=amount_native,
                    amount_token=amount_token,
                    shares=shares,
                )
            )

        logger.info(
            "liquidity_burned",
            recipient=recipient,
            shares=shares,
            amount_native=amount_native,
            amount_token=amount_token,
            token_received=token_received,
        )
        return BurnResult(
            shares=shares,
            amount_native=amount_native,
            amount_token=amount_token,
            token_received=token_received,
        )

    def swap(
        self,
        recipient: str,
        amount_token_out: int,
        amount_native_out: int,
        *,
        sender: str | None = None,
    ) -> SwapResult:
        """Pay out the requested amounts, then check the product held.

        The input must already be in the pool (or arrive as part of the same
        atomic call before this). Inputs are inferred from balances.

        Raises:
            InsufficientOutputAmount: If both outputs are zero
            InsufficientReserve: If an output is not below its reserve
            InvariantViolation: If the inputs do not pay for the outputs
        """
        recipient = normalize_address(recipient, validate=True)
        if amount_token_out < 0 or amount_native_out < 0:
            raise ValueError("Swap outputs cannot be negative")
        if amount_token_out == 0 and amount_native_out == 0:
            raise InsufficientOutputAmount("Swap must request a nonzero output")

        reserve_native, reserve_token = self._reserve_native, self._reserve_token
        if amount_native_out >= reserve_native or amount_token_out >= reserve_token:
            raise InsufficientReserve(
                f"Outputs ({amount_native_out}, {amount_token_out}) must be below "
                f"reserves ({reserve_native}, {reserve_token})"
            )

        with self._atomic():
            token_received = 0
            if amount_token_out:
                token_received = self.token.transfer(self.address, recipient, amount_token_out)
            if amount_native_out:
                self.native.transfer(self.address, recipient, amount_native_out)

            balance_native, balance_token = self._balances()
            amount_native_in = _amount_in(balance_native, reserve_native, amount_native_out)
            amount_token_in = _amount_in(balance_token, reserve_token, amount_token_out)

            fee = self.config.fee_bps
            adjusted_native = S(balance_native) * BPS_DENOMINATOR - S(amount_native_in) * fee
            adjusted_token = S(balance_token) * BPS_DENOMINATOR - S(amount_token_in) * fee
            k_before = S(reserve_native) * reserve_token * BPS_DENOMINATOR**2
            if adjusted_native * adjusted_token < k_before:
                raise InvariantViolation(
                    f"Swap would lower k: reserves ({reserve_native}, {reserve_token}) -> "
                    f"balances ({balance_native}, {balance_token}) with inputs "
                    f"({amount_native_in}, {amount_token_in}) at {fee} bps"
                )

            self._update(balance_native, balance_token)
            self.events.emit(
                Swap(
                    sender=normalize_address(sender or recipient),
                    recipient=recipient,
                    amount_native_in=amount_native_in,
                    amount_token_in=amount_token_in,
                    amount_native_out=amount_native_out,
                    amount_token_out=amount_token_out,
                )
            )

        logger.info(
            "pool_swap",
            recipient=recipient,
            amount_native_in=amount_native_in,
            amount_token_in=amount_token_in,
            amount_native_out=amount_native_out,
            amount_token_out=amount_token_out,
            k=self.k,
        )
        return SwapResult(
            amount_native_in=amount_native_in,
            amount_token_in=amount_token_in,
            amount_native_out=amount_native_out,
            amount_token_out=amount_token_out,
            token_received=token_received,
        )

    def sync(self) -> Reserves:
        """Absorb any unrecorded balances into the reserves."""
        with self._atomic():
            self._update(*self._balances())
        return self.get_reserves()

    def skim(self, recipient: str) -> tuple[int, int]:
        """Send balances in excess of the reserves to recipient.

        Returns:
            (native, token) amounts sent, before any token tax
        """
        recipient = normalize_address(recipient, validate=True)
        with self._atomic():
            balance_native, balance_token = self._balances()
            excess_native = balance_native - self._reserve_native
            excess_token = balance_token - self._reserve_token
            if excess_native > 0:
                self.native.transfer(self.address, recipient, excess_native)
            if excess_token > 0:
                self.token.transfer(self.address, recipient, excess_token)
        logger.info("pool_skim", recipient=recipient, native=excess_native, token=excess_token)
        return max(excess_native, 0), max(excess_token, 0)

    # --- Share transfers ---

    def transfer_shares(self, sender: str, recipient: str, amount: int) -> None:
        with self._atomic():
            self.shares.transfer(sender, recipient, amount)

    def approve_shares(self, owner: str, spender: str, amount: int) -> None:
        self.shares.approve(owner, spender, amount)

    def transfer_shares_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        with self._atomic():
            self.shares.transfer_from(spender, owner, recipient, amount)

    # --- Internals ---

    def _balances(self) -> tuple[int, int]:
        return self.native.balance_of(self.address), self.token.balance_of(self.address)

    def _update(self, balance_native: int, balance_token: int) -> None:
        self._reserve_native = balance_native
        self._reserve_token = balance_token
        self.events.emit(Sync(reserve_native=balance_native, reserve_token=balance_token))

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        with atomic(self, self.shares, self.events, self.native, self.token):
            yield

    def snapshot(self) -> Any:
        return self._reserve_native, self._reserve_token

    def restore(self, snapshot: Any) -> None:
        self._reserve_native, self._reserve_token = snapshot

    def __repr__(self) -> str:
        return (
            f"Pool(address={self.address!r}, reserves=({self._reserve_native}, "
            f"{self._reserve_token}), total_supply={self.shares.total_supply})"
        )


def _amount_in(balance: int, reserve: int, amount_out: int) -> int:
    """Input inferred from the balance left after paying amount_out."""
    expected = reserve - amount_out
    return balance - expected if balance > expected else 0
