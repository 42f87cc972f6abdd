"""Share (liquidity token) ledger for the pool.

Shares are plain untaxed units: a transfer always moves exactly the amount
sent. Only the owning pool mints and burns. Balances held by the lock
address are frozen so the minimum liquidity can never be redeemed.
"""

from __future__ import annotations

from typing import Any

from pairpool.assets.base import Amount, BalanceTable
from pairpool.errors import InsufficientAllowance, TransferFailed
from pairpool.events import EventLog, SharesTransferred
from pairpool.models.types import normalize_address

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class ShareLedger:
    """Balances, allowances and total supply of pool shares."""

    def __init__(self, lock_address: str, events: EventLog | None = None) -> None:
        self.lock_address = normalize_address(lock_address, validate=True)
        self._events = events if events is not None else EventLog()
        self._balances = BalanceTable()
        self._allowances: dict[tuple[str, str], Amount] = {}
        self._total_supply = 0

    @property
    def total_supply(self) -> Amount:
        return self._total_supply

    @property
    def locked(self) -> Amount:
        """Shares held by the lock address."""
        return self._balances.get(self.lock_address)

    def balance_of(self, address: str) -> Amount:
        return self._balances.get(normalize_address(address))

    def allowance(self, owner: str, spender: str) -> Amount:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def mint(self, recipient: str, amount: Amount) -> None:
        recipient = normalize_address(recipient, validate=True)
        self._balances.credit(recipient, amount)
        self._total_supply += amount
        self._events.emit(SharesTransferred(sender=ZERO_ADDRESS, recipient=recipient, amount=amount))

    def burn(self, holder: str, amount: Amount) -> None:
        holder = normalize_address(holder, validate=True)
        self._balances.debit(holder, amount)
        self._total_supply -= amount
        self._events.emit(SharesTransferred(sender=holder, recipient=ZERO_ADDRESS, amount=amount))

    def transfer(self, sender: str, recipient: str, amount: Amount) -> None:
        """Move `amount` shares from sender to recipient.

        Raises:
            TransferFailed: If sender is the lock address
            InsufficientBalance: If sender holds fewer than amount shares
        """
        if amount < 0:
            raise ValueError(f"Transfer amount cannot be negative: {amount}")
        sender = normalize_address(sender, validate=True)
        recipient = normalize_address(recipient, validate=True)
        if sender == self.lock_address:
            raise TransferFailed("Locked minimum liquidity cannot be moved")

        self._balances.debit(sender, amount)
        self._balances.credit(recipient, amount)
        self._events.emit(SharesTransferred(sender=sender, recipient=recipient, amount=amount))

    def approve(self, owner: str, spender: str, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        key = (normalize_address(owner, validate=True), normalize_address(spender, validate=True))
        if amount == 0:
            self._allowances.pop(key, None)
        else:
            self._allowances[key] = amount

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: Amount) -> None:
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowance(
                f"Insufficient share allowance: {spender} may move {current} "
                f"of {owner}'s shares, needs {amount}"
            )
        self.transfer(owner, recipient, amount)
        self.approve(owner, spender, current - amount)

    def snapshot(self) -> Any:
        return self._balances.as_dict(), dict(self._allowances), self._total_supply

    def restore(self, snapshot: Any) -> None:
        balances, allowances, total_supply = snapshot
        self._balances.load(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply

    def __repr__(self) -> str:
        return f"ShareLedger(total_supply={self._total_supply})"
