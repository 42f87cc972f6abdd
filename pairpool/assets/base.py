"""Transferable asset capability shared by the native asset and the token.

The pool and router are written once against TransferableAsset. The two
variants differ only in what the recipient ends up with: the native asset
delivers every unit, the taxed token may deliver less than was sent. Callers
must always use the return value of `transfer` (or diff balances) rather than
assume the sent amount arrived.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pairpool.errors import InsufficientBalance
from pairpool.models.types import normalize_address

Amount = int


class BalanceTable:
    """Address -> amount table.

    Notes:
    - Balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: dict[str, Amount] = {}

    def get(self, address: str) -> Amount:
        """Get balance for address. Returns 0 if not found."""
        return self._balances.get(address, 0)

    def set(self, address: str, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(address, None)
        else:
            self._balances[address] = amount

    def credit(self, address: str, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Credit must be non-negative: {amount}")
        self.set(address, self.get(address) + amount)

    def debit(self, address: str, amount: Amount) -> None:
        """Subtract a non-negative amount.

        Raises:
            InsufficientBalance: If the balance is below amount
        """
        if amount < 0:
            raise ValueError(f"Debit must be non-negative: {amount}")
        current = self.get(address)
        if current < amount:
            raise InsufficientBalance(
                f"Insufficient balance for {address}: has {current}, needs {amount}"
            )
        self.set(address, current - amount)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def as_dict(self) -> dict[str, Amount]:
        return dict(self._balances)

    def load(self, balances: dict[str, Amount]) -> None:
        self._balances = dict(balances)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"


class TransferableAsset(ABC):
    """Abstract balance-query plus push-transfer capability.

    Subclasses decide how much of a transfer reaches the recipient
    (`net_amount`) and may refuse deliveries (`_check_delivery`).
    """

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        self._balances = BalanceTable()

    def balance_of(self, address: str) -> Amount:
        return self._balances.get(normalize_address(address))

    @property
    def total_supply(self) -> Amount:
        return self._balances.total()

    def mint(self, address: str, amount: Amount) -> None:
        """Create `amount` new units for `address` (genesis/faucet credit)."""
        self._balances.credit(normalize_address(address, validate=True), amount)

    @abstractmethod
    def net_amount(self, amount: Amount) -> Amount:
        """Amount a recipient receives when `amount` is sent."""
        ...

    @abstractmethod
    def gross_amount(self, net: Amount) -> Amount:
        """Smallest amount to send so the recipient receives at least `net`."""
        ...

    def _check_delivery(self, sender: str, recipient: str, amount: Amount) -> None:
        """Hook for refusing a delivery before any balance moves."""
        return None

    def _deliver(self, sender: str, recipient: str, amount: Amount) -> Amount:
        """Credit the recipient for `amount` already debited from sender."""
        self._balances.credit(recipient, amount)
        return amount

    def transfer(self, sender: str, recipient: str, amount: Amount) -> Amount:
        """Push `amount` from sender to recipient.

        Returns:
            The amount credited to the recipient, which may be below `amount`

        Raises:
            InsufficientBalance: If sender holds less than amount
            TransferFailed: If the recipient refuses the delivery
        """
        if amount < 0:
            raise ValueError(f"Transfer amount cannot be negative: {amount}")
        sender = normalize_address(sender, validate=True)
        recipient = normalize_address(recipient, validate=True)

        self._check_delivery(sender, recipient, amount)
        self._balances.debit(sender, amount)
        return self._deliver(sender, recipient, amount)

    def snapshot(self) -> Any:
        return self._balances.as_dict()

    def restore(self, snapshot: Any) -> None:
        self._balances.load(snapshot)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol!r})"
