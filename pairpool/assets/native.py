"""Native value asset (the untaxed leg of the pair)."""

from __future__ import annotations

from typing import Any

import structlog

from pairpool.assets.base import Amount, TransferableAsset
from pairpool.errors import TransferFailed
from pairpool.models.types import normalize_address

logger = structlog.get_logger()


class NativeAsset(TransferableAsset):
    """Plain value asset: every unit sent is received.

    Recipients can be flagged as rejecting payments (the in-process analogue
    of a contract without a payable fallback). Any transfer to them raises
    TransferFailed, which aborts the enclosing operation.
    """

    def __init__(self, symbol: str = "ETH") -> None:
        super().__init__(symbol)
        self._rejecting: set[str] = set()

    def net_amount(self, amount: Amount) -> Amount:
        return amount

    def gross_amount(self, net: Amount) -> Amount:
        return max(net, 0)

    def reject_payments(self, address: str, rejecting: bool = True) -> None:
        """Make `address` refuse (or accept again) incoming transfers."""
        address = normalize_address(address, validate=True)
        if rejecting:
            self._rejecting.add(address)
        else:
            self._rejecting.discard(address)

    def _check_delivery(self, sender: str, recipient: str, amount: Amount) -> None:
        if recipient in self._rejecting:
            logger.warning(
                "native_transfer_rejected",
                sender=sender,
                recipient=recipient,
                amount=amount,
            )
            raise TransferFailed(f"{self.symbol} transfer to {recipient} rejected")

    def _deliver(self, sender: str, recipient: str, amount: Amount) -> Amount:
        received = super()._deliver(sender, recipient, amount)
        logger.debug(
            "native_transfer",
            sender=sender,
            recipient=recipient,
            amount=amount,
        )
        return received

    def snapshot(self) -> Any:
        return super().snapshot(), frozenset(self._rejecting)

    def restore(self, snapshot: Any) -> None:
        balances, rejecting = snapshot
        super().restore(balances)
        self._rejecting = set(rejecting)
