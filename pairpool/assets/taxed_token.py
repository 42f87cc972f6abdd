"""Fee-on-transfer token (the taxed leg of the pair).

When the tax is on, every transfer withholds floor(amount * tax_bps / 10000)
and credits it to the treasury; the recipient gets the rest. Rounding the
tax down means the recipient never loses more than the nominal rate.

Example with the default 2% tax:
    send 102  -> tax 2  -> recipient receives 100
    send 100  -> tax 2  -> recipient receives 98
"""

from __future__ import annotations

from typing import Any

import structlog

from pairpool.assets.base import Amount, TransferableAsset
from pairpool.config import DEFAULT_TOKEN_CONFIG, TokenConfig
from pairpool.constants import BPS_DENOMINATOR
from pairpool.errors import InsufficientAllowance
from pairpool.math import gross_of_tax, net_of_tax, tax_of
from pairpool.models.types import normalize_address

logger = structlog.get_logger()


class TaxedToken(TransferableAsset):
    """Ledger token whose transfers may be taxed.

    Args:
        config: Symbol, tax rate, initial tax switch and treasury address.
    """

    def __init__(self, config: TokenConfig = DEFAULT_TOKEN_CONFIG) -> None:
        super().__init__(config.symbol)
        self.treasury = config.treasury
        self._tax_bps = config.tax_bps
        self._tax_enabled = config.tax_enabled
        # (owner, spender) -> remaining allowance
        self._allowances: dict[tuple[str, str], Amount] = {}

    # --- Tax settings ---

    @property
    def tax_enabled(self) -> bool:
        return self._tax_enabled

    @property
    def tax_bps(self) -> int:
        """Configured tax rate, whether or not it is currently switched on."""
        return self._tax_bps

    @property
    def effective_tax_bps(self) -> int:
        """Rate applied to a transfer right now (0 when the tax is off)."""
        return self._tax_bps if self._tax_enabled else 0

    def set_tax(self, enabled: bool) -> None:
        self._tax_enabled = enabled
        logger.info("token_tax_toggled", symbol=self.symbol, enabled=enabled)

    def set_tax_rate(self, tax_bps: int) -> None:
        if not 0 <= tax_bps < BPS_DENOMINATOR:
            raise ValueError(f"tax_bps must be in [0, {BPS_DENOMINATOR}), got {tax_bps}")
        self._tax_bps = tax_bps
        logger.info("token_tax_rate_changed", symbol=self.symbol, tax_bps=tax_bps)

    def tax_on(self, amount: Amount) -> Amount:
        """Tax withheld from a transfer of `amount`."""
        return tax_of(amount, self.effective_tax_bps)

    def net_amount(self, amount: Amount) -> Amount:
        return net_of_tax(amount, self.effective_tax_bps)

    def gross_amount(self, net: Amount) -> Amount:
        return gross_of_tax(net, self.effective_tax_bps)

    def _deliver(self, sender: str, recipient: str, amount: Amount) -> Amount:
        tax = self.tax_on(amount)
        received = amount - tax
        self._balances.credit(recipient, received)
        if tax:
            self._balances.credit(self.treasury, tax)
        logger.debug(
            "token_transfer",
            symbol=self.symbol,
            sender=sender,
            recipient=recipient,
            amount=amount,
            received=received,
            tax=tax,
        )
        return received

    # --- Allowances ---

    def allowance(self, owner: str, spender: str) -> Amount:
        key = (normalize_address(owner), normalize_address(spender))
        return self._allowances.get(key, 0)

    def approve(self, owner: str, spender: str, amount: Amount) -> None:
        """Let `spender` move up to `amount` of owner's tokens."""
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        key = (normalize_address(owner, validate=True), normalize_address(spender, validate=True))
        if amount == 0:
            self._allowances.pop(key, None)
        else:
            self._allowances[key] = amount

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: Amount) -> Amount:
        """Pull `amount` from owner to recipient using spender's allowance.

        Returns:
            The amount credited to the recipient (after tax)

        Raises:
            InsufficientAllowance: If spender may not move `amount`
            InsufficientBalance: If owner holds less than `amount`
        """
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowance(
                f"Insufficient {self.symbol} allowance: {spender} may move {current} "
                f"of {owner}'s tokens, needs {amount}"
            )
        received = self.transfer(owner, recipient, amount)
        self.approve(owner, spender, current - amount)
        return received

    # --- Atomic participation ---

    def snapshot(self) -> Any:
        return (
            super().snapshot(),
            dict(self._allowances),
            self._tax_bps,
            self._tax_enabled,
        )

    def restore(self, snapshot: Any) -> None:
        balances, allowances, tax_bps, tax_enabled = snapshot
        super().restore(balances)
        self._allowances = dict(allowances)
        self._tax_bps = tax_bps
        self._tax_enabled = tax_enabled
