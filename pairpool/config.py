"""Pool and token configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from pairpool.constants import (
    BPS_DENOMINATOR,
    DEFAULT_SEED_NATIVE,
    DEFAULT_SEED_PROVIDER_ADDRESS,
    DEFAULT_SEED_TOKEN,
    DEFAULT_TAX_BPS,
    DEFAULT_TREASURY_ADDRESS,
    LOCK_ADDRESS,
    MINIMUM_LIQUIDITY,
)
from pairpool.models.types import normalize_address

_TRUTHY = ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from err


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.lower() in _TRUTHY


@dataclass(frozen=True)
class PoolConfig:
    """Centralized configuration for a pool.

    Attributes:
        minimum_liquidity: Shares locked forever on the first deposit
            (default: 1000)
        fee_bps: Swap fee charged on inputs, in basis points (default: 0).
            Zero reproduces the bare constant-product check.
        lock_address: Address that receives the locked minimum liquidity
        max_events: Events the deployment's log retains before dropping the
            oldest (default: None = keep all)
    """

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    fee_bps: int = 0
    lock_address: str = LOCK_ADDRESS
    max_events: int | None = None

    def __post_init__(self) -> None:
        if self.minimum_liquidity < 0:
            raise ValueError(f"minimum_liquidity cannot be negative: {self.minimum_liquidity}")
        if not 0 <= self.fee_bps < BPS_DENOMINATOR:
            raise ValueError(f"fee_bps must be in [0, {BPS_DENOMINATOR}), got {self.fee_bps}")
        if self.max_events is not None and self.max_events <= 0:
            raise ValueError(f"max_events must be positive or None, got {self.max_events}")
        object.__setattr__(self, "lock_address", normalize_address(self.lock_address, validate=True))

    @classmethod
    def from_env(cls) -> PoolConfig:
        """Build a config from PAIRPOOL_* environment variables.

        - PAIRPOOL_MINIMUM_LIQUIDITY (default: 1000)
        - PAIRPOOL_FEE_BPS (default: 0)
        - PAIRPOOL_MAX_EVENTS (default: 0 = keep all events)
        """
        max_events = _env_int("PAIRPOOL_MAX_EVENTS", 0)
        return cls(
            minimum_liquidity=_env_int("PAIRPOOL_MINIMUM_LIQUIDITY", MINIMUM_LIQUIDITY),
            fee_bps=_env_int("PAIRPOOL_FEE_BPS", 0),
            max_events=max_events or None,
        )


@dataclass(frozen=True)
class TokenConfig:
    """Configuration for the tax-bearing paired token.

    Attributes:
        symbol: Ticker used in logs and API responses
        tax_bps: Transfer tax in basis points when enabled (default: 200 = 2%)
        tax_enabled: Whether transfers are taxed from the start
        treasury: Address credited with collected tax
    """

    symbol: str = "SPC"
    tax_bps: int = DEFAULT_TAX_BPS
    tax_enabled: bool = False
    treasury: str = DEFAULT_TREASURY_ADDRESS

    def __post_init__(self) -> None:
        if not 0 <= self.tax_bps < BPS_DENOMINATOR:
            raise ValueError(f"tax_bps must be in [0, {BPS_DENOMINATOR}), got {self.tax_bps}")
        object.__setattr__(self, "treasury", normalize_address(self.treasury, validate=True))

    @classmethod
    def from_env(cls) -> TokenConfig:
        """Build a config from PAIRPOOL_* environment variables.

        - PAIRPOOL_TAX_BPS (default: 200)
        - PAIRPOOL_TAX_ENABLED (default: false)
        """
        return cls(
            tax_bps=_env_int("PAIRPOOL_TAX_BPS", DEFAULT_TAX_BPS),
            tax_enabled=_env_bool("PAIRPOOL_TAX_ENABLED", False),
        )


@dataclass(frozen=True)
class SeedConfig:
    """Opening deposit made when a deployment is built.

    The amounts are credited to the pool directly, so the token tax never
    applies and the first reserves equal exactly (native, token).

    Attributes:
        native: Native units in the opening deposit (default: 30,000e18)
        token: Token units in the opening deposit (default: 120,000e18)
        provider: Address credited with the opening shares
    """

    native: int = DEFAULT_SEED_NATIVE
    token: int = DEFAULT_SEED_TOKEN
    provider: str = DEFAULT_SEED_PROVIDER_ADDRESS

    def __post_init__(self) -> None:
        if self.native < 0 or self.token < 0:
            raise ValueError(f"Seed amounts cannot be negative: ({self.native}, {self.token})")
        object.__setattr__(self, "provider", normalize_address(self.provider, validate=True))

    @property
    def is_empty(self) -> bool:
        return self.native == 0 and self.token == 0

    @classmethod
    def from_env(cls) -> SeedConfig:
        """Build a config from PAIRPOOL_* environment variables.

        Set both amounts to 0 to start from an empty pool.

        - PAIRPOOL_SEED_NATIVE (default: 30000e18)
        - PAIRPOOL_SEED_TOKEN (default: 120000e18)
        """
        return cls(
            native=_env_int("PAIRPOOL_SEED_NATIVE", DEFAULT_SEED_NATIVE),
            token=_env_int("PAIRPOOL_SEED_TOKEN", DEFAULT_SEED_TOKEN),
        )


# Default configuration instances
DEFAULT_POOL_CONFIG = PoolConfig()
DEFAULT_TOKEN_CONFIG = TokenConfig()
DEFAULT_SEED_CONFIG = SeedConfig()
