"""Wiring of native asset, token, pool and router into one system.

A PoolDeployment is the in-process analogue of deploying the token, the pool
and the router contracts: all three share one event log, and the router is
bound to the pool's assets.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from pairpool.assets import NativeAsset, TaxedToken
from pairpool.config import (
    DEFAULT_POOL_CONFIG,
    DEFAULT_TOKEN_CONFIG,
    PoolConfig,
    SeedConfig,
    TokenConfig,
)
from pairpool.constants import DEFAULT_POOL_ADDRESS, DEFAULT_ROUTER_ADDRESS
from pairpool.events import EventLog
from pairpool.pool import Pool
from pairpool.router import Router

logger = structlog.get_logger()


@dataclass
class PoolDeployment:
    """A pool, its router and the two assets they move."""

    native: NativeAsset
    token: TaxedToken
    pool: Pool
    router: Router
    events: EventLog = field(repr=False)

    def fund(self, address: str, native: int = 0, token: int = 0) -> None:
        """Credit `address` with fresh native and token units."""
        if native:
            self.native.mint(address, native)
        if token:
            self.token.mint(address, token)

    def seed(self, seed: SeedConfig) -> int:
        """Make the opening deposit described by `seed`.

        Both amounts are credited to the pool directly and minted against, so
        the token tax does not reduce the first reserves.

        Returns:
            Shares credited to the seed provider

        Raises:
            InsufficientLiquidityMinted: If the deposit is too small to mint
        """
        self.fund(self.pool.address, native=seed.native, token=seed.token)
        shares = self.pool.mint(seed.provider)
        logger.info(
            "pool_seeded",
            provider=seed.provider,
            amount_native=seed.native,
            amount_token=seed.token,
            shares=shares,
        )
        return shares


def deploy(
    pool_config: PoolConfig = DEFAULT_POOL_CONFIG,
    token_config: TokenConfig = DEFAULT_TOKEN_CONFIG,
    *,
    pool_address: str = DEFAULT_POOL_ADDRESS,
    router_address: str = DEFAULT_ROUTER_ADDRESS,
    seed: SeedConfig | None = None,
) -> PoolDeployment:
    """Create a pool with its router, optionally making the opening deposit.

    Args:
        pool_config: Minimum liquidity, swap fee and lock address
        token_config: Symbol, tax settings and treasury of the token
        pool_address: Address the pool holds reserves under
        router_address: Address the router acts under
        seed: Opening deposit to make; None or an empty seed leaves the
            pool without reserves

    Returns:
        The wired deployment
    """
    events = EventLog(pool_config.max_events)
    native = NativeAsset()
    token = TaxedToken(token_config)
    pool = Pool(native, token, address=pool_address, config=pool_config, events=events)
    router = Router(pool, address=router_address)

    logger.info(
        "pool_deployed",
        pool=pool.address,
        router=router.address,
        token=token.symbol,
        fee_bps=pool_config.fee_bps,
        tax_bps=token_config.tax_bps,
        tax_enabled=token_config.tax_enabled,
    )
    deployment = PoolDeployment(native=native, token=token, pool=pool, router=router, events=events)
    if seed is not None and not seed.is_empty:
        deployment.seed(seed)
    return deployment


_default_deployment: PoolDeployment | None = None


def get_default_deployment() -> PoolDeployment:
    """Process-wide deployment configured from PAIRPOOL_* environment variables.

    Built on first use so importing the API module has no side effects. The
    pool is seeded from PAIRPOOL_SEED_NATIVE and PAIRPOOL_SEED_TOKEN.
    """
    global _default_deployment
    if _default_deployment is None:
        _default_deployment = deploy(
            PoolConfig.from_env(),
            TokenConfig.from_env(),
            seed=SeedConfig.from_env(),
        )
    return _default_deployment
