"""Tests for deployment wiring."""

import pytest

import pairpool.deployment as deployment_module
from pairpool.config import PoolConfig, SeedConfig, TokenConfig
from pairpool.constants import DEFAULT_POOL_ADDRESS, DEFAULT_ROUTER_ADDRESS, LOCK_ADDRESS
from pairpool.deployment import deploy, get_default_deployment
from pairpool.errors import InsufficientLiquidityMinted
from pairpool.events import Deposit
from tests.helpers import ALICE, SEED_NATIVE, SEED_ROOT, SEED_TOKEN


class TestDeploy:
    def test_components_share_state(self):
        """Pool, router and assets are wired to each other and one event log."""
        deployment = deploy()
        assert deployment.pool.address == DEFAULT_POOL_ADDRESS
        assert deployment.router.address == DEFAULT_ROUTER_ADDRESS
        assert deployment.router.pool is deployment.pool
        assert deployment.pool.token is deployment.token
        assert deployment.pool.events is deployment.events
        assert deployment.pool.total_supply == 0

    def test_configs_applied(self):
        deployment = deploy(PoolConfig(fee_bps=30), TokenConfig(tax_enabled=True))
        assert deployment.pool.fee_bps == 30
        assert deployment.token.tax_enabled is True

    def test_fund(self):
        deployment = deploy()
        deployment.fund(ALICE, native=5, token=7)
        assert deployment.native.balance_of(ALICE) == 5
        assert deployment.token.balance_of(ALICE) == 7


class TestSeed:
    """deploy(seed=...) makes the opening deposit."""

    def test_seeded_reserves_and_shares(self):
        deployment = deploy(seed=SeedConfig(provider=ALICE))
        pool = deployment.pool
        assert pool.get_reserves().native == SEED_NATIVE
        assert pool.get_reserves().token == SEED_TOKEN
        assert pool.total_supply == SEED_ROOT
        assert pool.share_balance_of(ALICE) == SEED_ROOT - 1000
        assert pool.share_balance_of(LOCK_ADDRESS) == 1000
        assert deployment.events.last(Deposit).shares == SEED_ROOT - 1000

    def test_seed_skips_tax(self):
        """The opening deposit is credited directly, so the tax never applies."""
        deployment = deploy(token_config=TokenConfig(tax_enabled=True), seed=SeedConfig())
        assert deployment.pool.reserve_token == SEED_TOKEN
        assert deployment.token.balance_of(deployment.token.treasury) == 0

    def test_empty_seed_leaves_pool_empty(self):
        deployment = deploy(seed=SeedConfig(native=0, token=0))
        assert deployment.pool.total_supply == 0
        assert len(deployment.events) == 0

    def test_seed_too_small(self):
        with pytest.raises(InsufficientLiquidityMinted):
            deploy(seed=SeedConfig(native=1_000, token=1_000))


class TestDefaultDeployment:
    def test_built_once_from_env(self, monkeypatch):
        monkeypatch.setattr(deployment_module, "_default_deployment", None)
        monkeypatch.setenv("PAIRPOOL_FEE_BPS", "25")
        first = get_default_deployment()
        assert first.pool.fee_bps == 25
        assert get_default_deployment() is first

    def test_seeded_from_env(self, monkeypatch):
        monkeypatch.setattr(deployment_module, "_default_deployment", None)
        monkeypatch.setenv("PAIRPOOL_SEED_NATIVE", "1000000")
        monkeypatch.setenv("PAIRPOOL_SEED_TOKEN", "4000000")
        pool = get_default_deployment().pool
        assert (pool.reserve_native, pool.reserve_token) == (1_000_000, 4_000_000)

    def test_env_can_start_empty(self, monkeypatch):
        monkeypatch.setattr(deployment_module, "_default_deployment", None)
        monkeypatch.setenv("PAIRPOOL_SEED_NATIVE", "0")
        monkeypatch.setenv("PAIRPOOL_SEED_TOKEN", "0")
        assert get_default_deployment().pool.total_supply == 0
