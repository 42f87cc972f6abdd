"""Pytest configuration and fixtures."""

import pytest

from pairpool.deployment import PoolDeployment
from tests.helpers import make_deployment, seed_pool


@pytest.fixture
def deployment() -> PoolDeployment:
    """Empty pool, tax off, zero fee; ALICE and BOB funded."""
    return make_deployment()


@pytest.fixture
def seeded(deployment: PoolDeployment) -> PoolDeployment:
    """Reference pool (30,000 native / 120,000 token) seeded by ALICE, tax off."""
    seed_pool(deployment)
    return deployment


@pytest.fixture
def taxed() -> PoolDeployment:
    """Reference pool seeded by ALICE, then the 2% token tax switched on."""
    deployment = make_deployment(tax_enabled=True)
    seed_pool(deployment)
    return deployment
