"""Test helpers module for shared test utilities.

- constants: Actor addresses and reference amounts
- factories: Deployment construction and seeding
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    E18,
    SEED_NATIVE,
    SEED_ROOT,
    SEED_TOKEN,
    WALLET_NATIVE,
    WALLET_TOKEN,
)
from tests.helpers.factories import approve_router, deposit, make_deployment, seed_pool

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "CAROL",
    "E18",
    "SEED_NATIVE",
    "SEED_TOKEN",
    "SEED_ROOT",
    "WALLET_NATIVE",
    "WALLET_TOKEN",
    # Factories
    "make_deployment",
    "deposit",
    "seed_pool",
    "approve_router",
]
