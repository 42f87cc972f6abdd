"""Pair Pool - tax-aware constant-product liquidity pool."""

from pairpool.deployment import PoolDeployment, deploy, get_default_deployment
from pairpool.pool import Pool
from pairpool.router import Router

__version__ = "0.1.0"
__all__ = ["Pool", "Router", "PoolDeployment", "deploy", "get_default_deployment", "__version__"]
