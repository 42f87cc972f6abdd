#!/usr/bin/env python3
"""CLI script that walks a pool through a deposit / swap / withdraw cycle.

Usage:
    # Reference pool (30,000 native / 120,000 token), tax off
    python scripts/simulate_pool.py

    # Same cycle with the 2% token tax on and a 0.3% swap fee
    python scripts/simulate_pool.py --tax --fee-bps 30 -v
"""

import argparse
import logging
import sys
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pairpool.config import PoolConfig, TokenConfig  # noqa: E402
from pairpool.deployment import PoolDeployment, deploy  # noqa: E402

logger = structlog.get_logger()

E18 = 10**18
PROVIDER = "0x1111111111111111111111111111111111111111"
TRADER = "0x2222222222222222222222222222222222222222"


def run_scenario(
    fee_bps: int = 0,
    tax: bool = False,
    seed_native: int = 30_000 * E18,
    seed_token: int = 120_000 * E18,
    token_out: int = 5_001 * E18,
    native_out: int = 1_000 * E18,
) -> tuple[PoolDeployment, list[tuple[str, int, int, int]]]:
    """Seed a pool, trade both ways, then withdraw the provider's shares.

    Returns:
        The deployment and a (step, reserve_native, reserve_token, k) row
        recorded after every step.
    """
    d = deploy(PoolConfig(fee_bps=fee_bps), TokenConfig(tax_enabled=False))
    router = d.router.address
    d.fund(PROVIDER, native=seed_native, token=seed_token)
    d.fund(TRADER, native=100 * seed_native, token=100 * seed_token)

    rows: list[tuple[str, int, int, int]] = []

    def record(step: str) -> None:
        reserves = d.pool.get_reserves()
        rows.append((step, reserves.native, reserves.token, reserves.k))

    d.token.approve(PROVIDER, router, seed_token)
    shares = d.router.add_liquidity(PROVIDER, seed_token, value=seed_native).shares
    record("seed")

    d.token.set_tax(tax)

    quote = d.router.quote_swap(token_out, 0)
    d.router.swap(TRADER, token_out, 0, max_amount_in=quote.amount_in, value=quote.amount_in)
    record("buy token")

    d.token.approve(TRADER, router, 100 * seed_token)
    quote = d.router.quote_swap(0, native_out)
    d.router.swap(TRADER, 0, native_out, max_amount_in=quote.amount_in)
    record("sell token")

    d.pool.approve_shares(PROVIDER, router, shares)
    d.router.burn_liquidity(PROVIDER, shares)
    record("withdraw")

    return d, rows


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate a tax-aware constant-product pool")
    parser.add_argument(
        "--fee-bps",
        type=int,
        default=0,
        help="Pool swap fee in basis points (default: 0)",
    )
    parser.add_argument(
        "--tax",
        action="store_true",
        help="Switch the 2%% token tax on after seeding",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    _, rows = run_scenario(fee_bps=args.fee_bps, tax=args.tax)

    print()
    print(f"{'step':<12} {'native':>28} {'token':>28}")
    print("-" * 70)
    for step, native, token, _ in rows:
        print(f"{step:<12} {native:>28} {token:>28}")
    print()

    k_values = [k for _, _, _, k in rows[:3]]
    if any(later < earlier for earlier, later in zip(k_values, k_values[1:], strict=False)):
        logger.error("invariant_decreased", k=k_values)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
