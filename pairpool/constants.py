"""Protocol constants for the pair pool.

Centralizes well-known addresses and protocol parameters.
"""

from pairpool.models.types import is_valid_address


def _validate_address(name: str, address: str) -> str:
    """Validate and return a well-known address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Shares minted to LOCK_ADDRESS on the first deposit and never redeemable
MINIMUM_LIQUIDITY = 1000

# Nobody holds the key for this address; shares sent here are gone for good
LOCK_ADDRESS = _validate_address("lock", "0x0000000000000000000000000000000000000001")

# Default addresses used when a deployment is built without explicit ones
DEFAULT_POOL_ADDRESS = _validate_address("pool", "0x5655a22f8bc5d130cf636473dc0361d78eb73a50")
DEFAULT_ROUTER_ADDRESS = _validate_address("router", "0xe25116efc07a68ebfb5a35fe859e440b70a38f64")
DEFAULT_TREASURY_ADDRESS = _validate_address(
    "treasury", "0x41dd638218bf3e97cc0b682165029e3eaa0ccebd"
)

# Fees and taxes are expressed in basis points of this denominator
BPS_DENOMINATOR = 10_000

# Transfer tax of the paired token when enabled (2%)
DEFAULT_TAX_BPS = 200

# Opening deposit of the service's default pool (1 native = 4 token)
DEFAULT_SEED_NATIVE = 30_000 * 10**18
DEFAULT_SEED_TOKEN = 120_000 * 10**18

# Holder of the shares minted by that opening deposit
DEFAULT_SEED_PROVIDER_ADDRESS = _validate_address(
    "seed provider", "0x7a3b9c4e2d8f1a6b5c0e9d8c7b6a5f4e3d2c1b0a"
)
