"""Router quoting math.

Pure functions over explicit reserves: nothing here reads or writes pool
state. Amounts a caller must pay are always rounded up, so a quote can never
leave the pool's invariant check short by a rounding unit.
"""

from __future__ import annotations

import structlog

from pairpool.constants import BPS_DENOMINATOR, DEFAULT_TAX_BPS
from pairpool.errors import InsufficientReserve, ZeroReserve
from pairpool.math import S, gross_of_tax, mul_div_up, net_of_tax

logger = structlog.get_logger()


def match_liquidity(
    goal_amount: int,
    reserve_goal: int,
    reserve_other: int,
    total_liquidity: int,
    taxed: bool,
    goal_is_token: bool,
    tax_bps: int = DEFAULT_TAX_BPS,
) -> int:
    """Amount of the other asset that matches `goal_amount` at the pool ratio.

    Formula: matching = ceil(effective_goal * reserve_other / reserve_goal)

    Tax handling (only when `taxed`):
    - goal is the token: the pool will only receive the goal net of tax, so
      the match is computed from that net amount.
    - other is the token: the match is grossed up to the smallest amount
      whose post-tax value still reaches the matched amount.

    Args:
        goal_amount: Amount of the asset the caller leads with
        reserve_goal: Pool reserve of that asset
        reserve_other: Pool reserve of the asset being matched
        total_liquidity: Share supply (0 means nothing deposited yet)
        taxed: Whether token transfers are currently taxed
        goal_is_token: True when the goal asset is the taxed token
        tax_bps: Token tax rate in basis points

    Returns:
        Amount of the other asset to supply. On the first deposit the goal
        amount is returned unchanged: the caller sets the initial ratio.

    Raises:
        ZeroReserve: If shares exist but either reserve is zero
    """
    if total_liquidity == 0:
        return goal_amount
    if reserve_goal <= 0 or reserve_other <= 0:
        raise ZeroReserve(
            f"Cannot match liquidity against reserves ({reserve_goal}, {reserve_other}) "
            f"with {total_liquidity} shares outstanding"
        )

    effective_goal = goal_amount
    if taxed and goal_is_token:
        effective_goal = net_of_tax(goal_amount, tax_bps)

    matched = mul_div_up(effective_goal, reserve_other, reserve_goal)

    if taxed and not goal_is_token:
        matched = gross_of_tax(matched, tax_bps)

    logger.debug(
        "liquidity_matched",
        goal_amount=goal_amount,
        goal_is_token=goal_is_token,
        taxed=taxed,
        matched=matched,
    )
    return matched


def swap_amount(
    desired_output: int,
    reserve_output: int,
    reserve_input: int,
    fee_bps: int = 0,
) -> int:
    """Input the pool must receive to pay out `desired_output`.

    Formula: ceil(reserve_in * out * 10000 / ((reserve_out - out) * (10000 - fee)))

    With the default zero fee this is ceil(reserve_in * out / (reserve_out - out)).

    Args:
        desired_output: Exact output amount wanted from the pool
        reserve_output: Pool reserve of the output asset
        reserve_input: Pool reserve of the input asset
        fee_bps: Pool swap fee in basis points

    Returns:
        Required input (net, i.e. as it must arrive at the pool)

    Raises:
        InsufficientReserve: If desired_output >= reserve_output
    """
    if desired_output >= reserve_output:
        raise InsufficientReserve(
            f"Desired output {desired_output} must be below reserve {reserve_output}"
        )
    if desired_output <= 0:
        return 0
    if reserve_input <= 0:
        raise ZeroReserve(f"Input reserve is {reserve_input}")

    numerator = S(reserve_input) * desired_output * BPS_DENOMINATOR
    denominator = (S(reserve_output) - desired_output) * (BPS_DENOMINATOR - fee_bps)
    return numerator.ceiling_div(denominator).value


def quote_swap_output(
    amount_in: int,
    reserve_input: int,
    reserve_output: int,
    fee_bps: int = 0,
) -> int:
    """Output the pool pays for `amount_in` arriving at it (exact input).

    Formula: (in * (10000 - fee) * reserve_out) / (reserve_in * 10000 + in * (10000 - fee))

    Rounded down, so the quoted output always passes the pool's check.
    """
    if amount_in <= 0 or reserve_input <= 0 or reserve_output <= 0:
        return 0

    amount_in_with_fee = S(amount_in) * (BPS_DENOMINATOR - fee_bps)
    numerator = amount_in_with_fee * reserve_output
    denominator = S(reserve_input) * BPS_DENOMINATOR + amount_in_with_fee
    return (numerator // denominator).value
