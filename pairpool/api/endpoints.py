"""API endpoints for the pool quote service."""

import structlog
from fastapi import APIRouter, Depends

from pairpool.deployment import PoolDeployment, get_default_deployment
from pairpool.models.api import (
    GoalAsset,
    LiquidityQuoteRequest,
    LiquidityQuoteResponse,
    PoolState,
    SwapQuoteRequest,
    SwapQuoteResponse,
)

logger = structlog.get_logger()

router = APIRouter()


def get_deployment() -> PoolDeployment:
    """Dependency provider for the deployment being quoted against.

    Override this in tests to inject a seeded deployment:
        app.dependency_overrides[get_deployment] = lambda: deployment

    Returns:
        The deployment whose pool and router serve the quotes.
    """
    return get_default_deployment()


@router.get("/pool", response_model_by_alias=True)
async def pool_state(deployment: PoolDeployment = Depends(get_deployment)) -> PoolState:
    """Current reserves, share supply and fee/tax settings."""
    pool = deployment.pool
    token = deployment.token
    return PoolState(
        address=pool.address,
        reserve_native=str(pool.reserve_native),
        reserve_token=str(pool.reserve_token),
        total_supply=str(pool.total_supply),
        circulating_supply=str(pool.circulating_supply),
        k=str(pool.k),
        fee_bps=pool.fee_bps,
        tax_bps=token.tax_bps,
        tax_enabled=token.tax_enabled,
    )


@router.post("/quote/liquidity", response_model_by_alias=True)
async def quote_liquidity(
    request: LiquidityQuoteRequest,
    deployment: PoolDeployment = Depends(get_deployment),
) -> LiquidityQuoteResponse:
    """Amount of the other asset to deposit alongside `amount` of the goal.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - ZeroReserve: 422 via the PoolError handler
    """
    amount = int(request.amount)
    matching = deployment.router.matching_amount(
        amount, goal_is_token=request.goal is GoalAsset.TOKEN
    )
    logger.debug("liquidity_quote", goal=request.goal.value, amount=amount, matching=matching)
    return LiquidityQuoteResponse(
        goal=request.goal,
        amount=str(amount),
        matching_amount=str(matching),
    )


@router.post("/quote/swap", response_model_by_alias=True)
async def quote_swap(
    request: SwapQuoteRequest,
    deployment: PoolDeployment = Depends(get_deployment),
) -> SwapQuoteResponse:
    """Gross input needed for an exact-output swap at current reserves.

    Error Handling:
        - Both or neither output set: 422 (Pydantic)
        - InsufficientReserve: 422 via the PoolError handler
    """
    token_out = int(request.amount_token_out)
    native_out = int(request.amount_native_out)
    quote = deployment.router.quote_swap(token_out, native_out)
    logger.debug(
        "swap_quote",
        amount_token_out=token_out,
        amount_native_out=native_out,
        amount_in=quote.amount_in,
    )
    return SwapQuoteResponse(
        input_asset=GoalAsset.NATIVE if quote.input_is_native else GoalAsset.TOKEN,
        amount_in=str(quote.amount_in),
        amount_out=str(token_out or native_out),
        pool_output=str(quote.pool_output),
    )
