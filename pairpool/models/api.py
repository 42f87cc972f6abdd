"""Pydantic models for the quote API.

Amounts cross the wire as decimal strings so that values above 2^53 survive
JSON clients that parse numbers as floats.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from pairpool.models.types import Address, Uint256


class GoalAsset(str, Enum):
    """Which side of the pair a liquidity quote leads with."""

    NATIVE = "native"
    TOKEN = "token"


class PoolState(BaseModel):
    """Snapshot of a pool's reserves and settings."""

    address: Address
    reserve_native: Uint256 = Field(alias="reserveNative")
    reserve_token: Uint256 = Field(alias="reserveToken")
    total_supply: Uint256 = Field(alias="totalSupply")
    circulating_supply: Uint256 = Field(alias="circulatingSupply")
    k: Uint256
    fee_bps: int = Field(alias="feeBps")
    tax_bps: int = Field(alias="taxBps")
    tax_enabled: bool = Field(alias="taxEnabled")

    model_config = {"populate_by_name": True}


class LiquidityQuoteRequest(BaseModel):
    """Ask for the amount of the other asset that matches a deposit."""

    goal: GoalAsset
    amount: Uint256 = Field(description="Amount of the goal asset")


class LiquidityQuoteResponse(BaseModel):
    goal: GoalAsset
    amount: Uint256
    matching_amount: Uint256 = Field(alias="matchingAmount")

    model_config = {"populate_by_name": True}


class SwapQuoteRequest(BaseModel):
    """Exact-output swap quote. Exactly one output must be nonzero."""

    amount_token_out: Uint256 = Field(default="0", alias="amountTokenOut")
    amount_native_out: Uint256 = Field(default="0", alias="amountNativeOut")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_single_output(self) -> SwapQuoteRequest:
        token_out = int(self.amount_token_out)
        native_out = int(self.amount_native_out)
        if (token_out > 0) == (native_out > 0):
            raise ValueError("Exactly one of amountTokenOut / amountNativeOut must be nonzero")
        return self


class SwapQuoteResponse(BaseModel):
    input_asset: GoalAsset = Field(alias="inputAsset")
    amount_in: Uint256 = Field(alias="amountIn", description="Gross input the caller pays")
    amount_out: Uint256 = Field(alias="amountOut", description="Amount the caller receives")
    pool_output: Uint256 = Field(alias="poolOutput", description="Amount leaving the pool")

    model_config = {"populate_by_name": True}
