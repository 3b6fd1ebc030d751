"""Pydantic models for curve quote requests and responses."""

from pydantic import BaseModel, Field

from curve_engine.constants import MAX_SWAP_FEE, PRICE_PRECISION
from curve_engine.models.types import Bytes, Uint256, hex_to_bytes


class PoolState(BaseModel):
    """Pool reserves (in token order) and the curve parameter blob."""

    reserve0: Uint256 = Field(description="Reserve of token0 in native decimals")
    reserve1: Uint256 = Field(description="Reserve of token1 in native decimals")
    data: Bytes = Field(description="Curve parameter blob as 0x-prefixed hex")

    model_config = {"populate_by_name": True}

    @property
    def reserves(self) -> tuple[int, int]:
        return int(self.reserve0), int(self.reserve1)

    @property
    def data_bytes(self) -> bytes:
        return hex_to_bytes(self.data)


class DirectedPoolState(PoolState):
    """Pool state plus the token being sold."""

    token_in_index: int = Field(
        alias="tokenInIndex",
        ge=0,
        le=1,
        description="0 if token0 is sold, 1 if token1 is sold",
    )


class SwapRequest(DirectedPoolState):
    """Fields shared by both swap directions."""

    swap_fee: int = Field(
        alias="swapFee",
        ge=0,
        le=MAX_SWAP_FEE,
        description="Fee in parts per thousand (3 = 0.3%)",
    )


class AmountOutRequest(SwapRequest):
    """Quote the output for an exact input (sell order)."""

    amount_in: Uint256 = Field(alias="amountIn", description="Exact input amount")


class AmountInRequest(SwapRequest):
    """Quote the input required for an exact output (buy order)."""

    amount_out: Uint256 = Field(alias="amountOut", description="Exact output amount")


class PriceRequest(DirectedPoolState):
    """Spot price request for a weighted pool."""


class LiquidityRequest(PoolState):
    """Liquidity valuation request."""


class DecodeRequest(BaseModel):
    """Decode a curve parameter blob."""

    data: Bytes = Field(description="Curve parameter blob as 0x-prefixed hex")

    @property
    def data_bytes(self) -> bytes:
        return hex_to_bytes(self.data)


class AmountOutResponse(BaseModel):
    amount_out: Uint256 = Field(alias="amountOut")

    model_config = {"populate_by_name": True}


class AmountInResponse(BaseModel):
    amount_in: Uint256 = Field(alias="amountIn")

    model_config = {"populate_by_name": True}


class PriceResponse(BaseModel):
    """Spot price of the input token in raw output-token units."""

    price: Uint256 = Field(description="Price as Q104 fixed point")
    precision: int = Field(default=PRICE_PRECISION, description="Binary fixed-point precision")


class LiquidityResponse(BaseModel):
    liquidity: Uint256 = Field(description="Liquidity in 18-decimal units")


class DecodeResponse(BaseModel):
    """Decoded parameters. Only the fields of the requested curve are set."""

    decimals0: int
    decimals1: int
    amplifier: int | None = None
    weight0: int | None = None
    weight1: int | None = None
