"""Pydantic models for the curve service."""

from curve_engine.models.quote import (
    AmountInRequest,
    AmountInResponse,
    AmountOutRequest,
    AmountOutResponse,
    DecodeRequest,
    DecodeResponse,
    LiquidityRequest,
    LiquidityResponse,
    PriceRequest,
    PriceResponse,
)
from curve_engine.models.types import Bytes, Uint256

__all__ = [
    # Types
    "Bytes",
    "Uint256",
    # Requests
    "AmountOutRequest",
    "AmountInRequest",
    "PriceRequest",
    "LiquidityRequest",
    "DecodeRequest",
    # Responses
    "AmountOutResponse",
    "AmountInResponse",
    "PriceResponse",
    "LiquidityResponse",
    "DecodeResponse",
]
