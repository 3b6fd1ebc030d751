"""API endpoints for the curve engine."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from curve_engine.curves import Curve, HybridCurve, WeightedCurve
from curve_engine.curves.codec import HybridParams
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

logger = structlog.get_logger()

router = APIRouter()

# Curves are stateless, so one instance per kind serves every request
_DEFAULT_CURVES: dict[str, Curve] = {
    HybridCurve.name: HybridCurve(),
    WeightedCurve.name: WeightedCurve(),
}


def get_curves() -> dict[str, Curve]:
    """Dependency provider for the curve registry.

    Override this in tests to inject curves with a custom config:
        app.dependency_overrides[get_curves] = lambda: {"hybrid": HybridCurve(config)}

    Returns:
        Mapping of curve name to curve instance.
    """
    return _DEFAULT_CURVES


def get_curve(curve: str, curves: dict[str, Curve] = Depends(get_curves)) -> Curve:
    """Resolve the {curve} path parameter.

    Raises:
        HTTPException: 404 if no curve is registered under that name
    """
    instance = curves.get(curve)
    if instance is None:
        logger.warning("unknown_curve", curve=curve, known_curves=sorted(curves))
        raise HTTPException(status_code=404, detail=f"Unknown curve: {curve}")
    return instance


async def curve_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map curve errors to 400 responses naming the error class."""
    logger.info(
        "curve_error",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=400,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@router.post("/{curve}/amount-out")
def amount_out(
    request: AmountOutRequest, curve_instance: Curve = Depends(get_curve)
) -> AmountOutResponse:
    """Quote the output amount for an exact input.

    Error Handling:
        - Invalid request schema: Returns 422 Validation Error (Pydantic)
        - Unknown curve: Returns 404
        - Curve error (bad data, ratio, liquidity...): Returns 400
    """
    reserve0, reserve1 = request.reserves
    result = curve_instance.compute_amount_out(
        int(request.amount_in),
        reserve0,
        reserve1,
        request.data_bytes,
        request.swap_fee,
        request.token_in_index,
    )
    logger.info(
        "quoted_amount_out",
        curve=getattr(curve_instance, "name", None),
        amount_in=request.amount_in,
        amount_out=result,
        token_in_index=request.token_in_index,
    )
    return AmountOutResponse(amount_out=str(result))


@router.post("/{curve}/amount-in")
def amount_in(
    request: AmountInRequest, curve_instance: Curve = Depends(get_curve)
) -> AmountInResponse:
    """Quote the input amount required for an exact output."""
    reserve0, reserve1 = request.reserves
    result = curve_instance.compute_amount_in(
        int(request.amount_out),
        reserve0,
        reserve1,
        request.data_bytes,
        request.swap_fee,
        request.token_in_index,
    )
    logger.info(
        "quoted_amount_in",
        curve=getattr(curve_instance, "name", None),
        amount_out=request.amount_out,
        amount_in=result,
        token_in_index=request.token_in_index,
    )
    return AmountInResponse(amount_in=str(result))


@router.post("/weighted/price")
def weighted_price(
    request: PriceRequest, curves: dict[str, Curve] = Depends(get_curves)
) -> PriceResponse:
    """Spot price of a weighted pool, as Q104 fixed point."""
    curve = curves.get(WeightedCurve.name)
    if not isinstance(curve, WeightedCurve):
        raise HTTPException(status_code=404, detail="Weighted curve is not available")
    reserve0, reserve1 = request.reserves
    price = curve.compute_price(reserve0, reserve1, request.data_bytes, request.token_in_index)
    return PriceResponse(price=str(price))


@router.post("/{curve}/liquidity")
def liquidity(
    request: LiquidityRequest, curve_instance: Curve = Depends(get_curve)
) -> LiquidityResponse:
    """Value a pool's liquidity in 18-decimal units."""
    reserve0, reserve1 = request.reserves
    result = curve_instance.compute_liquidity(reserve0, reserve1, request.data_bytes)
    return LiquidityResponse(liquidity=str(result))


@router.post("/{curve}/decode", response_model_exclude_none=True)
def decode(
    request: DecodeRequest, curve_instance: Curve = Depends(get_curve)
) -> DecodeResponse:
    """Decode and validate a curve parameter blob."""
    params = curve_instance.decode_data(request.data_bytes)
    if isinstance(params, HybridParams):
        return DecodeResponse(
            decimals0=params.decimals0,
            decimals1=params.decimals1,
            amplifier=params.amplifier,
        )
    return DecodeResponse(
        decimals0=params.decimals0,
        decimals1=params.decimals1,
        weight0=params.weight0,
        weight1=params.weight1,
    )
