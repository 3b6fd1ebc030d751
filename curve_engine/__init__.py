"""AMM curve math engine - Hybrid (StableSwap) and Weighted curves."""

from curve_engine.curves import Curve, HybridCurve, WeightedCurve
from curve_engine.errors import (
    ConvergenceFailure,
    CurveError,
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidData,
    InvalidSwapFee,
    RatioExceeded,
    ResultOverflow,
)

__version__ = "0.1.0"
__all__ = [
    "Curve",
    "HybridCurve",
    "WeightedCurve",
    "CurveError",
    "InvalidData",
    "InvalidSwapFee",
    "InsufficientInputAmount",
    "InsufficientOutputAmount",
    "InsufficientLiquidity",
    "RatioExceeded",
    "ConvergenceFailure",
    "ResultOverflow",
    "__version__",
]
