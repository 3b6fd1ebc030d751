"""Curve implementations.

Each curve is an independent class satisfying the Curve protocol. Pools
choose a curve by name; nothing here dispatches between them.
"""

from curve_engine.curves.base import Curve, check_result, check_token_index
from curve_engine.curves.codec import (
    HybridParams,
    WeightedParams,
    decode_hybrid_data,
    decode_weighted_data,
    encode_hybrid_data,
    encode_weighted_data,
)
from curve_engine.curves.hybrid import HybridCurve
from curve_engine.curves.weighted import WeightedCurve

__all__ = [
    # Interface
    "Curve",
    "check_result",
    "check_token_index",
    # Implementations
    "HybridCurve",
    "WeightedCurve",
    # Parameters
    "HybridParams",
    "WeightedParams",
    "decode_hybrid_data",
    "decode_weighted_data",
    "encode_hybrid_data",
    "encode_weighted_data",
]
