"""Factory functions for curve parameter blobs.

Usage:
    from tests.helpers import hybrid_data, weighted_data

    data = hybrid_data(amplifier=5000, decimals1=6)
"""

from curve_engine.curves.codec import encode_hybrid_data, encode_weighted_data


def hybrid_data(amplifier: int, decimals0: int = 18, decimals1: int = 18) -> bytes:
    """Encode a Hybrid blob. Out-of-range values are kept so tests can exercise decoding."""
    return encode_hybrid_data(decimals0, decimals1, amplifier)


def weighted_data(weight0: int, weight1: int, decimals0: int = 18, decimals1: int = 18) -> bytes:
    """Encode a Weighted blob (weights must fit one byte)."""
    return encode_weighted_data(decimals0, decimals1, weight0, weight1)
