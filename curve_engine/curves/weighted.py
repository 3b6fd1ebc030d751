"""Weighted (constant-mean) curve.

Two-token weighted geometric-mean curve. Swaps are scale invariant per token,
so they run on raw reserves; liquidity is reported in canonical 18-decimal
units. Parameters are immutable once a pool adopts them.
"""

from __future__ import annotations

import structlog

from curve_engine.config import DEFAULT_CURVE_CONFIG, CurveConfig
from curve_engine.errors import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvalidData,
    RatioExceeded,
)
from curve_engine.safe_int import as_uint256

from .base import check_result, check_token_index
from .codec import WeightedParams, decode_weighted_data
from .scaling import add_swap_fee, check_swap_fee, subtract_swap_fee, to_canonical
from .weighted_math import calc_in_given_out, calc_liquidity, calc_out_given_in, calc_spot_price

logger = structlog.get_logger()


class WeightedCurve:
    """Constant-mean curve with two 8-bit weights.

    The fee is charged on the input before the trade is priced.
    """

    name = "weighted"

    def __init__(self, config: CurveConfig | None = None) -> None:
        self.config = config or DEFAULT_CURVE_CONFIG

    def decode_data(self, data: bytes) -> WeightedParams:
        """Decode (decimals0, decimals1, weight0, weight1) from a parameter blob.

        Raises:
            InvalidData: If decimals exceed 18 or a weight is zero
        """
        return decode_weighted_data(data)

    def is_valid_data(self, data: bytes) -> bool:
        """Non-raising form of decode_data."""
        try:
            decode_weighted_data(data)
        except InvalidData as err:
            logger.debug("weighted_invalid_data", reason=str(err))
            return False
        return True

    def can_update_data(self, old_data: bytes, new_data: bytes) -> bool:
        """Weighted parameters can never be migrated in place."""
        return False

    def _prepare(
        self,
        reserve0: int,
        reserve1: int,
        data: bytes,
        token_in_index: int,
    ) -> tuple[int, int, int, int]:
        """Validate reserves and return (balance_in, weight_in, balance_out, weight_out)."""
        as_uint256(reserve0, "reserve0")
        as_uint256(reserve1, "reserve1")
        if reserve0 == 0 or reserve1 == 0:
            raise InsufficientLiquidity("Both reserves must be positive")
        check_token_index(token_in_index)

        params = self.decode_data(data)
        weight_in, weight_out = params.weights_in_out(token_in_index)
        if token_in_index == 0:
            return reserve0, weight_in, reserve1, weight_out
        return reserve1, weight_in, reserve0, weight_out

    def compute_amount_out(
        self,
        amount_in: int,
        reserve0: int,
        reserve1: int,
        data: bytes,
        swap_fee: int,
        token_in_index: int,
    ) -> int:
        """Calculate output amount for a given input (sell order).

        Raises:
            InvalidSwapFee: If swap_fee exceeds the configured maximum
            InsufficientInputAmount: If amount_in is zero
            InsufficientLiquidity: If a reserve is zero
            RatioExceeded: If amount_in exceeds the allowed share of reserve_in
            InvalidData: If data is invalid
        """
        check_swap_fee(swap_fee, self.config.max_swap_fee)
        if as_uint256(amount_in, "amount_in") == 0:
            raise InsufficientInputAmount("amount_in must be positive")
        balance_in, weight_in, balance_out, weight_out = self._prepare(
            reserve0, reserve1, data, token_in_index
        )

        if amount_in > self.config.max_amount_in(balance_in):
            logger.debug(
                "weighted_ratio_exceeded",
                amount_in=amount_in,
                balance_in=balance_in,
                side="input",
            )
            raise RatioExceeded(f"Input {amount_in} exceeds allowed share of balance {balance_in}")

        amount_in_net = subtract_swap_fee(amount_in, swap_fee)
        return calc_out_given_in(balance_in, weight_in, balance_out, weight_out, amount_in_net)

    def compute_amount_in(
        self,
        amount_out: int,
        reserve0: int,
        reserve1: int,
        data: bytes,
        swap_fee: int,
        token_in_index: int,
    ) -> int:
        """Calculate input amount for a given output (buy order).

        Raises:
            InvalidSwapFee: If swap_fee exceeds the configured maximum
            InsufficientOutputAmount: If amount_out is zero
            InsufficientLiquidity: If a reserve is zero
            RatioExceeded: If amount_out exceeds the allowed share of reserve_out
            InvalidData: If data is invalid
        """
        check_swap_fee(swap_fee, self.config.max_swap_fee)
        if as_uint256(amount_out, "amount_out") == 0:
            raise InsufficientOutputAmount("amount_out must be positive")
        balance_in, weight_in, balance_out, weight_out = self._prepare(
            reserve0, reserve1, data, token_in_index
        )

        if amount_out > self.config.max_amount_out(balance_out):
            logger.debug(
                "weighted_ratio_exceeded",
                amount_out=amount_out,
                balance_out=balance_out,
                side="output",
            )
            raise RatioExceeded(
                f"Output {amount_out} exceeds allowed share of balance {balance_out}"
            )

        amount_in_net = calc_in_given_out(
            balance_in, weight_in, balance_out, weight_out, amount_out
        )
        return check_result(add_swap_fee(amount_in_net, swap_fee), "amount_in")

    def compute_price(
        self,
        reserve0: int,
        reserve1: int,
        data: bytes,
        token_in_index: int,
    ) -> int:
        """Spot price of the input token in raw output-token units, as Q104.

        Raises:
            InsufficientLiquidity: If a reserve is zero
            InvalidData: If data is invalid
            ResultOverflow: If the price exceeds a uint256
        """
        balance_in, weight_in, balance_out, weight_out = self._prepare(
            reserve0, reserve1, data, token_in_index
        )
        price = calc_spot_price(balance_in, weight_in, balance_out, weight_out)
        return check_result(price, "price")

    def compute_liquidity(self, reserve0: int, reserve1: int, data: bytes) -> int:
        """Weighted geometric mean of the canonical reserves.

        Raises:
            InvalidData: If data is invalid
            ResultOverflow: If the mean exceeds a uint256
        """
        as_uint256(reserve0, "reserve0")
        as_uint256(reserve1, "reserve1")
        params = self.decode_data(data)
        liquidity = calc_liquidity(
            to_canonical(reserve0, params.decimals0),
            params.weight0,
            to_canonical(reserve1, params.decimals1),
            params.weight1,
        )
        return check_result(liquidity, "liquidity")
