"""Hybrid (StableSwap-style) curve.

Two tokens of independent decimal precision traded along the StableSwap
invariant. Reserves and amounts are rescaled to 18 decimals, the invariant
is solved with Newton-Raphson, and results are rescaled back to the token's
native precision, always rounding against the trader.
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
from .codec import HybridParams, decode_hybrid_data
from .scaling import (
    add_swap_fee,
    check_swap_fee,
    from_canonical,
    from_canonical_up,
    subtract_swap_fee,
    to_canonical,
)
from .stable_math import amp_times_n, compute_invariant, get_y

logger = structlog.get_logger()


class HybridCurve:
    """StableSwap invariant curve for two tokens.

    The fee is charged on the gross output: the trade is solved on the full
    input, then the fee is taken from what the pool pays out.
    """

    name = "hybrid"

    def __init__(self, config: CurveConfig | None = None) -> None:
        self.config = config or DEFAULT_CURVE_CONFIG

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def decode_data(self, data: bytes) -> HybridParams:
        """Decode (decimals0, decimals1, amplifier) from a parameter blob.

        Raises:
            InvalidData: If decimals exceed 18 or the amplifier is below 100
        """
        return decode_hybrid_data(data)

    def is_valid_data(self, data: bytes) -> bool:
        """Non-raising form of decode_data."""
        try:
            decode_hybrid_data(data)
        except InvalidData as err:
            logger.debug("hybrid_invalid_data", reason=str(err))
            return False
        return True

    def can_update_data(self, old_data: bytes, new_data: bytes) -> bool:
        """Only the amplifier may change once a pool has adopted its parameters."""
        if not (self.is_valid_data(old_data) and self.is_valid_data(new_data)):
            return False
        old = decode_hybrid_data(old_data)
        new = decode_hybrid_data(new_data)
        return old.decimals0 == new.decimals0 and old.decimals1 == new.decimals1

    # -------------------------------------------------------------------------
    # Swaps
    # -------------------------------------------------------------------------

    def _check_reserves(self, reserve0: int, reserve1: int) -> None:
        as_uint256(reserve0, "reserve0")
        as_uint256(reserve1, "reserve1")
        if reserve0 == 0 or reserve1 == 0:
            raise InsufficientLiquidity("Both reserves must be positive")

    def _normalized_reserves(
        self,
        reserve0: int,
        reserve1: int,
        params: HybridParams,
        token_in_index: int,
    ) -> tuple[int, int]:
        """Return canonical (reserve_in, reserve_out) for a swap direction."""
        xp0 = to_canonical(reserve0, params.decimals0)
        xp1 = to_canonical(reserve1, params.decimals1)
        if token_in_index == 0:
            return xp0, xp1
        return xp1, xp0

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

        Algorithm:
            1. D = invariant of the current canonical reserves
            2. y = balance_out that preserves D after adding amount_in
            3. amount_out = balance_out - y - 1 (1 wei rounding protection)
            4. Take the fee from amount_out, then scale down (rounding down)

        Raises:
            InvalidSwapFee: If swap_fee exceeds the configured maximum
            InsufficientInputAmount: If amount_in is zero
            InsufficientLiquidity: If a reserve is zero
            RatioExceeded: If amount_in exceeds the allowed share of reserve_in
            InvalidData: If data is invalid
            ConvergenceFailure: If the solver does not converge
        """
        check_swap_fee(swap_fee, self.config.max_swap_fee)
        if as_uint256(amount_in, "amount_in") == 0:
            raise InsufficientInputAmount("amount_in must be positive")
        self._check_reserves(reserve0, reserve1)
        check_token_index(token_in_index)

        params = self.decode_data(data)
        decimals_in, decimals_out = params.decimals_in_out(token_in_index)
        balance_in, balance_out = self._normalized_reserves(
            reserve0, reserve1, params, token_in_index
        )
        scaled_in = to_canonical(amount_in, decimals_in)

        if scaled_in > self.config.max_amount_in(balance_in):
            logger.debug(
                "hybrid_ratio_exceeded",
                scaled_in=scaled_in,
                balance_in=balance_in,
                side="input",
            )
            raise RatioExceeded(f"Input {scaled_in} exceeds allowed share of balance {balance_in}")

        ann = amp_times_n(params.amplifier)
        invariant = compute_invariant(
            balance_in, balance_out, ann, max_iterations=self.config.max_iterations
        )
        new_balance_out = get_y(
            balance_in + scaled_in, invariant, ann, max_iterations=self.config.max_iterations
        )

        # Dust inputs can round to nothing
        if new_balance_out + 1 >= balance_out:
            return 0

        scaled_out = balance_out - new_balance_out - 1
        scaled_out = subtract_swap_fee(scaled_out, swap_fee)
        return from_canonical(scaled_out, decimals_out)

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

        Algorithm:
            1. Gross the requested output up by the fee (rounding up)
            2. D = invariant of the current canonical reserves
            3. x = balance_in that preserves D after removing the gross output
               plus the 1 wei compute_amount_out holds back
            4. amount_in = x - balance_in + 1, scaled down rounding up

        Raises:
            InvalidSwapFee: If swap_fee exceeds the configured maximum
            InsufficientOutputAmount: If amount_out is zero
            InsufficientLiquidity: If a reserve is zero or the output would
                drain the pool
            RatioExceeded: If amount_out exceeds the allowed share of reserve_out
            InvalidData: If data is invalid
            ConvergenceFailure: If the solver does not converge
        """
        check_swap_fee(swap_fee, self.config.max_swap_fee)
        if as_uint256(amount_out, "amount_out") == 0:
            raise InsufficientOutputAmount("amount_out must be positive")
        self._check_reserves(reserve0, reserve1)
        check_token_index(token_in_index)

        params = self.decode_data(data)
        decimals_in, decimals_out = params.decimals_in_out(token_in_index)
        balance_in, balance_out = self._normalized_reserves(
            reserve0, reserve1, params, token_in_index
        )
        scaled_out = add_swap_fee(to_canonical(amount_out, decimals_out), swap_fee)

        if scaled_out > self.config.max_amount_out(balance_out):
            logger.debug(
                "hybrid_ratio_exceeded",
                scaled_out=scaled_out,
                balance_out=balance_out,
                side="output",
            )
            raise RatioExceeded(
                f"Output {scaled_out} exceeds allowed share of balance {balance_out}"
            )
        if scaled_out + 1 >= balance_out:
            raise InsufficientLiquidity("amount_out must be less than balance_out")

        ann = amp_times_n(params.amplifier)
        invariant = compute_invariant(
            balance_in, balance_out, ann, max_iterations=self.config.max_iterations
        )
        new_balance_out = balance_out - scaled_out - 1
        new_balance_in = get_y(
            new_balance_out, invariant, ann, max_iterations=self.config.max_iterations
        )

        scaled_in = max(new_balance_in - balance_in, 0) + 1
        return check_result(from_canonical_up(scaled_in, decimals_in), "amount_in")

    # -------------------------------------------------------------------------
    # Liquidity
    # -------------------------------------------------------------------------

    def compute_liquidity(self, reserve0: int, reserve1: int, data: bytes) -> int:
        """Return the invariant D of the pool in canonical 18-decimal units.

        A balanced pool is worth exactly the sum of its canonical reserves.

        Raises:
            InvalidData: If data is invalid
            InsufficientLiquidity: If exactly one reserve is zero
            ConvergenceFailure: If the solver does not converge
            ResultOverflow: If the canonical invariant exceeds a uint256
        """
        as_uint256(reserve0, "reserve0")
        as_uint256(reserve1, "reserve1")
        params = self.decode_data(data)
        liquidity = compute_invariant(
            to_canonical(reserve0, params.decimals0),
            to_canonical(reserve1, params.decimals1),
            amp_times_n(params.amplifier),
            max_iterations=self.config.max_iterations,
        )
        return check_result(liquidity, "liquidity")
