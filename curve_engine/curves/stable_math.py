"""Hybrid (StableSwap) curve math for two-token pools.

Core Newton-Raphson solvers for the StableSwap invariant

    Ann * (x + y) + D = Ann * D + D^3 / (4 * x * y)

All balances are in the canonical 18-decimal domain. The amplifier carries
AMP_PRECISION, so callers pass amp_times_n = 2 * A with A as stored in the
parameter blob.

IMPORTANT: All calculations use SafeInt so that an unexpected negative
intermediate or zero divisor raises instead of producing a bogus quote.
"""

from curve_engine.constants import AMP_PRECISION
from curve_engine.errors import ConvergenceFailure, InsufficientLiquidity
from curve_engine.safe_int import S, SafeInt

N_COINS = 2

# Maximum iterations for Newton-Raphson convergence
_STABLE_MAX_ITERATIONS = 255


def amp_times_n(amplifier: int) -> int:
    """Return A * n for a two-token pool (still scaled by AMP_PRECISION)."""
    return amplifier * N_COINS


def _within_one(a: SafeInt, b: SafeInt) -> bool:
    return a.abs_diff(b) <= 1


def compute_invariant(
    balance0: int,
    balance1: int,
    amp_times_total: int,
    max_iterations: int = _STABLE_MAX_ITERATIONS,
) -> int:
    """Calculate the StableSwap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = balance0 + balance1
        2. Iterate until |D_new - D_old| <= 1, or return the lower value
           once a floored step moves back up
        3. Give up after max_iterations

    Args:
        balance0: Canonical balance of token0
        balance1: Canonical balance of token1
        amp_times_total: A * n, scaled by AMP_PRECISION
        max_iterations: Iteration cap

    Returns:
        The invariant D (0 for an empty pool)

    Raises:
        InsufficientLiquidity: If exactly one balance is zero
        ConvergenceFailure: If iteration doesn't converge
    """
    sum_balances = S(balance0) + balance1
    if sum_balances == 0:
        return 0
    if balance0 == 0 or balance1 == 0:
        raise InsufficientLiquidity("Invariant is undefined with a single empty reserve")

    x0 = S(balance0)
    x1 = S(balance1)
    ann = S(amp_times_total)
    d = sum_balances

    for _ in range(max_iterations):
        # d_p = D^3 / (n^n * x0 * x1)
        d_p = (d * d // x0) * d // x1 // 4
        d_prev = d

        # D = (Ann * S + n * d_p) * D / ((Ann - 1) * D + (n + 1) * d_p)
        numerator = (ann * sum_balances // AMP_PRECISION + d_p * N_COINS) * d
        denominator = (ann - AMP_PRECISION) * d // AMP_PRECISION + d_p * (N_COINS + 1)
        d = numerator // denominator

        if _within_one(d, d_prev):
            return d.value
        # Iteration descends from above; an upward step means floor
        # rounding has started cycling around the root
        if d > d_prev:
            return d_prev.value

    raise ConvergenceFailure(f"Stable invariant did not converge after {max_iterations} iterations")


def get_y(
    balance_in: int,
    invariant: int,
    amp_times_total: int,
    max_iterations: int = _STABLE_MAX_ITERATIONS,
) -> int:
    """Solve for the other balance given one balance and the invariant.

    Newton-Raphson on y^2 + (b - D) * y = c, with
        c = D^3 / (n^n * Ann * x)
        b = x + D / Ann

    y = D may start below the root when the pool is imbalanced; after the
    first step the iteration approaches the root from above.

    Args:
        balance_in: The known canonical balance
        invariant: The invariant D to preserve
        amp_times_total: A * n, scaled by AMP_PRECISION
        max_iterations: Iteration cap

    Returns:
        The balance of the other token

    Raises:
        InsufficientLiquidity: If balance_in is zero
        ConvergenceFailure: If iteration doesn't converge
    """
    if balance_in == 0:
        raise InsufficientLiquidity("Cannot solve the curve against an empty reserve")

    x = S(balance_in)
    d = S(invariant)
    ann = S(amp_times_total)

    c = d * d // (x * N_COINS)
    c = c * d * AMP_PRECISION // (ann * N_COINS)
    b = x + d * AMP_PRECISION // ann

    y = d
    for step in range(max_iterations):
        y_prev = y

        # y = (y^2 + c) / (2y + b - D)
        shifted = y * 2 + b
        if shifted <= d:
            raise ConvergenceFailure("Denominator became non-positive")
        y = (y * y + c) // (shifted - d)

        if _within_one(y, y_prev):
            return y.value
        # Past the first step y only falls; a later rise is floor rounding
        # cycling around the root
        if step > 0 and y > y_prev:
            return y.value

    raise ConvergenceFailure(f"Stable get_y did not converge after {max_iterations} iterations")
