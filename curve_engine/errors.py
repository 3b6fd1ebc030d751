"""Curve engine error classes.

Every error aborts the call before any result is produced. The names mirror
the revert reasons a pool contract surfaces to its callers.
"""


class CurveError(Exception):
    """Base error for curve operations."""

    pass


class InvalidData(CurveError):
    """Parameter blob is malformed or a field is out of range."""

    pass


class InvalidSwapFee(CurveError):
    """Swap fee exceeds MAX_SWAP_FEE."""

    pass


class InsufficientInputAmount(CurveError):
    """Input amount must be positive."""

    pass


class InsufficientOutputAmount(CurveError):
    """Requested output amount must be positive."""

    pass


class InsufficientLiquidity(CurveError):
    """A reserve is zero, or the trade would drain the pool."""

    pass


class RatioExceeded(CurveError):
    """Trade size exceeds the allowed fraction of the reserve."""

    pass


class ConvergenceFailure(CurveError):
    """Newton-Raphson iteration hit its iteration cap without converging."""

    pass


class ResultOverflow(CurveError):
    """Computed quote does not fit in a uint256 word."""

    pass
