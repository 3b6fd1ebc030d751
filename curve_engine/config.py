"""Curve configuration."""

from dataclasses import dataclass

from curve_engine.constants import MAX_SWAP_FEE

# Ratio limits are fractions scaled by 1e18
RATIO_DENOMINATOR = 10**18


@dataclass(frozen=True)
class CurveConfig:
    """Tunable bounds shared by the curve implementations.

    Curves take a config at construction so tests can tighten or relax the
    limits without touching module constants.

    Attributes:
        max_iterations: Newton-Raphson iteration cap for the Hybrid solver.
            Hitting the cap raises ConvergenceFailure.
        max_in_ratio: Largest input accepted, as a fraction of the input
            reserve scaled by RATIO_DENOMINATOR (default: 0.3)
        max_out_ratio: Largest output that can be requested, as a fraction of
            the output reserve scaled by RATIO_DENOMINATOR (default: 0.3)
        max_swap_fee: Largest fee accepted, in parts per FEE_DENOMINATOR
    """

    max_iterations: int = 255
    max_in_ratio: int = 3 * 10**17
    max_out_ratio: int = 3 * 10**17
    max_swap_fee: int = MAX_SWAP_FEE

    def max_amount_in(self, reserve_in: int) -> int:
        """Largest input allowed against reserve_in (rounded down)."""
        return reserve_in * self.max_in_ratio // RATIO_DENOMINATOR

    def max_amount_out(self, reserve_out: int) -> int:
        """Largest output allowed against reserve_out (rounded down)."""
        return reserve_out * self.max_out_ratio // RATIO_DENOMINATOR


# Default configuration instance
DEFAULT_CURVE_CONFIG = CurveConfig()
