"""Mathematical utilities for the curve engine.

This package provides the fixed-point primitives used by the curves:
- Q127 natural logarithm, exponential and power functions
"""

from curve_engine.math.fixed_point import ONE, exp, ln, pow_down, pow_up

__all__ = ["ONE", "exp", "ln", "pow_down", "pow_up"]
