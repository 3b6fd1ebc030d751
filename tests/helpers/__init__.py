"""Test helpers module for shared test utilities.

- constants: Common amounts
- factories: Curve parameter blob factories
"""

from tests.helpers.constants import ONE_6, ONE_18
from tests.helpers.factories import hybrid_data, weighted_data

__all__ = [
    # Constants
    "ONE_18",
    "ONE_6",
    # Factories
    "hybrid_data",
    "weighted_data",
]
