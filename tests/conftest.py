"""Pytest configuration and fixtures."""

import pytest

from curve_engine.curves import HybridCurve, WeightedCurve


@pytest.fixture
def hybrid() -> HybridCurve:
    """Hybrid curve with the default config."""
    return HybridCurve()


@pytest.fixture
def weighted() -> WeightedCurve:
    """Weighted curve with the default config."""
    return WeightedCurve()
