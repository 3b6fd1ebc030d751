"""Tests for curve configuration."""

import dataclasses

import pytest

from curve_engine.config import DEFAULT_CURVE_CONFIG, CurveConfig


class TestCurveConfig:
    def test_defaults(self):
        assert DEFAULT_CURVE_CONFIG.max_iterations == 255
        assert DEFAULT_CURVE_CONFIG.max_swap_fee == 100

    def test_ratio_limits_are_thirty_percent(self):
        assert DEFAULT_CURVE_CONFIG.max_amount_in(10**18) == 3 * 10**17
        assert DEFAULT_CURVE_CONFIG.max_amount_out(10) == 3

    def test_custom_ratio(self):
        config = CurveConfig(max_in_ratio=5 * 10**17, max_out_ratio=10**18)
        assert config.max_amount_in(100) == 50
        assert config.max_amount_out(100) == 100

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CURVE_CONFIG.max_iterations = 1  # type: ignore[misc]
