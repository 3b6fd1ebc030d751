"""Unit tests for the curve engine HTTP API."""

import pytest
from fastapi.testclient import TestClient

from curve_engine.api.endpoints import get_curves
from curve_engine.api.main import MAX_REQUEST_SIZE, app
from curve_engine.config import CurveConfig
from curve_engine.curves import HybridCurve, WeightedCurve
from curve_engine.curves.codec import encode_hybrid_data, encode_weighted_data

ONE_18 = 10**18
HYBRID_DATA = "0x" + encode_hybrid_data(18, 18, 100).hex()
WEIGHTED_DATA = "0x" + encode_weighted_data(18, 18, 20, 80).hex()


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


def swap_payload(amount_field: str, amount: int, data: str = HYBRID_DATA, **overrides) -> dict:
    payload = {
        amount_field: str(amount),
        "reserve0": str(ONE_18),
        "reserve1": str(ONE_18),
        "data": data,
        "swapFee": 3,
        "tokenInIndex": 0,
    }
    payload.update(overrides)
    return payload


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestQuotes:
    """Tests for the quote endpoints."""

    def test_hybrid_amount_out(self, client):
        response = client.post("/hybrid/amount-out", json=swap_payload("amountIn", 10**17))
        assert response.status_code == 200
        assert response.json() == {"amountOut": "94941617877778399"}

    def test_hybrid_amount_in(self, client):
        response = client.post(
            "/hybrid/amount-in", json=swap_payload("amountOut", 94941617877778399)
        )
        assert response.status_code == 200
        assert response.json() == {"amountIn": str(10**17 + 1)}

    def test_weighted_amount_out(self, client):
        response = client.post(
            "/weighted/amount-out",
            json=swap_payload("amountIn", 10**17, data=WEIGHTED_DATA, swapFee=0),
        )
        assert response.status_code == 200
        assert response.json() == {"amountOut": "23545910323679690"}

    def test_hybrid_liquidity(self, client):
        payload = {"reserve0": str(ONE_18), "reserve1": str(2 * ONE_18), "data": HYBRID_DATA}
        response = client.post("/hybrid/liquidity", json=payload)
        assert response.status_code == 200
        assert response.json() == {"liquidity": "2912328492271816922"}

    def test_weighted_price(self, client):
        payload = {
            "reserve0": str(ONE_18),
            "reserve1": str(ONE_18),
            "data": WEIGHTED_DATA,
            "tokenInIndex": 1,
        }
        response = client.post("/weighted/price", json=payload)
        assert response.status_code == 200
        assert response.json() == {"price": str(4 << 104), "precision": 104}

    def test_decode_hybrid(self, client):
        response = client.post("/hybrid/decode", json={"data": HYBRID_DATA})
        assert response.status_code == 200
        assert response.json() == {"decimals0": 18, "decimals1": 18, "amplifier": 100}

    def test_decode_weighted(self, client):
        response = client.post("/weighted/decode", json={"data": WEIGHTED_DATA})
        assert response.status_code == 200
        assert response.json() == {"decimals0": 18, "decimals1": 18, "weight0": 20, "weight1": 80}

    def test_integer_amounts_are_accepted(self, client):
        payload = swap_payload("amountIn", 10**17)
        payload["amountIn"] = 10**17
        response = client.post("/hybrid/amount-out", json=payload)
        assert response.status_code == 200


class TestErrorHandling:
    """Tests for error mapping."""

    def test_unknown_curve(self, client):
        response = client.post("/linear/amount-out", json=swap_payload("amountIn", 10**17))
        assert response.status_code == 404

    def test_curve_error_is_400(self, client):
        response = client.post(
            "/hybrid/amount-out", json=swap_payload("amountIn", 4 * 10**17)
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "RatioExceeded"
        assert body["detail"]

    def test_invalid_data_is_400(self, client):
        bad = "0x" + encode_hybrid_data(18, 18, 99).hex()
        response = client.post("/hybrid/decode", json={"data": bad})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidData"

    def test_zero_amount_is_400(self, client):
        response = client.post("/hybrid/amount-out", json=swap_payload("amountIn", 0))
        assert response.status_code == 400
        assert response.json()["error"] == "InsufficientInputAmount"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("amountIn", "-1"),
            ("amountIn", "1.5"),
            ("amountIn", str(2**256)),
            ("reserve0", "abc"),
            ("data", "0x123"),
            ("data", "1212"),
            ("swapFee", 101),
            ("tokenInIndex", 2),
        ],
    )
    def test_schema_violations_are_422(self, client, field: str, value):
        payload = swap_payload("amountIn", 10**17, **{field: value})
        response = client.post("/hybrid/amount-out", json=payload)
        assert response.status_code == 422

    def test_request_too_large(self, client):
        response = client.post(
            "/hybrid/decode",
            json={"data": HYBRID_DATA},
            headers={"Content-Length": str(MAX_REQUEST_SIZE + 1)},
        )
        assert response.status_code == 413

    def test_malformed_content_length(self, client):
        response = client.post(
            "/hybrid/decode",
            json={"data": HYBRID_DATA},
            headers={"Content-Length": "abc"},
        )
        assert response.status_code == 400

    def test_oversized_price_is_400(self, client):
        payload = {
            "reserve0": "1",
            "reserve1": str(2**255),
            "data": "0x" + encode_weighted_data(18, 18, 1, 255).hex(),
            "tokenInIndex": 0,
        }
        response = client.post("/weighted/price", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "ResultOverflow"


class TestDependencyOverride:
    def test_custom_config_is_used(self, client):
        """Curves injected through get_curves replace the defaults."""
        strict = CurveConfig(max_in_ratio=10**16)
        app.dependency_overrides[get_curves] = lambda: {
            "hybrid": HybridCurve(strict),
            "weighted": WeightedCurve(strict),
        }
        response = client.post("/hybrid/amount-out", json=swap_payload("amountIn", 10**17))
        assert response.status_code == 400
        assert response.json()["error"] == "RatioExceeded"

    def test_price_requires_weighted_curve(self, client):
        app.dependency_overrides[get_curves] = lambda: {"hybrid": HybridCurve()}
        payload = {
            "reserve0": str(ONE_18),
            "reserve1": str(ONE_18),
            "data": WEIGHTED_DATA,
            "tokenInIndex": 0,
        }
        response = client.post("/weighted/price", json=payload)
        assert response.status_code == 404
