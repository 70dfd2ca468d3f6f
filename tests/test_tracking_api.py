"""End-to-end tests for the tracking HTTP API."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shiptrack.config import Settings  # noqa: E402
from shiptrack.main import create_app  # noqa: E402
from shiptrack.tracking.handler import TrackingHandler  # noqa: E402
from shiptrack.upstream.shipstation_client import ShipStationClient  # noqa: E402

NOW = datetime(2025, 3, 10, 15, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def make_api(api_key=None, transport=None) -> TestClient:
    config = Settings(_env_file=None, shipstation_api_key=api_key)
    upstream = ShipStationClient(config, transport=transport)
    handler = TrackingHandler(config, upstream=upstream, clock=fixed_clock)
    return TestClient(create_app(config, handler=handler))


@pytest.fixture
def client() -> TestClient:
    return make_api()


def test_liveness(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "ShipStation Tracking API is running"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ups_number_is_detected(client):
    response = client.get("/tracking", params={"tracking_number": "1Z999AA10123456784"})
    body = response.json()

    assert response.status_code == 200
    assert body["carrier_code"] == "ups"
    assert body["tracking_url"].startswith("https://www.ups.com/track?tracknum=")
    assert body["tracking_number"] == "1Z999AA10123456784"


def test_unknown_number_uses_hashed_status(client):
    response = client.get("/tracking", params={"tracking_number": "ABC123"})
    body = response.json()

    assert response.status_code == 200
    assert body["carrier_code"] == "unknown"
    assert body["tracking_url"] is None
    # sum of character codes of "ABC123" is 348; 348 % 5 == 3
    assert body["status"] == "out_for_delivery"
    assert len(body["events"]) == 4
    assert set(body) == {
        "tracking_number",
        "carrier_code",
        "status",
        "status_description",
        "estimated_delivery_date",
        "ship_date",
        "events",
        "tracking_url",
    }
    assert set(body["events"][0]) == {
        "occurred_at",
        "description",
        "city_locality",
        "state_province",
        "postal_code",
        "country_code",
    }


def test_missing_tracking_number(client):
    response = client.get("/tracking")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing tracking number", "status": "error"}


def test_blank_tracking_number(client):
    response = client.get("/tracking", params={"tracking_number": "   "})

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_unmapped_carrier_passes_through(client):
    response = client.get(
        "/tracking", params={"tracking_number": "ABC123", "carrier": "ontrac"}
    )
    body = response.json()

    assert response.status_code == 200
    assert body["carrier_code"] == "ontrac"
    assert body["tracking_url"] is None


def test_supplied_carrier_overrides_detection(client):
    response = client.get(
        "/tracking", params={"tracking_number": "1234567890", "carrier": "FedEx"}
    )

    assert response.json()["carrier_code"] == "fedex"


def test_repeated_requests_are_identical(client):
    params = {"tracking_number": "9400111899223197428490"}

    first = client.get("/tracking", params=params)
    second = client.get("/tracking", params=params)

    assert first.content == second.content


def test_upstream_timeout_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    api = make_api(api_key="test-key", transport=httpx.MockTransport(handler))
    response = api.get("/tracking", params={"tracking_number": "1Z999AA10123456784"})

    assert response.status_code == 200
    assert response.json() == make_api().get(
        "/tracking", params={"tracking_number": "1Z999AA10123456784"}
    ).json()


def test_upstream_shipment_is_used():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"shipments": [{"shipment_status": "label_purchased", "ship_date": "2025-03-09T10:00:00Z"}]},
        )

    api = make_api(api_key="test-key", transport=httpx.MockTransport(handler))
    body = api.get("/tracking", params={"tracking_number": "1Z999AA10123456784"}).json()

    assert body["status"] == "pre_transit"
    assert body["carrier_code"] == "ups"
    assert body["events"][0]["description"] == "Shipping Label Created"


def test_unknown_carrier_skips_upstream():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"shipments": []})

    api = make_api(api_key="test-key", transport=httpx.MockTransport(handler))
    response = api.get("/tracking", params={"tracking_number": "ABC123"})

    assert response.status_code == 200
    assert calls == []


def test_internal_error_is_500():
    class BrokenHandler:
        async def track(self, tracking_number, carrier=None):
            raise RuntimeError("boom")

    config = Settings(_env_file=None)
    api = TestClient(create_app(config, handler=BrokenHandler()))
    response = api.get("/tracking", params={"tracking_number": "ABC123"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to fetch tracking information",
        "details": "boom",
        "status": "error",
    }


def test_cors_allows_configured_store():
    config = Settings(_env_file=None, shopify_store_url="https://shop.example.com")
    api = TestClient(create_app(config, handler=TrackingHandler(config, clock=fixed_clock)))

    response = api.get(
        "/tracking",
        params={"tracking_number": "ABC123"},
        headers={"Origin": "https://shop.example.com"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://shop.example.com"
