"""Tests for the tracking request handler."""

import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path

import httpx
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shiptrack.config import Settings  # noqa: E402
from shiptrack.exceptions import (  # noqa: E402
    TrackingInternalError,
    TrackingValidationError,
)
from shiptrack.tracking import handler as handler_module  # noqa: E402
from shiptrack.tracking.handler import TrackingHandler  # noqa: E402
from shiptrack.upstream.shipstation_client import ShipStationClient  # noqa: E402

NOW = datetime(2025, 3, 10, 15, 30, tzinfo=timezone.utc)


class ExplodingUpstream:
    """Upstream client that fails in a way it is not supposed to."""

    def __init__(self):
        self.calls = 0

    async def lookup(self, tracking_number, carrier):
        self.calls += 1
        raise RuntimeError("connection reset")


def make_handler(api_key="test-key", upstream=None) -> TrackingHandler:
    config = Settings(_env_file=None, shipstation_api_key=api_key)
    return TrackingHandler(config, upstream=upstream, clock=lambda: NOW)


@pytest.mark.parametrize("tracking_number", [None, "", "  "])
def test_missing_tracking_number_is_rejected(tracking_number):
    with pytest.raises(TrackingValidationError, match="Missing tracking number"):
        asyncio.run(make_handler(api_key=None).track(tracking_number))


def test_blank_carrier_triggers_detection():
    record = asyncio.run(make_handler(api_key=None).track("1Z999AA10123456784", ""))
    assert record.carrier_code == "ups"


def test_upstream_exception_falls_back():
    upstream = ExplodingUpstream()
    record = asyncio.run(make_handler(upstream=upstream).track("1Z999AA10123456784"))

    assert upstream.calls == 1
    assert record.events
    assert record.ship_date < NOW


def test_upstream_not_called_without_key():
    upstream = ExplodingUpstream()
    asyncio.run(make_handler(api_key=None, upstream=upstream).track("1Z999AA10123456784"))

    assert upstream.calls == 0


def test_build_failure_is_internal_error(monkeypatch):
    def broken(*args, **kwargs):
        raise KeyError("status")

    monkeypatch.setattr(handler_module, "generate_fallback", broken)

    with pytest.raises(TrackingInternalError):
        asyncio.run(make_handler(api_key=None).track("ABC123"))


def test_bare_shipstation_hit_is_complete():
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"shipments": [{"shipment_status": "shipped"}]})

    config = Settings(_env_file=None, shipstation_api_key="test-key")
    upstream = ShipStationClient(config, transport=httpx.MockTransport(respond))
    handler = TrackingHandler(config, upstream=upstream, clock=lambda: NOW)

    record = asyncio.run(handler.track("1Z999AA10123456784"))

    assert record.status == "shipped"
    assert record.estimated_delivery_date is not None
    assert record.events


def test_default_clock_drops_microseconds():
    assert handler_module.utc_now().microsecond == 0
