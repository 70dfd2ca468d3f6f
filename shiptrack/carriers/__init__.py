"""Carrier detection and per-carrier link data."""

from .detector import CARRIER_PATTERNS, detect_carrier, resolve_carrier
from .registry import (
    AGGREGATOR_CARRIER_CODES,
    TRACKING_URL_PATTERNS,
    aggregator_carrier_code,
    build_tracking_url,
)

__all__ = [
    "CARRIER_PATTERNS",
    "detect_carrier",
    "resolve_carrier",
    "AGGREGATOR_CARRIER_CODES",
    "TRACKING_URL_PATTERNS",
    "aggregator_carrier_code",
    "build_tracking_url",
]
