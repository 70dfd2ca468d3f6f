"""Carrier tracking-page links and ShipStation carrier codes."""

from typing import Optional

# Direct links to the carriers' public tracking pages
TRACKING_URL_PATTERNS = {
    "usps": "https://tools.usps.com/go/TrackConfirmAction?tLabels=",
    "fedex": "https://www.fedex.com/fedextrack/?trknbr=",
    "ups": "https://www.ups.com/track?tracknum=",
    "dhl": "https://www.dhl.com/en/express/tracking.html?AWB=",
    "canada_post": "https://www.canadapost-postescanada.ca/track-reperage/en#/search?searchFor=",
}

# Our carrier codes -> ShipStation carrier codes
AGGREGATOR_CARRIER_CODES = {
    "usps": "stamps_com",
    "fedex": "fedex",
    "ups": "ups",
    "dhl": "dhl_express",
    "canada_post": "canada_post",
}


def build_tracking_url(carrier: Optional[str], tracking_number: str) -> Optional[str]:
    """Return the carrier's public tracking page for this number, if known."""
    if not carrier:
        return None
    base = TRACKING_URL_PATTERNS.get(carrier.lower())
    if base is None:
        return None
    return base + tracking_number


def aggregator_carrier_code(carrier: str) -> str:
    """Map a carrier to the code ShipStation uses; unknown codes pass through."""
    return AGGREGATOR_CARRIER_CODES.get(carrier.lower(), carrier)
