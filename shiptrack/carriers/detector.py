"""Guess the carrier of a tracking number from its format."""

import re
from typing import List, Pattern, Tuple
from loguru import logger

from ..models.tracking import CarrierCode

# Evaluated top to bottom, first match wins. Several all-digit formats
# overlap (FedEx / DHL / Canada Post), so the order decides the carrier.
_PATTERN_TABLE: List[Tuple[str, CarrierCode]] = [
    # USPS
    (r"^9[4-5]\d{20}$", CarrierCode.USPS),
    (r"^(91|92|93|94|95|96)\d{20}$", CarrierCode.USPS),
    (r"^[A-Z]{2}\d{9}[A-Z]{2}$", CarrierCode.USPS),
    (r"^E\D{1}\d{9}\D{2}$", CarrierCode.USPS),
    (r"^[A-Z]{2}\d{9}US$", CarrierCode.USPS),
    (r"^(420\d{5})?(91|92|93|94|95|96)\d{20}$", CarrierCode.USPS),
    (
        r"^(M|P[A-Z]?|D[A-Z]?|LK|E[A-Z]|V[A-Z]?|R[A-Z]?|CP|CJ|LC|LJ)\d{9}[A-Z]{2}$",
        CarrierCode.USPS,
    ),
    # FedEx
    (r"^[0-9]{12,14}$", CarrierCode.FEDEX),
    (r"^6\d{11,12}$", CarrierCode.FEDEX),
    (r"^(96\d{20}|\d{15})$", CarrierCode.FEDEX),
    # UPS
    (r"^1Z[0-9A-Z]{16}$", CarrierCode.UPS),
    (r"^(T\d{10}|927R\d{16})$", CarrierCode.UPS),
    (r"^(K\d{10})$", CarrierCode.UPS),
    # DHL
    (r"^\d{10,11}$", CarrierCode.DHL),
    (r"^[0-9]{10}$", CarrierCode.DHL),
    # Canada Post (approximate)
    (r"^([A-Z]{2}\d{9}CA)$", CarrierCode.CANADA_POST),
    (r"^(\d{16})$", CarrierCode.CANADA_POST),
]

CARRIER_PATTERNS: List[Tuple[Pattern[str], CarrierCode]] = [
    (re.compile(pattern, re.ASCII), carrier)
    for pattern, carrier in _PATTERN_TABLE
]


def detect_carrier(tracking_number: str) -> CarrierCode:
    """
    Detect which carrier a tracking number belongs to.

    Args:
        tracking_number: Raw tracking number as typed by the customer

    Returns:
        The first matching carrier, or CarrierCode.UNKNOWN
    """
    if not tracking_number:
        return CarrierCode.UNKNOWN

    normalized = tracking_number.strip().upper()

    for pattern, carrier in CARRIER_PATTERNS:
        if pattern.fullmatch(normalized):
            logger.debug(f"Detected carrier {carrier.value} for {normalized}")
            return carrier

    logger.debug(f"Could not detect carrier for {normalized}")
    return CarrierCode.UNKNOWN


def resolve_carrier(carrier: str) -> str:
    """Canonicalize a caller-supplied carrier; unknown names pass through."""
    candidate = carrier.strip().lower()
    try:
        return CarrierCode(candidate).value
    except ValueError:
        return carrier
