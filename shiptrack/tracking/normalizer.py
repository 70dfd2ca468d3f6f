"""Map upstream or synthetic tracking data onto the response shape."""

from datetime import datetime, timezone
from typing import Optional, Union

from ..carriers.registry import build_tracking_url
from ..models.tracking import (
    LABEL_CREATED,
    STATUS_LABELS,
    TrackingEvent,
    TrackingRecord,
    TrackingStatus,
    UpstreamRecord,
)
from .fallback import ESTIMATED_DELIVERY_LEAD

# Upstream status vocabulary (case-insensitive) -> canonical status
STATUS_CODE_MAP = {
    "PRE_TRANSIT": TrackingStatus.PRE_TRANSIT,
    "LABEL_PURCHASED": TrackingStatus.PRE_TRANSIT,
    "PENDING": TrackingStatus.PRE_TRANSIT,
    "PROCESSING": TrackingStatus.PRE_TRANSIT,
    "SHIPPED": TrackingStatus.SHIPPED,
    "ACCEPTED": TrackingStatus.SHIPPED,
    "AC": TrackingStatus.SHIPPED,
    "IN_TRANSIT": TrackingStatus.IN_TRANSIT,
    "IT": TrackingStatus.IN_TRANSIT,
    "OUT_FOR_DELIVERY": TrackingStatus.OUT_FOR_DELIVERY,
    "DELIVERED": TrackingStatus.DELIVERED,
    "DE": TrackingStatus.DELIVERED,
    "UNKNOWN": TrackingStatus.UNKNOWN,
    "UN": TrackingStatus.UNKNOWN,
}


def map_status(code: Optional[str]) -> str:
    """Canonical status for an upstream code; unrecognized codes pass through."""
    if not code:
        return TrackingStatus.UNKNOWN.value
    mapped = STATUS_CODE_MAP.get(code.strip().upper())
    return mapped.value if mapped else code


def _canonical(status: str) -> Optional[TrackingStatus]:
    """Enum member for a canonical status value, None for pass-through codes."""
    try:
        return TrackingStatus(status)
    except ValueError:
        return None


def _status_text(
    tracking_status: Optional[str],
    status_description: Optional[str],
    status_code: Optional[str]
) -> str:
    if tracking_status:
        return tracking_status
    if status_description:
        return status_description
    if status_code:
        mapped = STATUS_CODE_MAP.get(status_code.strip().upper())
        return STATUS_LABELS[mapped] if mapped else status_code
    return "Unknown"


def normalize(
    record: Union[UpstreamRecord, TrackingRecord, None],
    tracking_number: str,
    carrier_code: str,
    now: Optional[datetime] = None
) -> TrackingRecord:
    """
    Produce the response record for a tracking query.

    Args:
        record: ShipStation data, a synthetic record, or None when neither exists
        tracking_number: Tracking number from the query
        carrier_code: Carrier resolved for the query
        now: Ship date (and estimate base) when the record has none

    Returns:
        TrackingRecord ready to serialize
    """
    now = now or datetime.now(timezone.utc)
    tracking_url = build_tracking_url(carrier_code, tracking_number)

    if record is None:
        return TrackingRecord(
            tracking_number=tracking_number,
            carrier_code=carrier_code,
            status=TrackingStatus.UNKNOWN.value,
            status_description=STATUS_LABELS[TrackingStatus.UNKNOWN],
            estimated_delivery_date=None,
            ship_date=now,
            events=[],
            tracking_url=tracking_url,
        )

    if isinstance(record, TrackingRecord):
        tracking_status = None
        status_code = record.status
    else:
        tracking_status = record.tracking_status
        status_code = record.status_code

    status = map_status(status_code)
    known_status = _canonical(status)
    ship_date = record.ship_date or now

    estimated_delivery_date = record.estimated_delivery_date
    if known_status == TrackingStatus.DELIVERED:
        estimated_delivery_date = None
    elif estimated_delivery_date is None and known_status in ESTIMATED_DELIVERY_LEAD:
        estimated_delivery_date = ship_date + ESTIMATED_DELIVERY_LEAD[known_status]

    events = list(record.events)
    if not events and known_status not in (None, TrackingStatus.UNKNOWN):
        events = [TrackingEvent(occurred_at=ship_date, description=LABEL_CREATED)]

    return TrackingRecord(
        tracking_number=record.tracking_number or tracking_number,
        carrier_code=record.carrier_code or carrier_code,
        status=status,
        status_description=_status_text(
            tracking_status, record.status_description, status_code
        ),
        estimated_delivery_date=estimated_delivery_date,
        ship_date=ship_date,
        events=events,
        tracking_url=tracking_url,
    )
