"""Deterministic placeholder timelines for shipments we have no data for.

The status is picked from the tracking number itself (sum of character codes
modulo the number of statuses), never from a random source, so the same
number always shows the same progress. Event times are offsets from ``now``.
"""

from datetime import datetime, timedelta, timezone
from typing import List, NamedTuple, Optional

from ..carriers.registry import build_tracking_url
from ..models.tracking import (
    LABEL_CREATED,
    STATUS_LABELS,
    TrackingEvent,
    TrackingRecord,
    TrackingStatus,
)

# Lifecycle order; the hash indexes into this list
POSSIBLE_STATUSES = [
    TrackingStatus.PRE_TRANSIT,
    TrackingStatus.SHIPPED,
    TrackingStatus.IN_TRANSIT,
    TrackingStatus.OUT_FOR_DELIVERY,
    TrackingStatus.DELIVERED,
]

_DESTINATION = ("Destination City", "State", "12345", "US")
_TRANSIT = ("Transit Location", "State", "12345", "US")
_ORIGIN = ("Origin City", "State", "54321", "US")


class _Stage(NamedTuple):
    status: TrackingStatus
    offset: timedelta
    description: str
    location: tuple


# Newest first
_TIMELINE: List[_Stage] = [
    _Stage(TrackingStatus.DELIVERED, timedelta(0), "Delivered, Front Door", _DESTINATION),
    _Stage(TrackingStatus.OUT_FOR_DELIVERY, timedelta(hours=5), "Out for Delivery", _DESTINATION),
    _Stage(TrackingStatus.IN_TRANSIT, timedelta(days=1), "In Transit", _TRANSIT),
    _Stage(TrackingStatus.SHIPPED, timedelta(days=2), "Shipment Picked Up", _ORIGIN),
    _Stage(TrackingStatus.PRE_TRANSIT, timedelta(days=3), LABEL_CREATED, _ORIGIN),
]

ESTIMATED_DELIVERY_LEAD = {
    TrackingStatus.PRE_TRANSIT: timedelta(days=5),
    TrackingStatus.SHIPPED: timedelta(days=3),
    TrackingStatus.IN_TRANSIT: timedelta(days=2),
    TrackingStatus.OUT_FOR_DELIVERY: timedelta(0),
}


def status_index(tracking_number: str) -> int:
    """Index into POSSIBLE_STATUSES derived from the tracking number."""
    return sum(ord(char) for char in tracking_number) % len(POSSIBLE_STATUSES)


def generate_fallback(
    tracking_number: str,
    carrier_code: str,
    now: Optional[datetime] = None
) -> TrackingRecord:
    """
    Build a synthetic tracking record for a shipment.

    Args:
        tracking_number: Tracking number the record is derived from
        carrier_code: Carrier to report and link to
        now: Reference instant for event times. Defaults to current UTC time.

    Returns:
        TrackingRecord with events ordered newest first
    """
    now = now or datetime.now(timezone.utc)
    status = POSSIBLE_STATUSES[status_index(tracking_number)]
    rank = POSSIBLE_STATUSES.index(status)

    events = []
    for stage in _TIMELINE:
        if POSSIBLE_STATUSES.index(stage.status) > rank:
            continue
        city, state, postal_code, country = stage.location
        events.append(
            TrackingEvent(
                occurred_at=now - stage.offset,
                description=stage.description,
                city_locality=city,
                state_province=state,
                postal_code=postal_code,
                country_code=country,
            )
        )

    lead = ESTIMATED_DELIVERY_LEAD.get(status)
    estimated_delivery_date = now + lead if lead is not None else None

    return TrackingRecord(
        tracking_number=tracking_number,
        carrier_code=carrier_code,
        status=status.value,
        status_description=STATUS_LABELS[status],
        estimated_delivery_date=estimated_delivery_date,
        # Label creation is always the last event
        ship_date=events[-1].occurred_at,
        events=events,
        tracking_url=build_tracking_url(carrier_code, tracking_number),
    )
