"""Data models for shipment tracking."""

from .tracking import (
    CarrierCode,
    TrackingEvent,
    TrackingQuery,
    TrackingRecord,
    TrackingStatus,
    UpstreamRecord,
    STATUS_LABELS,
    LABEL_CREATED,
)

__all__ = [
    "CarrierCode",
    "TrackingEvent",
    "TrackingQuery",
    "TrackingRecord",
    "TrackingStatus",
    "UpstreamRecord",
    "STATUS_LABELS",
    "LABEL_CREATED",
]
