"""Tracking query, event and record models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CarrierCode(str, Enum):
    """Carriers we can recognize from a tracking number."""

    USPS = "usps"
    FEDEX = "fedex"
    UPS = "ups"
    DHL = "dhl"
    CANADA_POST = "canada_post"
    UNKNOWN = "unknown"


class TrackingStatus(str, Enum):
    """Canonical shipment status, in lifecycle order."""

    PRE_TRANSIT = "pre_transit"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    UNKNOWN = "unknown"


STATUS_LABELS = {
    TrackingStatus.PRE_TRANSIT: "Pre-Transit",
    TrackingStatus.SHIPPED: "Shipped",
    TrackingStatus.IN_TRANSIT: "In Transit",
    TrackingStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    TrackingStatus.DELIVERED: "Delivered",
    TrackingStatus.UNKNOWN: "Unknown",
}

LABEL_CREATED = "Shipping Label Created"


class TrackingQuery(BaseModel):
    """Inbound tracking lookup."""

    model_config = ConfigDict(frozen=True)

    tracking_number: str = Field(..., min_length=1)
    carrier: Optional[str] = None

    @field_validator("tracking_number")
    @classmethod
    def validate_tracking_number(cls, v: str) -> str:
        """Reject blank tracking numbers."""
        if not v.strip():
            raise ValueError("tracking_number must not be blank")
        return v

    @field_validator("carrier")
    @classmethod
    def blank_carrier_is_absent(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty carrier parameter as not supplied."""
        if v is not None and not v.strip():
            return None
        return v


class TrackingEvent(BaseModel):
    """Single scan in a shipment timeline."""

    model_config = ConfigDict(frozen=True)

    occurred_at: datetime
    description: str
    city_locality: str = ""
    state_province: str = ""
    postal_code: str = ""
    country_code: str = ""


class TrackingRecord(BaseModel):
    """Normalized tracking record returned to the storefront.

    ``status`` and ``carrier_code`` hold enum values when recognized and the
    literal upstream/caller string otherwise.
    """

    model_config = ConfigDict(frozen=True)

    tracking_number: str
    carrier_code: str
    status: str
    status_description: str
    estimated_delivery_date: Optional[datetime] = None
    ship_date: datetime
    events: List[TrackingEvent] = Field(default_factory=list)
    tracking_url: Optional[str] = None


class UpstreamRecord(BaseModel):
    """Shipment data as reported by ShipStation, before normalization."""

    model_config = ConfigDict(frozen=True)

    tracking_number: Optional[str] = None
    carrier_code: Optional[str] = None
    tracking_status: Optional[str] = None
    status_description: Optional[str] = None
    status_code: Optional[str] = None
    estimated_delivery_date: Optional[datetime] = None
    ship_date: Optional[datetime] = None
    events: List[TrackingEvent] = Field(default_factory=list)
