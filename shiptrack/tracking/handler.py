"""Orchestrates a single tracking lookup."""

from datetime import datetime, timezone
from typing import Callable, Optional
from loguru import logger
from pydantic import ValidationError

from ..carriers.detector import detect_carrier, resolve_carrier
from ..config import Settings
from ..exceptions import TrackingInternalError, TrackingValidationError
from ..models.tracking import CarrierCode, TrackingQuery, TrackingRecord
from ..upstream.shipstation_client import ShipStationClient
from .fallback import generate_fallback
from .normalizer import normalize


def utc_now() -> datetime:
    """Current UTC time at whole-second precision.

    Generated timelines are offsets from this instant, so identical requests
    serialize identically only while they land in the same second. A request
    pair straddling a second boundary differs in every timestamp.
    """
    return datetime.now(timezone.utc).replace(microsecond=0)


class TrackingHandler:
    """Resolve a tracking query into exactly one TrackingRecord."""

    def __init__(
        self,
        config: Settings,
        upstream: Optional[ShipStationClient] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the handler.

        Args:
            config: Application settings
            upstream: ShipStation client. Built from config if omitted.
            clock: Source of "now" for synthetic timelines
        """
        self.config = config
        self.upstream = upstream or ShipStationClient(config)
        self.clock = clock or utc_now

    async def track(
        self,
        tracking_number: Optional[str],
        carrier: Optional[str] = None
    ) -> TrackingRecord:
        """
        Look up a shipment, falling back to synthetic data.

        Raises:
            TrackingValidationError: tracking number missing or blank
            TrackingInternalError: record could not be built
        """
        try:
            query = TrackingQuery(tracking_number=tracking_number, carrier=carrier)
        except ValidationError as e:
            raise TrackingValidationError("Missing tracking number") from e

        if query.carrier:
            carrier_code = resolve_carrier(query.carrier)
        else:
            carrier_code = detect_carrier(query.tracking_number).value
            logger.info(
                f"Auto-detected carrier for {query.tracking_number}: {carrier_code}"
            )

        record = None
        if self.config.upstream_enabled and carrier_code != CarrierCode.UNKNOWN.value:
            try:
                record = await self.upstream.lookup(
                    query.tracking_number, carrier_code
                )
            except Exception as e:
                logger.error(f"ShipStation lookup failed unexpectedly: {e}")
                record = None

        try:
            now = self.clock()
            if record is None:
                logger.info(
                    f"No upstream data for {query.tracking_number}, "
                    "using generated timeline"
                )
                record = generate_fallback(query.tracking_number, carrier_code, now=now)
            return normalize(record, query.tracking_number, carrier_code, now=now)
        except Exception as e:
            raise TrackingInternalError(str(e)) from e
