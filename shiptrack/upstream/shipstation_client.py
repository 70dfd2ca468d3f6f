"""ShipStation API client for shipment lookups by tracking number."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import httpx
from loguru import logger

from ..carriers.registry import aggregator_carrier_code
from ..config import Settings
from ..exceptions import UpstreamUnavailable
from ..models.tracking import LABEL_CREATED, TrackingEvent, UpstreamRecord


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a ShipStation date or datetime string as UTC."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Ignoring unparseable ShipStation date: {value}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ShipStationClient:
    """Client for the ShipStation REST API."""

    def __init__(
        self,
        config: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize ShipStation client.

        Args:
            config: Application settings holding the API key and base URL
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = config.shipstation_api_key
        self.base_url = config.shipstation_api_url.rstrip("/")
        self.timeout = config.upstream_timeout_seconds
        self._transport = transport

        if self.api_key:
            logger.info(f"ShipStation client initialized ({self.base_url})")
        else:
            logger.info("SHIPSTATION_API_KEY not set - upstream lookups disabled")

    async def lookup(
        self,
        tracking_number: str,
        carrier: str
    ) -> Optional[UpstreamRecord]:
        """
        Look up a shipment by tracking number.

        Best effort: failures are logged and reported as no data.

        Args:
            tracking_number: Raw tracking number from the query
            carrier: Resolved carrier code (ours, not ShipStation's)

        Returns:
            UpstreamRecord for the first matching shipment, or None
        """
        if not self.api_key:
            return None

        try:
            shipment = await self._find_shipment(tracking_number)
            record = self._to_record(
                shipment, tracking_number, aggregator_carrier_code(carrier)
            )
        except UpstreamUnavailable as e:
            logger.error(f"Error fetching from ShipStation: {e}")
            return None

        logger.info(
            f"ShipStation shipment found for {tracking_number} "
            f"(status: {record.status_code})"
        )
        return record

    async def _find_shipment(self, tracking_number: str) -> Dict[str, Any]:
        """Fetch the first shipment carrying this tracking number."""
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                auth=(self.api_key, ""),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    "/shipments", params={"trackingNumber": tracking_number}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            # Error pages can be large
            raise UpstreamUnavailable(
                f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailable(f"Invalid JSON response: {e}") from e

        shipments = data.get("shipments") if isinstance(data, dict) else None
        if not isinstance(shipments, list) or not shipments:
            raise UpstreamUnavailable(f"No shipment found for {tracking_number}")
        return shipments[0]

    def _to_record(
        self,
        shipment: Any,
        tracking_number: str,
        carrier_code: str
    ) -> UpstreamRecord:
        """
        Reduce a ShipStation shipment to the fields we normalize.

        Raises:
            UpstreamUnavailable: shipment payload has an unexpected shape
        """
        if not isinstance(shipment, dict):
            raise UpstreamUnavailable(
                f"Malformed shipment: expected object, got {type(shipment).__name__}"
            )

        try:
            status = shipment.get("shipment_status") or shipment.get("shipmentStatus")
            ship_date = _parse_timestamp(
                shipment.get("ship_date") or shipment.get("shipDate")
            )
            label_date = ship_date or _parse_timestamp(
                shipment.get("created_at") or shipment.get("createDate")
            )

            events = []
            if label_date:
                ship_from = shipment.get("ship_from") or shipment.get("shipFrom") or {}
                events.append(
                    TrackingEvent(
                        occurred_at=label_date,
                        description=LABEL_CREATED,
                        city_locality=ship_from.get("city_locality") or "",
                        state_province=ship_from.get("state_province") or "",
                        postal_code=ship_from.get("postal_code") or "",
                        country_code=ship_from.get("country_code") or "",
                    )
                )

            return UpstreamRecord(
                tracking_number=tracking_number,
                carrier_code=carrier_code,
                status_code=status,
                ship_date=ship_date,
                events=events,
            )
        # pydantic's ValidationError is a ValueError
        except (AttributeError, TypeError, KeyError, ValueError) as e:
            raise UpstreamUnavailable(f"Malformed shipment: {e}") from e
