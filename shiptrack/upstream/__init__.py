"""Clients for upstream shipping APIs."""

from .shipstation_client import ShipStationClient

__all__ = ["ShipStationClient"]
