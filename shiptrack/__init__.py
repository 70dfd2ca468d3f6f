"""Shipment tracking relay for storefront order-status widgets."""

__version__ = "1.0.0"
