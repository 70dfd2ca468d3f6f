"""Errors raised while answering a tracking query."""


class TrackingError(Exception):
    """Base class for tracking relay errors."""


class TrackingValidationError(TrackingError):
    """The query is missing required input (HTTP 400)."""


class UpstreamUnavailable(TrackingError):
    """ShipStation failed, timed out or had no matching shipment.

    Never reaches the caller: the handler falls back to synthetic data.
    """


class TrackingInternalError(TrackingError):
    """Unexpected failure while building the tracking record (HTTP 500)."""
