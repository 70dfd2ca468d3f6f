"""Tracking lookup pipeline: fallback data, normalization, orchestration."""

from .fallback import generate_fallback, status_index
from .handler import TrackingHandler
from .normalizer import STATUS_CODE_MAP, normalize

__all__ = [
    "generate_fallback",
    "status_index",
    "TrackingHandler",
    "STATUS_CODE_MAP",
    "normalize",
]
