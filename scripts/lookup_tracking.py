#!/usr/bin/env python3
"""
Script to run one tracking lookup without starting the server.

Uses the same settings (.env) as the API, so it shows exactly what the
storefront would receive for a tracking number.

Usage:
    python scripts/lookup_tracking.py 1Z999AA10123456784
    python scripts/lookup_tracking.py 9400111899223197428490 --carrier usps
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402

from shiptrack.config import settings  # noqa: E402
from shiptrack.exceptions import TrackingError  # noqa: E402
from shiptrack.tracking.handler import TrackingHandler  # noqa: E402


def main():
    """Look up a tracking number and print the JSON response."""
    parser = argparse.ArgumentParser(description="Look up a tracking number")
    parser.add_argument("tracking_number", help="Tracking number to look up")
    parser.add_argument("--carrier", default=None, help="Carrier code (auto-detected if omitted)")
    args = parser.parse_args()

    if not settings.upstream_enabled:
        print("ℹ️  SHIPSTATION_API_KEY not set - result will be a generated timeline")

    try:
        handler = TrackingHandler(settings)
        record = asyncio.run(handler.track(args.tracking_number, args.carrier))
        print(record.model_dump_json(indent=2))

    except TrackingError as e:
        logger.error(f"Tracking lookup failed: {e}")
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
