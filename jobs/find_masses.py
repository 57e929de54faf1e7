"""Print nearby churches and their next Mass time today."""
from __future__ import annotations

import argparse
import os
import sys
import logging
from typing import Optional

from ingest.geocoder import geocode_location
from ingest.overpass_client import DEFAULT_RADIUS_M, VenueLookupError
from ingest.schemas import Venue
from ingest.venue_finder import SORT_OPTIONS, find_nearby_venues
from schedules.resolver import ScheduleResolver
from schedules.table import DEFAULT_TABLE, load_schedule_table
from schedules.times import format_minutes

logger = logging.getLogger(__name__)
if os.getenv("MASS_FINDER_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def describe(venue: Venue) -> str:
    """Return a one-line summary of ``venue``."""
    if venue.next_mass_time is not None:
        when = f"Next Mass Today: {format_minutes(venue.next_mass_time)}"
    elif venue.mass_schedule is not None:
        when = "No more Masses today"
    else:
        when = "Schedule unavailable"

    line = f"{venue.name} ({venue.distance_km} km) - {when}"
    if venue.address:
        line += f"\n    {venue.address}"
    return line


def run(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    query: Optional[str] = None,
    radius: int = DEFAULT_RADIUS_M,
    sort: str = "distance",
    table_path: str = str(DEFAULT_TABLE),
) -> int:
    """Look up churches and print them. Returns a process exit code."""
    if query:
        result = geocode_location(query)
        if result is None:
            print("Location not found. Please try a different query.")
            return 1
        lat, lon = result.lat, result.lon
        print(f"📍 {result.display_name}")

    resolver = ScheduleResolver(load_schedule_table(table_path))
    try:
        venues = find_nearby_venues(lat, lon, resolver, radius=radius, sort=sort)
    except VenueLookupError as exc:
        logger.info("Venue lookup failed: %s", exc)
        print("❌ Failed to fetch nearby churches. Please try again later.")
        return 1

    if not venues:
        print("No churches found within", radius, "m")
        return 0

    for venue in venues:
        print(describe(venue))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Find nearby Catholic churches and their next Mass time today")
    parser.add_argument("--query", "-q", help="Place name to search around")
    parser.add_argument("--lat", type=float, help="Latitude of the search point")
    parser.add_argument("--lon", type=float, help="Longitude of the search point")
    parser.add_argument("--radius", type=int, default=DEFAULT_RADIUS_M, help="Search radius in metres")
    parser.add_argument("--sort", choices=SORT_OPTIONS, default="distance", help="Sort order")
    parser.add_argument("--table", default=str(DEFAULT_TABLE), help="Mass schedule JSON file")
    args = parser.parse_args(argv)

    if not args.query and (args.lat is None or args.lon is None):
        parser.error("either --query or both --lat and --lon are required")

    return run(
        lat=args.lat,
        lon=args.lon,
        query=args.query,
        radius=args.radius,
        sort=args.sort,
        table_path=args.table,
    )


if __name__ == "__main__":
    sys.exit(main())
