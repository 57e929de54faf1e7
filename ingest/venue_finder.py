"""Find nearby venues and decorate them with today's next Mass time."""
from __future__ import annotations

import os
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from schedules.resolver import ScheduleResolver, next_occurrence

from .geo import format_address, haversine_km
from .overpass_client import DEFAULT_RADIUS_M, fetch_places_of_worship
from .schemas import Venue

load_dotenv()

LOCAL_TZ = ZoneInfo(os.getenv("MASS_FINDER_TZ", "Asia/Hong_Kong"))
UNKNOWN_NAME = "Unknown Catholic Church"

# Non-Catholic churches that show up through mis-tagged OSM data
EXCLUDED_NAME_PARTS = ("Swatow Christian", "Lutheran", "Methodist", "Baptist")

SORT_OPTIONS = ("distance", "time")

logger = logging.getLogger(__name__)
if os.getenv("MASS_FINDER_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")


def local_now() -> datetime:
    return datetime.now(LOCAL_TZ)


def is_excluded(name: str) -> bool:
    return any(part in name for part in EXCLUDED_NAME_PARTS)


def venue_from_element(element: dict[str, Any], origin_lat: float, origin_lon: float) -> Optional[Venue]:
    """Build a :class:`Venue` from an Overpass element.

    Ways and relations carry their coordinates under ``center``. Elements
    without any coordinates return None.
    """
    center = element.get("center") or {}
    lat = element.get("lat", center.get("lat"))
    lon = element.get("lon", center.get("lon"))
    if lat is None or lon is None:
        logger.debug("Skipping element %s without coordinates", element.get("id"))
        return None

    tags = element.get("tags") or {}
    return Venue(
        id=element["id"],
        name=tags.get("name") or UNKNOWN_NAME,
        lat=lat,
        lon=lon,
        address=format_address(tags),
        distance_km=haversine_km(origin_lat, origin_lon, lat, lon),
    )


def decorate_venue(venue: Venue, resolver: ScheduleResolver, now: datetime) -> Venue:
    """Return ``venue`` with its Mass schedule and next Mass time attached."""
    match = resolver.lookup(venue.name)
    if match is None:
        return venue
    return replace(venue, mass_schedule=match, next_mass_time=next_occurrence(match.schedule, now))


def sort_venues(venues: Iterable[Venue], by: str = "distance") -> list[Venue]:
    """Sort by distance, or by next Mass time with distance as tie-break.

    Venues without a Mass left today go last when sorting by time.
    """
    if by not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option {by!r}, expected one of {SORT_OPTIONS}")

    def distance(v: Venue) -> float:
        return v.distance_km or 0

    if by == "time":
        return sorted(
            venues,
            key=lambda v: (v.next_mass_time is None, v.next_mass_time or 0, distance(v)),
        )
    return sorted(venues, key=distance)


def find_nearby_venues(
    lat: float,
    lon: float,
    resolver: ScheduleResolver,
    radius: int = DEFAULT_RADIUS_M,
    now: Optional[datetime] = None,
    sort: str = "distance",
) -> list[Venue]:
    """Fetch venues around a point and attach today's next Mass time.

    Args:
        lat: Latitude of the search point.
        lon: Longitude of the search point.
        resolver: Schedule lookup built from the loaded schedule table.
        radius: Search radius in metres.
        now: Reference instant; defaults to the current local time.
        sort: ``"distance"`` or ``"time"``.

    Raises:
        VenueLookupError: if the Overpass request fails.
    """
    now = now or local_now()
    elements = fetch_places_of_worship(lat, lon, radius)

    venues = (venue_from_element(e, lat, lon) for e in elements)
    venues = [v for v in venues if v is not None and not is_excluded(v.name)]
    decorated = [decorate_venue(v, resolver, now) for v in venues]

    matched = sum(1 for v in decorated if v.mass_schedule is not None)
    logger.info("Found %d venue(s), %d with a Mass schedule", len(decorated), matched)
    return sort_venues(decorated, sort)
