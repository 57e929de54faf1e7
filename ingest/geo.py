"""Distance and address helpers for OpenStreetMap records."""
from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Mapping

EARTH_RADIUS_KM = 6371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two points, rounded to 2 decimals."""
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 2)


def format_address(tags: Mapping[str, str]) -> str:
    """Build a display address from OSM ``addr:*`` tags.

    ``addr:full`` wins when present; otherwise house number, street and
    locality are joined from whichever exist. Returns ``""`` when nothing is
    tagged.
    """
    if tags.get("addr:full"):
        return tags["addr:full"]

    parts = [
        tags.get("addr:housenumber"),
        tags.get("addr:street") or tags.get("addr:street_name"),
        tags.get("addr:city") or tags.get("addr:suburb") or tags.get("addr:town") or tags.get("addr:postcode"),
    ]
    return ", ".join(p for p in parts if p)
