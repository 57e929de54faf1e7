"""Client for fetching Catholic places of worship from the Overpass API."""
from __future__ import annotations

import os
import logging
from typing import Any

import requests
from dotenv import load_dotenv

load_dotenv()

OVERPASS_API_URL = os.getenv("OVERPASS_API_URL", "https://overpass-api.de/api/interpreter")
OVERPASS_TIMEOUT = int(os.getenv("OVERPASS_TIMEOUT", "30"))
DEFAULT_RADIUS_M = int(os.getenv("DEFAULT_SEARCH_RADIUS", "5000"))

logger = logging.getLogger(__name__)
if os.getenv("MASS_FINDER_DEBUG"):
    logging.basicConfig(level=logging.INFO, format="%(message)s")

QUERY_TEMPLATE = """
[out:json];
(
  node["amenity"="place_of_worship"]["religion"="christian"]["denomination"~"catholic",i](around:{radius},{lat},{lon});
  way["amenity"="place_of_worship"]["religion"="christian"]["denomination"~"catholic",i](around:{radius},{lat},{lon});
  relation["amenity"="place_of_worship"]["religion"="christian"]["denomination"~"catholic",i](around:{radius},{lat},{lon});
);
out center;
"""


class VenueLookupError(RuntimeError):
    """Raised when nearby venues could not be fetched."""


def build_query(lat: float, lon: float, radius: int = DEFAULT_RADIUS_M) -> str:
    """Return the Overpass QL query for venues within ``radius`` metres."""
    return QUERY_TEMPLATE.format(radius=radius, lat=lat, lon=lon)


def fetch_places_of_worship(lat: float, lon: float, radius: int = DEFAULT_RADIUS_M) -> list[dict[str, Any]]:
    """Return raw Overpass elements (nodes, ways with ``center``, relations)."""
    query = build_query(lat, lon, radius)
    logger.info("POST %s (lat=%s lon=%s radius=%s)", OVERPASS_API_URL, lat, lon, radius)
    try:
        response = requests.post(
            OVERPASS_API_URL,
            data=query,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=OVERPASS_TIMEOUT,
        )
        response.raise_for_status()
        elements = response.json().get("elements", [])
    except (requests.RequestException, ValueError) as exc:
        logger.error("Error fetching churches: %s", exc)
        raise VenueLookupError("Overpass request failed") from exc

    logger.info("Overpass returned %d element(s)", len(elements))
    return elements
