"""
Free-text geocoding for search queries.
Uses geopy's Nominatim client to turn a place name into coordinates.
"""
from __future__ import annotations

import os
import logging
from typing import Optional

from dotenv import load_dotenv
from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from .schemas import GeocodeResult

load_dotenv()

NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "CatholicChurchFinder/1.0")

logger = logging.getLogger(__name__)

geolocator = Nominatim(user_agent=NOMINATIM_USER_AGENT, timeout=10)


def geocode_location(query: str) -> Optional[GeocodeResult]:
    """
    Geocode a place name such as "Wan Chai, Hong Kong".
    Returns None if the query is blank, nothing matches, or the service fails.
    """
    if not query or not query.strip():
        return None

    try:
        location = geolocator.geocode(query.strip(), exactly_one=True)
    except (GeocoderTimedOut, GeocoderServiceError) as exc:
        logger.error("Geocoding error for %r: %s", query, exc)
        return None

    if location is None:
        logger.info("No geocoding result for %r", query)
        return None

    return GeocodeResult(
        lat=float(location.latitude),
        lon=float(location.longitude),
        display_name=location.address,
    )
