"""FastAPI application for the Mass Times Finder API."""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import lru_cache
from typing import Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel

from ingest.geocoder import geocode_location
from ingest.overpass_client import DEFAULT_RADIUS_M, VenueLookupError
from ingest.venue_finder import LOCAL_TZ, find_nearby_venues, local_now
from schedules.resolver import ScheduleResolver
from schedules.table import load_schedule_table

VERSION = "1.0.0"
FETCH_FAILED = "Failed to fetch nearby churches. Please try again later."
LOCATION_NOT_FOUND = "Location not found. Please try a different query."

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mass Times Finder API",
    description="Find nearby Catholic churches and their next Mass time today",
    version=VERSION,
)

# Thread pool for the blocking Overpass and Nominatim calls
executor = ThreadPoolExecutor(max_workers=4)


class ScheduleEntryModel(BaseModel):
    type: str
    time: str


class MassScheduleModel(BaseModel):
    """Schedule entries exactly as published for the matched church."""
    original_name: str
    schedule: List[ScheduleEntryModel]


class VenueModel(BaseModel):
    """A nearby church with its next Mass time today."""
    id: int
    name: str
    lat: float
    lon: float
    address: str = ""
    distance_km: Optional[float] = None
    mass_schedule: Optional[MassScheduleModel] = None
    next_mass_time: Optional[int] = None  # minutes from midnight, local time


class LocationModel(BaseModel):
    lat: float
    lon: float
    display_name: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str


class VenuesResponse(BaseModel):
    """Response model for venue lookups."""
    success: bool
    location: LocationModel
    venues: List[VenueModel]
    metadata: Dict
    processing_time_seconds: float


@lru_cache(maxsize=1)
def get_resolver() -> ScheduleResolver:
    """Load the schedule table once and share it between requests."""
    return ScheduleResolver(load_schedule_table())


def _reference_time(at: Optional[datetime]) -> datetime:
    if at is None:
        return local_now()
    if at.tzinfo is None:
        return at.replace(tzinfo=LOCAL_TZ)
    return at.astimezone(LOCAL_TZ)


async def _nearby_response(
    location: LocationModel,
    resolver: ScheduleResolver,
    radius: int,
    sort: str,
    at: Optional[datetime],
) -> VenuesResponse:
    start_time = datetime.now(timezone.utc)
    now = _reference_time(at)

    try:
        loop = asyncio.get_event_loop()
        venues = await loop.run_in_executor(
            executor,
            lambda: find_nearby_venues(
                location.lat, location.lon, resolver, radius=radius, now=now, sort=sort
            ),
        )
    except VenueLookupError as e:
        logger.error("Venue lookup failed: %s", e)
        raise HTTPException(status_code=502, detail=FETCH_FAILED)

    processing_time = (datetime.now(timezone.utc) - start_time).total_seconds()
    return VenuesResponse(
        success=len(venues) > 0,
        location=location,
        venues=[VenueModel(**venue.to_dict()) for venue in venues],
        metadata={
            "total_found": len(venues),
            "with_schedule": sum(1 for v in venues if v.mass_schedule is not None),
            "reference_time": now.isoformat(),
            "radius": radius,
            "sort": sort,
        },
        processing_time_seconds=processing_time,
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION
    )


@app.get("/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness check endpoint for container orchestration."""
    return HealthResponse(
        status="alive",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION
    )


@app.get("/ready", response_model=HealthResponse)
async def readiness_check(resolver: ScheduleResolver = Depends(get_resolver)):
    """Readiness check endpoint; ready once the schedule table is loaded."""
    return HealthResponse(
        status="ready",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=VERSION
    )


@app.get("/venues/nearby", response_model=VenuesResponse)
async def nearby_venues(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    radius: int = Query(DEFAULT_RADIUS_M, gt=0, le=50000),
    sort: Literal["distance", "time"] = "distance",
    at: Optional[datetime] = None,
    resolver: ScheduleResolver = Depends(get_resolver),
):
    """
    List churches around a point with their next Mass time today.

    ``at`` overrides the reference time; naive values are read as local time.
    """
    return await _nearby_response(LocationModel(lat=lat, lon=lon), resolver, radius, sort, at)


@app.get("/venues/search", response_model=VenuesResponse)
async def search_venues(
    q: str = Query(..., min_length=1),
    radius: int = Query(DEFAULT_RADIUS_M, gt=0, le=50000),
    sort: Literal["distance", "time"] = "distance",
    at: Optional[datetime] = None,
    resolver: ScheduleResolver = Depends(get_resolver),
):
    """Geocode ``q`` and list churches around the result."""
    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(executor, geocode_location, q)
    if result is None:
        raise HTTPException(status_code=404, detail=LOCATION_NOT_FOUND)

    location = LocationModel(lat=result.lat, lon=result.lon, display_name=result.display_name)
    return await _nearby_response(location, resolver, radius, sort, at)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Mass Times Finder API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
