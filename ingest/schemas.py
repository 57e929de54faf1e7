"""Shared data models for the venue pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from schedules.table import ScheduleMatch


@dataclass(frozen=True)
class Venue:
    """A place of worship found near the search point."""

    id: int
    name: str
    lat: float
    lon: float
    address: str = ""
    distance_km: Optional[float] = None
    mass_schedule: Optional[ScheduleMatch] = None
    next_mass_time: Optional[int] = None  # minutes from midnight, None if no more Masses today

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "address": self.address,
            "distance_km": self.distance_km,
            "mass_schedule": self.mass_schedule.to_dict() if self.mass_schedule else None,
            "next_mass_time": self.next_mass_time,
        }


@dataclass(frozen=True)
class GeocodeResult:
    lat: float
    lon: float
    display_name: str
