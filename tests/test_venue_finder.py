from unittest.mock import patch
import os
import sys
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ingest.schemas import Venue
from ingest.venue_finder import (
    UNKNOWN_NAME,
    decorate_venue,
    find_nearby_venues,
    is_excluded,
    sort_venues,
    venue_from_element,
)
from schedules.resolver import ScheduleResolver
from schedules.table import build_schedule_table

ORIGIN = (22.28, 114.16)
SUNDAY_MORNING = datetime(2025, 1, 5, 9, 30, tzinfo=ZoneInfo("Asia/Hong_Kong"))

ELEMENTS = [
    {
        "type": "node",
        "id": 1,
        "lat": 22.279,
        "lon": 114.16,
        "tags": {"name": "St. Joseph's Church", "addr:housenumber": "37", "addr:street": "Garden Road"},
    },
    {"type": "way", "id": 2, "center": {"lat": 22.30, "lon": 114.17}, "tags": {"name": "Rosary Church"}},
    {"type": "node", "id": 3, "lat": 22.281, "lon": 114.16, "tags": {"name": "Kowloon Methodist Church"}},
    {"type": "node", "id": 4, "lat": 22.29, "lon": 114.16, "tags": {}},
    {"type": "relation", "id": 5, "tags": {"name": "St. Teresa's Church"}},
]


@pytest.fixture
def resolver():
    table = build_schedule_table(
        {
            "st josephs": {
                "originalName": "St. Joseph's Church",
                "schedule": [{"type": "Sunday Masses", "time": "8:00am, 10:00am, 12:00 noon, 6:00pm"}],
            },
            "rosary": {
                "originalName": "Rosary Church",
                "schedule": [{"type": "Sunday Masses", "time": "7:00am, 9:00am, 11:00am"}],
            },
        }
    )
    return ScheduleResolver(table)


def find(resolver, **kwargs):
    with patch("ingest.venue_finder.fetch_places_of_worship", return_value=ELEMENTS) as mock_fetch:
        venues = find_nearby_venues(*ORIGIN, resolver, now=SUNDAY_MORNING, **kwargs)
    return venues, mock_fetch


def test_venue_from_node():
    venue = venue_from_element(ELEMENTS[0], *ORIGIN)
    assert venue.id == 1
    assert venue.name == "St. Joseph's Church"
    assert (venue.lat, venue.lon) == (22.279, 114.16)
    assert venue.address == "37, Garden Road"
    assert venue.distance_km == 0.11
    assert venue.mass_schedule is None


def test_venue_from_way_uses_center():
    venue = venue_from_element(ELEMENTS[1], *ORIGIN)
    assert (venue.lat, venue.lon) == (22.30, 114.17)


def test_venue_without_name_or_coordinates():
    assert venue_from_element(ELEMENTS[3], *ORIGIN).name == UNKNOWN_NAME
    assert venue_from_element(ELEMENTS[4], *ORIGIN) is None


def test_is_excluded():
    assert is_excluded("Kowloon Methodist Church")
    assert is_excluded("Swatow Christian Church")
    assert not is_excluded("St. Joseph's Church")


def test_find_nearby_filters_and_decorates(resolver):
    venues, mock_fetch = find(resolver, radius=2000)

    mock_fetch.assert_called_once_with(22.28, 114.16, 2000)
    assert [v.id for v in venues] == [1, 4, 2]

    by_id = {v.id: v for v in venues}
    assert by_id[1].next_mass_time == 600
    assert by_id[1].mass_schedule.original_name == "St. Joseph's Church"
    assert by_id[2].next_mass_time == 660
    assert by_id[4].mass_schedule is None
    assert by_id[4].next_mass_time is None


def test_find_nearby_sorted_by_time(resolver):
    venues, _ = find(resolver, sort="time")
    assert [v.id for v in venues] == [1, 2, 4]


def test_decoration_order_does_not_matter(resolver):
    venues = [v for v in (venue_from_element(e, *ORIGIN) for e in ELEMENTS) if v]
    forward = {v.id: v for v in (decorate_venue(v, resolver, SUNDAY_MORNING) for v in venues)}
    backward = {v.id: v for v in (decorate_venue(v, resolver, SUNDAY_MORNING) for v in reversed(venues))}
    assert forward == backward


def test_bilingual_name_gets_schedule(resolver):
    element = {"type": "node", "id": 6, "lat": 22.30, "lon": 114.17, "tags": {"name": "玫瑰堂 Rosary Church"}}
    venue = decorate_venue(venue_from_element(element, *ORIGIN), resolver, SUNDAY_MORNING)
    assert venue.mass_schedule.original_name == "Rosary Church"
    assert venue.next_mass_time == 660


def test_decorate_returns_new_record(resolver):
    venue = venue_from_element(ELEMENTS[0], *ORIGIN)
    decorated = decorate_venue(venue, resolver, SUNDAY_MORNING)
    assert venue.next_mass_time is None
    assert decorated.next_mass_time == 600


def test_no_more_masses_today(resolver):
    late = SUNDAY_MORNING.replace(hour=23)
    with patch("ingest.venue_finder.fetch_places_of_worship", return_value=ELEMENTS[:2]):
        venues = find_nearby_venues(*ORIGIN, resolver, now=late)
    assert all(v.mass_schedule is not None for v in venues)
    assert all(v.next_mass_time is None for v in venues)


def test_sort_by_time_puts_venues_without_mass_last():
    venues = [
        Venue(id=1, name="A", lat=0, lon=0, distance_km=0.5),
        Venue(id=2, name="B", lat=0, lon=0, distance_km=2.0, next_mass_time=1080),
        Venue(id=3, name="C", lat=0, lon=0, distance_km=1.0, next_mass_time=1080),
        Venue(id=4, name="D", lat=0, lon=0, distance_km=3.0, next_mass_time=420),
    ]
    assert [v.id for v in sort_venues(venues, "time")] == [4, 3, 2, 1]
    assert [v.id for v in sort_venues(venues, "distance")] == [1, 3, 2, 4]


def test_sort_rejects_unknown_option():
    with pytest.raises(ValueError):
        sort_venues([], "name")
