import os
import sys

import pytest

# Ensure the project root is on the import path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from schedules.times import format_minutes, parse_times


def test_bare_morning_hours_stay_morning():
    assert list(parse_times("7:00, 8:00, 6:00pm")) == [420, 480, 1080]


def test_bare_early_hours_read_as_afternoon():
    assert list(parse_times("1:00, 2:00")) == [780, 840]


def test_bare_eleven_stays_morning():
    assert list(parse_times("11:00")) == [660]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("9am", [540]),
        ("12:30pm", [750]),
        ("12:00am", [0]),
        ("12:00 noon", [720]),
        ("12 noon", [720]),
        ("6:00 p.m.", [1080]),
        ("10:30 A.M.", [630]),
        ("5:30 PM", [1050]),
        ("13:00", [780]),
        ("0:30", [30]),
    ],
)
def test_meridiem_variants(text, expected):
    assert list(parse_times(text)) == expected


def test_times_in_order_of_appearance():
    text = "Mon to Fri 7:00am, 12:30pm; Sat 8:00am"
    assert list(parse_times(text)) == [420, 750, 480]


def test_text_without_times():
    assert list(parse_times("No Mass during renovation")) == []
    assert list(parse_times("")) == []


def test_out_of_range_tokens_skipped():
    assert list(parse_times("Dec 25")) == []
    assert list(parse_times("7:75")) == []


def test_parse_times_is_single_pass():
    times = parse_times("7:00, 9:00")
    assert list(times) == [420, 540]
    assert list(times) == []


@pytest.mark.parametrize(
    "minutes,expected",
    [
        (0, "12:00 AM"),
        (420, "7:00 AM"),
        (600, "10:00 AM"),
        (720, "12:00 PM"),
        (780, "1:00 PM"),
        (1439, "11:59 PM"),
    ],
)
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected
