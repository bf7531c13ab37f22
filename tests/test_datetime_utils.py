from datetime import date, datetime
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from helpers.datetime_utils import (
    combine_local,
    date_range,
    is_date_only,
    parse_local_datetime,
    start_of_week,
    to_absolute_timestamp,
    weekday_name,
)


def test_weekday_name_is_locale_independent():
    assert weekday_name(date(2024, 1, 1)) == "Monday"
    assert weekday_name(date(2024, 1, 7)) == "Sunday"


def test_start_of_week_sunday_and_monday():
    assert start_of_week(date(2024, 1, 3)) == date(2023, 12, 31)
    assert start_of_week(date(2023, 12, 31)) == date(2023, 12, 31)
    assert start_of_week(date(2024, 1, 3), first_weekday=0) == date(2024, 1, 1)


def test_date_range_is_consecutive():
    days = date_range(date(2024, 2, 27), 4)
    assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
    assert date_range(date(2024, 1, 1), 0) == []


def test_combine_local_keeps_time_text():
    assert combine_local(date(2024, 1, 1), "09:05:00") == "2024-01-01T09:05:00"


def test_parse_local_datetime_variants():
    assert parse_local_datetime("2024-01-01") == datetime(2024, 1, 1)
    assert parse_local_datetime("2024-01-01T10:15:00").hour == 10
    assert parse_local_datetime("2024-01-01T10:15:00Z").tzinfo is not None
    assert parse_local_datetime("31.12.2023") is None
    assert parse_local_datetime("") is None
    assert parse_local_datetime(None) is None


def test_is_date_only():
    assert is_date_only("2024-01-01")
    assert not is_date_only("2024-01-01T09:00:00")
    assert not is_date_only(None)


def test_to_absolute_timestamp_converts_to_utc():
    assert to_absolute_timestamp("2024-01-01T09:00:00+02:00") == "2024-01-01T07:00:00.000Z"
    assert to_absolute_timestamp("2024-01-01T09:00:00Z") == "2024-01-01T09:00:00.000Z"
    assert to_absolute_timestamp("soon") is None
    assert to_absolute_timestamp(None) is None


def test_combine_local_without_time_is_none():
    assert combine_local(date(2024, 1, 1), None) is None
