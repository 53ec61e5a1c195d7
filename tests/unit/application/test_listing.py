"""
Name: Listing Query Parsing Tests

Responsibilities:
  - Validate maxAmount, sortBy, sortOrder and time bounds
  - Check defaults (createdAt desc, active users only, no limit)
"""

from datetime import datetime, timezone

import pytest

from divelog.application.usecases import ListingQuery, parse_listing_query
from divelog.application.usecases.listing import parse_bool_flag, parse_timestamp
from divelog.application.usecases.results import ServiceErrorCode
from divelog.domain.entities import LOG_SORT_FIELDS, USER_SORT_FIELDS

pytestmark = pytest.mark.unit


def _parse(**kwargs):
    return parse_listing_query(
        ListingQuery(**kwargs), LOG_SORT_FIELDS, with_time_bounds=True
    )


def test_defaults():
    options, error = _parse()
    assert error is None
    assert options.sort.field == "created_at"
    assert options.sort.descending is True
    assert options.max_amount is None
    assert options.active_users_only is True
    assert options.start_from is None and options.start_to is None


def test_sort_by_maps_camel_case_to_attribute():
    options, _ = parse_listing_query(
        ListingQuery(sort_by="fullName", sort_order="ASC"), USER_SORT_FIELDS
    )
    assert options.sort.field == "full_name"
    assert options.sort.descending is False


def test_unknown_sort_by_is_rejected():
    options, error = parse_listing_query(
        ListingQuery(sort_by="password"), USER_SORT_FIELDS
    )
    assert options is None
    assert error.code == ServiceErrorCode.VALIDATION_ERROR
    assert error.message.startswith('Invalid sortBy "password". Allowed values: ')
    assert "fullName" in error.message


def test_log_fields_are_not_user_fields():
    _, error = parse_listing_query(ListingQuery(sort_by="maxDepth"), USER_SORT_FIELDS)
    assert error is not None


def test_invalid_sort_order():
    _, error = _parse(sort_order="sideways")
    assert error.message == "Invalid sortOrder. Allowed values: asc, desc"


@pytest.mark.parametrize("raw,expected", [("3", 3), ("0", None), ("", None)])
def test_max_amount(raw, expected):
    options, error = _parse(max_amount=raw)
    assert error is None
    assert options.max_amount == expected


@pytest.mark.parametrize("raw", ["-1", "abc", "2.5"])
def test_invalid_max_amount(raw):
    _, error = _parse(max_amount=raw)
    assert error.message == "Invalid maxAmount. Please provide a non-negative integer."


def test_truncate():
    options, _ = _parse(max_amount="2")
    assert options.truncate([1, 2, 3]) == [1, 2]


def test_time_bounds_parsed_as_aware():
    options, error = _parse(ts_start="2024-06-01", ts_end="2024-06-02T10:00:00+02:00")
    assert error is None
    assert options.start_from == datetime(2024, 6, 1, tzinfo=timezone.utc)
    assert options.start_to.utcoffset().total_seconds() == 7200


def test_zulu_suffix_accepted():
    options, error = _parse(
        ts_start="2024-01-01T00:00:00.000Z", ts_end="2024-01-02T12:30:00Z"
    )
    assert error is None
    assert options.start_from == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert options.start_to == datetime(2024, 1, 2, 12, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("field,message_key", [("ts_start", "tsStart"), ("ts_end", "tsEnd")])
def test_invalid_time_bound(field, message_key):
    _, error = _parse(**{field: "yesterday"})
    assert error.message == (
        f"Invalid {message_key} format. Please provide a valid datetime string."
    )


def test_time_bounds_ignored_for_users():
    options, error = parse_listing_query(
        ListingQuery(ts_start="garbage"), USER_SORT_FIELDS
    )
    assert error is None
    assert options.start_from is None


@pytest.mark.parametrize(
    "raw,expected",
    [(None, True), ("", True), ("true", True), ("1", True), ("false", False), ("no", False)],
)
def test_bool_flag(raw, expected):
    assert parse_bool_flag(raw) is expected


def test_parse_timestamp_naive_becomes_utc():
    assert parse_timestamp("2024-01-01T00:00:00").tzinfo == timezone.utc
    assert parse_timestamp("not a date") is None
