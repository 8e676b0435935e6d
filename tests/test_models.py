"""
Request decoding and record encoding.
"""

from datetime import datetime, timedelta, timezone

import pytest

from mailinglist.core.errors import InvalidArgument, StorageFailure
from mailinglist.core.models import BatchQuery, EmailEntry, format_timestamp, parse_timestamp


def test_from_json_matches_keys_case_insensitively():
    entry = EmailEntry.from_json({"id": 3, "EMAIL": "a@example.com", "optout": True})

    assert entry.id == 3
    assert entry.email == "a@example.com"
    assert entry.opt_out is True
    assert entry.confirmed_at is None


def test_from_json_empty_object_gives_zero_values():
    entry = EmailEntry.from_json({})
    assert entry == EmailEntry(id=None, email="", confirmed_at=None, opt_out=False)


@pytest.mark.parametrize("payload", [
    {"Email": 5},
    {"Id": "1"},
    {"Id": True},
    {"OptOut": "yes"},
    {"ConfirmedAt": 0},
    {"ConfirmedAt": "yesterday"},
])
def test_from_json_rejects_wrong_types(payload):
    with pytest.raises(InvalidArgument):
        EmailEntry.from_json(payload)


def test_from_json_rejects_non_object():
    with pytest.raises(InvalidArgument):
        EmailEntry.from_json(["a@example.com"])


def test_to_json_shape():
    entry = EmailEntry(id=1, email="a@example.com",
                       confirmed_at=datetime(2024, 5, 1, tzinfo=timezone.utc), opt_out=False)

    assert entry.to_json() == {
        "Id": 1,
        "Email": "a@example.com",
        "ConfirmedAt": "2024-05-01T00:00:00Z",
        "OptOut": False,
    }


def test_parse_timestamp_variants():
    assert parse_timestamp("2024-05-01T12:00:00Z") == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
    # naive values are UTC
    assert parse_timestamp("2024-05-01T12:00:00") == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)
    offset = parse_timestamp("2024-05-01T14:00:00+02:00")
    assert offset == datetime(2024, 5, 1, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [
    "9999-12-31T23:59:59-01:00",
    "0001-01-01T00:00:00+01:00",
])
def test_parse_timestamp_rejects_values_out_of_range_in_utc(value):
    with pytest.raises(InvalidArgument):
        parse_timestamp(value)


def test_from_row_with_unreadable_timestamp_is_storage_failure():
    with pytest.raises(StorageFailure):
        EmailEntry.from_row((1, "bad@example.com", 10 ** 15, 0))


def test_format_timestamp_converts_to_utc():
    value = datetime(2024, 5, 1, 14, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(value) == "2024-05-01T12:00:00Z"


# ---------------------------------------------------------------------------
# BatchQuery
# ---------------------------------------------------------------------------

def test_batch_query_validate_accepts_positive_values():
    query = BatchQuery.from_json({"Page": 3, "Count": 2}).validate()
    assert (query.page, query.count) == (3, 2)


@pytest.mark.parametrize("payload", [
    {},
    {"Page": 1, "Count": 0},
    {"Page": -1, "Count": 2},
    {"Page": 0, "Count": 10},
])
def test_batch_query_validate_rejects(payload):
    with pytest.raises(InvalidArgument) as excinfo:
        BatchQuery.from_json(payload).validate()
    assert "must be > 0" in str(excinfo.value)
