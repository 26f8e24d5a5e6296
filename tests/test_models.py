"""
Unit tests for the session record format and API models.
"""

import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from gatehouse.modules.api import SessionResponse
from gatehouse.modules.session import (
    Session,
    SessionDecodingError,
    decode_session,
    encode_session,
)


@pytest.mark.parametrize(
    "start,duration",
    [
        (datetime(2024, 1, 1, 12, 0, tzinfo=UTC), timedelta(minutes=10)),
        (datetime(2024, 6, 30, 23, 59, 59, 999999, tzinfo=UTC), timedelta(microseconds=1)),
        (datetime(2031, 2, 3, 4, 5, 6, 123456, tzinfo=timezone(timedelta(hours=3))), timedelta(days=30)),
    ],
)
def test_round_trip_preserves_all_fields(start, duration):
    """Test encode then decode yields an equal session, microseconds included."""
    session = Session(id="sid-1", user_id="alice", start_time=start, end_time=start + duration)

    decoded = decode_session(encode_session(session))

    assert decoded.id == session.id
    assert decoded.user_id == session.user_id
    assert decoded.start_time == session.start_time
    assert decoded.end_time == session.end_time
    assert decoded.end_time > decoded.start_time


def test_encoded_record_is_field_tagged_json():
    """Test the persisted record is a JSON object of the four attributes."""
    start = datetime(2024, 1, 1, 12, 0, 0, 500000, tzinfo=UTC)
    session = Session(id="sid-1", user_id="bob", start_time=start, end_time=start + timedelta(hours=1))

    record = json.loads(encode_session(session))

    assert set(record) == {"id", "user_id", "start_time", "end_time"}
    assert record["user_id"] == "bob"
    assert record["start_time"].startswith("2024-01-01T12:00:00.5")


def test_decode_naive_timestamps_as_utc():
    """Test records without offsets are read as UTC."""
    payload = json.dumps(
        {
            "id": "sid-1",
            "user_id": "carol",
            "start_time": "2024-01-01T12:00:00",
            "end_time": "2024-01-01T12:10:00",
        }
    )

    session = decode_session(payload)

    assert session.start_time == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    assert session.is_expired(datetime(2024, 1, 1, 12, 10, 1, tzinfo=UTC))


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"not json",
        b"[]",
        json.dumps({"id": "sid-1", "user_id": "x"}).encode(),
        json.dumps(
            {
                "id": "sid-1",
                "user_id": "x",
                "start_time": "2024-01-01T12:10:00Z",
                "end_time": "2024-01-01T12:00:00Z",
            }
        ).encode(),
        json.dumps(
            {"id": "sid-1", "user_id": "x", "start_time": "yesterday", "end_time": "today"}
        ).encode(),
    ],
)
def test_decode_rejects_invalid_records(payload):
    """Test malformed or inconsistent records raise SessionDecodingError."""
    with pytest.raises(SessionDecodingError) as exc_info:
        decode_session(payload, "sid-1")

    assert exc_info.value.session_id == "sid-1"


def test_decode_without_key_reports_no_session_id():
    with pytest.raises(SessionDecodingError) as exc_info:
        decode_session(b"{not json")

    assert exc_info.value.session_id is None


def test_session_requires_end_after_start():
    """Test a session cannot be built with end_time <= start_time."""
    now = datetime.now(UTC)

    with pytest.raises(ValueError):
        Session(id="sid-1", user_id="alice", start_time=now, end_time=now)


def test_session_response_from_session():
    """Test the API response mirrors the session fields."""
    start = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    session = Session(id="sid-1", user_id="alice", start_time=start, end_time=start + timedelta(minutes=10))

    response = SessionResponse.from_session(session)

    assert response.session_id == "sid-1"
    assert response.user_id == "alice"
    assert response.end_time == session.end_time
