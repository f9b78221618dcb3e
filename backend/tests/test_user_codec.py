"""Unit tests for the stored-document to User translation."""

from datetime import datetime, timedelta, timezone

from bson import ObjectId

from usergraph.dtos.user import format_timestamp, to_user


def test_to_user_translates_all_fields():
    oid = ObjectId()
    doc = {
        "_id": oid,
        "name": "Alice",
        "email": "alice@example.com",
        "age": 25,
        "createdAt": datetime(2024, 5, 1, 10, 11, 12, 345000),
    }

    user = to_user(doc)

    assert user.id == str(oid)
    assert user.name == "Alice"
    assert user.email == "alice@example.com"
    assert user.age == 25
    assert user.created_at == "2024-05-01T10:11:12.345Z"


def test_to_user_keeps_missing_age_absent():
    doc = {
        "_id": ObjectId(),
        "name": "Bob",
        "email": "bob@example.com",
        "createdAt": datetime(2024, 1, 1),
    }

    user = to_user(doc)

    assert user.age is None
    assert user.created_at == "2024-01-01T00:00:00.000Z"


def test_format_timestamp_converts_aware_datetimes_to_utc():
    plus_two = timezone(timedelta(hours=2))
    value = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=plus_two)

    assert format_timestamp(value) == "2024-05-01T10:00:00.123Z"
