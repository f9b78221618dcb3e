"""User DTOs and the document-to-entity codec."""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from usergraph.entities.user import UserRecord


class User(BaseModel):
    """User as exposed to API clients."""

    id: str
    name: str
    email: str
    age: Optional[int] = None
    created_at: str


class CreateUserInput(BaseModel):
    name: str
    email: str
    age: Optional[int] = None


class UpdateUserInput(BaseModel):
    """Partial update. Only fields present in ``model_fields_set`` are applied."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[int] = None


def format_timestamp(value: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. ``2024-05-01T10:11:12.345Z``."""
    # PyMongo returns naive datetimes that are already UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_user(document: Mapping[str, Any]) -> User:
    """Translate a stored user document into the external ``User`` shape."""
    record = UserRecord.model_validate(document)
    return User(
        id=str(record.id),
        name=record.name,
        email=record.email,
        age=record.age,
        created_at=format_timestamp(record.created_at),
    )
