from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import BaseEntity

USERS_COLLECTION = "users"


class UserRecord(BaseEntity):
    """User document as stored in the ``users`` collection."""

    name: str
    email: str
    age: Optional[int] = None
    created_at: datetime = Field(alias="createdAt")
