"""User repository for database operations"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, OperationFailure

from usergraph.dtos.user import CreateUserInput, UpdateUserInput, User, to_user
from usergraph.entities.user import USERS_COLLECTION
from usergraph.exceptions import (
    EmailAlreadyExistsError,
    InvalidUserInputError,
    UserPersistenceError,
)

from .base import BaseRepository

logger = logging.getLogger(__name__)

# Fields a client may change after creation
UPDATABLE_FIELDS = ("name", "email", "age")
REQUIRED_FIELDS = frozenset({"name", "email"})


def _utc_now() -> datetime:
    # BSON dates only keep milliseconds
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class UserRepository(BaseRepository[User]):
    """Repository for user entities"""

    def __init__(self, db: Optional[Database]):
        super().__init__(db, USERS_COLLECTION)

    def _to_model(self, doc: Dict[str, Any]) -> User:
        return to_user(doc)

    def get_all(self) -> List[User]:
        """List every user in natural collection order."""
        return self.find_many({})

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.find_by_id(user_id)

    def create(self, data: CreateUserInput) -> User:
        """Insert a new user and return it as read back from the collection."""
        user_doc = data.model_dump(exclude_none=True)
        user_doc["createdAt"] = _utc_now()

        try:
            result = self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            raise EmailAlreadyExistsError(data.email) from e

        created = self.find_by_id(result.inserted_id)
        if created is None:
            raise UserPersistenceError(
                f"Failed to create user: {result.inserted_id} not found after insert"
            )
        logger.info("Created user %s", created.id)
        return created

    def update(self, data: UpdateUserInput) -> Optional[User]:
        """
        Apply a partial update to a user.

        Only fields explicitly set on ``data`` are written. Passing ``age=None``
        removes the stored age. Returns None for malformed or unknown ids.
        """
        identifier = self.parse_object_id(data.id)
        if identifier is None:
            return None

        update = self._build_update(data)
        if not update:
            return self.find_by_id(identifier)

        try:
            return self.find_one_and_update({"_id": identifier}, update)
        except DuplicateKeyError as e:
            raise EmailAlreadyExistsError(data.email) from e

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID; False when the id is malformed or unknown."""
        return self.delete_one(user_id)

    def ensure_indexes(self) -> None:
        """Create the email uniqueness index and the createdAt ordering index."""
        self._create_index([("email", ASCENDING)], name="email_unique", unique=True)
        self._create_index([("createdAt", DESCENDING)], name="created_at_desc")
        logger.info("User indexes ensured")

    def _create_index(self, keys: List[tuple], name: str, **options: Any) -> None:
        try:
            self.collection.create_index(keys, name=name, **options)
            logger.debug("Created index: %s", name)
        except OperationFailure as e:
            # Index may already exist with different options
            if "already exists" not in str(e):
                raise
            logger.warning("Index %s already exists with different options: %s", name, e)

    @staticmethod
    def _build_update(data: UpdateUserInput) -> Dict[str, Dict[str, Any]]:
        set_fields: Dict[str, Any] = {}
        unset_fields: Dict[str, str] = {}

        for field in UPDATABLE_FIELDS:
            if field not in data.model_fields_set:
                continue
            value = getattr(data, field)
            if value is not None:
                set_fields[field] = value
            elif field in REQUIRED_FIELDS:
                raise InvalidUserInputError(f"Field '{field}' cannot be null")
            else:
                unset_fields[field] = ""

        update: Dict[str, Dict[str, Any]] = {}
        if set_fields:
            update["$set"] = set_fields
        if unset_fields:
            update["$unset"] = unset_fields
        return update
