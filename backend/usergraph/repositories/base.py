from __future__ import annotations

"""Base repository pattern for MongoDB operations"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from usergraph.exceptions import DatabaseNotConnectedError

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Base repository providing common CRUD operations for MongoDB collections"""

    def __init__(self, db: Optional[Database], collection_name: str):
        # Database objects do not support truth testing
        if db is None:
            raise DatabaseNotConnectedError(
                "Database not initialized. Call connect() first."
            )
        self.db = db
        self.collection: Collection = db[collection_name]

    @abstractmethod
    def _to_model(self, doc: Dict[str, Any]) -> T:
        """Convert a stored document to the repository's model"""

    def find_by_id(self, entity_id: str | ObjectId) -> Optional[T]:
        """Find a document by its ID"""
        identifier = self.parse_object_id(entity_id)
        if identifier is None:
            return None
        doc = self.collection.find_one({"_id": identifier})
        return self._to_model(doc) if doc else None

    def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
    ) -> List[T]:
        """Find multiple documents matching the query"""
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        return [self._to_model(doc) for doc in cursor if doc]

    def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
    ) -> Optional[T]:
        """
        Atomically find and update a document.

        Args:
            query: Filter to find the document
            update: Update operations (e.g., {"$set": {...}})

        Returns:
            The updated document, or None when nothing matched
        """
        doc = self.collection.find_one_and_update(
            query,
            update,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_model(doc) if doc else None

    def delete_one(self, entity_id: str | ObjectId) -> bool:
        """Delete a document by ID"""
        identifier = self.parse_object_id(entity_id)
        if identifier is None:
            return False
        result = self.collection.delete_one({"_id": identifier})
        return result.deleted_count == 1

    @staticmethod
    def parse_object_id(value: str | ObjectId | None) -> ObjectId | None:
        """Convert a string ID to ObjectId, or None if it is not a valid ObjectId"""
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        return None
