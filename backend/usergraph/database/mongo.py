from __future__ import annotations

"""
MongoDB connection helpers.
"""

import logging
from typing import Callable

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from usergraph.config import Settings, settings
from usergraph.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseNotConnectedError,
)

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Process-wide MongoDB connection with an explicit lifecycle.

    ``connect()`` is called once at startup; request handlers then share the
    same ``Database`` handle through ``get_database()`` until ``close()``.
    PyMongo pools sockets internally, so the handle is safe to use from
    concurrent requests.
    """

    def __init__(
        self,
        config: Settings,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ):
        self.config = config
        self._client_factory = client_factory
        self._client: MongoClient | None = None
        self._db: Database | None = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def connect(self) -> Database:
        """Connect and return the database handle, reusing an open connection."""
        if self._db is not None:
            return self._db

        uri = self.config.MONGODB_URI
        if not uri:
            raise ConfigurationError("MONGODB_URI is not set")
        db_name = self.config.MONGODB_DB_NAME

        logger.info("Connecting to MongoDB...")
        client = self._client_factory(uri)
        try:
            client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            client.close()
            raise DatabaseConnectionError(f"Could not connect to MongoDB: {e}") from e

        self._client = client
        self._db = client[db_name]
        logger.info("Connected to MongoDB database: %s", db_name)
        return self._db

    def get_database(self) -> Database:
        if self._db is None:
            raise DatabaseNotConnectedError(
                "Database not initialized. Call connect() first."
            )
        return self._db

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._db = None
        logger.info("MongoDB connection closed")


connection = MongoConnection(settings)

