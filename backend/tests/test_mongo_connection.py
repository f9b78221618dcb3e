from unittest.mock import MagicMock

import mongomock
import pytest
from pymongo.errors import ServerSelectionTimeoutError

from usergraph.config import Settings
from usergraph.database.mongo import MongoConnection
from usergraph.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseNotConnectedError,
)


def test_connect_requires_uri():
    connection = MongoConnection(Settings(MONGODB_URI=None), client_factory=MagicMock())

    with pytest.raises(ConfigurationError):
        connection.connect()

    assert not connection.is_connected


def test_get_database_before_connect_fails(connection):
    with pytest.raises(DatabaseNotConnectedError):
        connection.get_database()


def test_connect_is_idempotent(settings):
    factory = MagicMock(wraps=mongomock.MongoClient)
    connection = MongoConnection(settings, client_factory=factory)

    first = connection.connect()
    second = connection.connect()

    assert first is second
    assert connection.get_database() is first
    assert first.name == settings.MONGODB_DB_NAME
    factory.assert_called_once_with(settings.MONGODB_URI)


def test_unreachable_server_raises_connection_error(settings):
    client = MagicMock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers available")
    connection = MongoConnection(settings, client_factory=MagicMock(return_value=client))

    with pytest.raises(DatabaseConnectionError):
        connection.connect()

    client.close.assert_called_once()
    assert not connection.is_connected


def test_close_is_idempotent(connection):
    connection.close()

    connection.connect()
    connection.close()
    connection.close()

    with pytest.raises(DatabaseNotConnectedError):
        connection.get_database()


def test_db_name_accepts_short_alias(monkeypatch):
    monkeypatch.delenv("MONGODB_DB_NAME", raising=False)
    monkeypatch.setenv("DB_NAME", "people")

    assert Settings().MONGODB_DB_NAME == "people"
