import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient

from usergraph.config import Settings
from usergraph.database.mongo import MongoConnection
from usergraph.main import create_app
from usergraph.repositories.user import UserRepository


@pytest.fixture()
def settings() -> Settings:
    # mongomock clients share storage per host, so isolate each test by name
    return Settings(
        MONGODB_URI="mongodb://localhost:27017",
        MONGODB_DB_NAME=f"usergraph_test_{uuid.uuid4().hex}",
    )


@pytest.fixture()
def db(settings: Settings):
    client = mongomock.MongoClient()
    yield client[settings.MONGODB_DB_NAME]
    client.drop_database(settings.MONGODB_DB_NAME)


@pytest.fixture()
def repository(db) -> UserRepository:
    repo = UserRepository(db)
    repo.ensure_indexes()
    return repo


@pytest.fixture()
def connection(settings: Settings) -> MongoConnection:
    return MongoConnection(settings, client_factory=mongomock.MongoClient)


@pytest.fixture()
def client(connection: MongoConnection):
    app = create_app(connection=connection)
    with TestClient(app) as test_client:
        yield test_client
