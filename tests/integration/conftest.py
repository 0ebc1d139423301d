import pytest
from typing import Generator
from testcontainers.mongodb import MongoDbContainer
from pymongo import MongoClient

from shared.persistance.mongo_db import ensure_indexes


@pytest.fixture(scope="session")
def mongodb_container() -> Generator[MongoDbContainer, None, None]:
    container = MongoDbContainer("mongo:7.0")
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"MongoDB container unavailable: {e}")
    yield container
    container.stop()


@pytest.fixture(scope="session")
def mongodb_uri(mongodb_container: MongoDbContainer) -> str:
    return mongodb_container.get_connection_url()


@pytest.fixture(scope="session")
def mongodb_client(mongodb_uri: str) -> Generator[MongoClient, None, None]:
    client = MongoClient(mongodb_uri)
    yield client
    client.close()


@pytest.fixture
def test_database(mongodb_client: MongoClient):
    db_name = "test_ridezone"
    db = mongodb_client[db_name]
    yield db
    mongodb_client.drop_database(db_name)


@pytest.fixture
def users_collection(test_database):
    collection = test_database["users"]
    ensure_indexes(collection)
    return collection


@pytest.fixture
def products_collection(test_database):
    return test_database["products"]
