import os
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import bcrypt
from bson import ObjectId

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "test_db")
os.environ.setdefault("RUN_STARTUP_MIGRATIONS", "false")

from shared.models.users_model import UsersModel


@pytest.fixture
def mock_mongo_collection() -> MagicMock:
    collection = MagicMock()
    collection.name = "mock_collection"
    collection.find_one = MagicMock(return_value=None)
    collection.insert_one = MagicMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.find = MagicMock(return_value=MockCursor([]))
    collection.find_one_and_update = MagicMock(return_value=None)
    collection.update_one = MagicMock(return_value=MagicMock(matched_count=0, modified_count=0))
    collection.update_many = MagicMock(return_value=MagicMock(matched_count=0, modified_count=0))
    collection.delete_one = MagicMock(return_value=MagicMock(deleted_count=0))
    return collection


@pytest.fixture
def mock_mongo_client() -> MagicMock:
    client = MagicMock()
    client.admin.command = MagicMock(return_value={"ok": 1})
    return client


@pytest.fixture
def user_password() -> str:
    return "correct_password"


@pytest.fixture
def sample_user_doc(user_password: str) -> dict:
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "name": "Test User",
        "email": "test@example.com",
        "password": bcrypt.hashpw(user_password.encode(), bcrypt.gensalt(rounds=10)).decode(),
        "image": "https://i.ibb.co/old.png",
        "provider": "credentials",
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_google_user_doc() -> dict:
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "name": "Google User",
        "email": "google@example.com",
        "image": "https://lh3.googleusercontent.com/a/photo.jpg",
        "googleId": "google_abc",
        "provider": "google",
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_user(sample_user_doc: dict) -> UsersModel:
    return UsersModel.from_document(sample_user_doc)


@pytest.fixture
def sample_product_doc() -> dict:
    return {
        "_id": ObjectId(),
        "title": "Yamaha R15",
        "brand": "Yamaha",
        "model": "V4",
        "price": 4500,
        "image": "https://i.ibb.co/r15.png",
        "category": "Bike",
        "shortDescription": "Sport bike, one owner",
        "userId": "user_123",
        "createdAt": datetime.now(timezone.utc),
    }


class MockCursor:
    """Minimal pymongo cursor stand-in (sort/skip/limit/iter)."""

    def __init__(self, data: list):
        self._data = list(data)
        self._skip = 0
        self._limit = 0
        self.sorted_by = None

    def sort(self, field: str, direction: int):
        self.sorted_by = (field, direction)
        return self

    def skip(self, n: int):
        self._skip = n
        return self

    def limit(self, n: int):
        self._limit = n
        return self

    def __iter__(self):
        data = self._data[self._skip:]
        if self._limit:
            data = data[:self._limit]
        return iter(data)


@pytest.fixture
def mock_cursor_factory():
    def factory(data: list):
        def mock_find(*args, **kwargs):
            return MockCursor(data)
        return mock_find
    return factory
