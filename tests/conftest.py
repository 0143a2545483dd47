from unittest.mock import MagicMock

import pytest
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from bookstore_mongodb.connect_db import MONGO_URI
from bookstore_mongodb.insert_books import insert_books

TEST_DB_NAME = "plp_bookstore_test"


@pytest.fixture
def collection():
    """A stand-in for a pymongo Collection that records every call."""
    coll = MagicMock()
    coll.name = "books"
    return coll


@pytest.fixture(scope="session")
def live_client():
    client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=1000)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        pytest.skip(f"MongoDB not reachable at {MONGO_URI}: {e}")
    yield client
    client.drop_database(TEST_DB_NAME)
    client.close()


@pytest.fixture
def live_books(live_client):
    """The books collection of a scratch database, freshly seeded."""
    coll = live_client[TEST_DB_NAME]["books"]
    coll.drop()
    insert_books(coll)
    return coll
