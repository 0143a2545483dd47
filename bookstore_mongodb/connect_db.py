# connect_db.py - MongoDB connection settings and client lifecycle
import logging
import os
from contextlib import contextmanager
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.errors import PyMongoError

load_dotenv()
MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "plp_bookstore")
COLLECTION_NAME = os.getenv("COLLECTION_NAME", "books")
TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

logger = logging.getLogger(__name__)


def get_client() -> MongoClient:
    """Create a new client. Nothing is sent to the server until first use."""
    return MongoClient(MONGO_URI, serverSelectionTimeoutMS=TIMEOUT_MS)


def ping(client: MongoClient) -> None:
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        logger.error("Failed to connect to MongoDB at %s: %s", MONGO_URI, e)
        raise


def get_database(client: Optional[MongoClient] = None):
    if client is None:
        client = get_client()
    return client[DB_NAME]


def get_books_collection(client: MongoClient):
    return get_database(client)[COLLECTION_NAME]


@contextmanager
def mongo_client():
    """Yield a client and close it on every exit path."""
    client = get_client()
    try:
        yield client
    finally:
        client.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    with mongo_client() as client:
        ping(client)
        print(f"✅ Connected to MongoDB database: {DB_NAME}")
