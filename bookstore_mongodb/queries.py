"""bookstore_mongodb/queries.py

Walk through the query set for the bookstore collection: basic CRUD,
filtering/projection/sorting/pagination, aggregation pipelines and indexing.
Every result is printed under a labelled header.

Seed the collection first with ``python -m bookstore_mongodb.insert_books``,
then run:

    python -m bookstore_mongodb.queries

Note that running it mutates the collection (price of "The Hobbit" is set to
16.99 and "Moby Dick" is deleted) and leaves two indexes behind.
"""
import logging

from bson import json_util
from pymongo import ASCENDING, DESCENDING

from bookstore_mongodb.connect_db import get_books_collection, mongo_client, ping

logger = logging.getLogger(__name__)

PAGE_SIZE = 5


def show(header: str, result) -> None:
    print(f"\n📌 {header}:")
    if isinstance(result, str):
        print(result)
    else:
        print(json_util.dumps(result, indent=2))


# --------------------------
# Basic CRUD
# --------------------------
def find_by_genre(collection, genre: str = "Fiction") -> list:
    return list(collection.find({"genre": genre}))


def find_published_after(collection, year: int = 1950) -> list:
    return list(collection.find({"published_year": {"$gt": year}}))


def find_by_author(collection, author: str = "George Orwell") -> list:
    return list(collection.find({"author": author}))


def update_price(collection, title: str = "The Hobbit", price: float = 16.99):
    """Set the price of the book with ``title`` and return the stored document."""
    collection.update_one({"title": title}, {"$set": {"price": price}})
    return collection.find_one({"title": title})


def delete_by_title(collection, title: str = "Moby Dick") -> int:
    result = collection.delete_one({"title": title})
    return result.deleted_count


def basic_crud(collection) -> None:
    show("Find all Fiction books", find_by_genre(collection))
    show("Find books published after 1950", find_published_after(collection))
    show("Find books by George Orwell", find_by_author(collection))
    show("Update price of 'The Hobbit' to 16.99", update_price(collection))

    deleted = delete_by_title(collection)
    show("Delete 'Moby Dick'", f"Deleted {deleted} document(s) titled 'Moby Dick'")
    show("Lookup 'Moby Dick' after delete", collection.find_one({"title": "Moby Dick"}))


# --------------------------
# Advanced queries
# --------------------------
def find_in_stock_published_after(collection, year: int = 2010) -> list:
    return list(collection.find({"in_stock": True, "published_year": {"$gt": year}}))


def find_title_author_price(collection) -> list:
    return list(collection.find({}, {"title": 1, "author": 1, "price": 1, "_id": 0}))


def sort_by_price(collection, direction: int = ASCENDING) -> list:
    return list(collection.find().sort("price", direction))


def find_page(collection, page: int, page_size: int = PAGE_SIZE) -> list:
    """Return the 1-based ``page`` of the collection in natural order.

    No sort is applied before skip/limit, so page boundaries follow whatever
    order the server returns and are not guaranteed stable between runs.
    """
    return list(collection.find().skip((page - 1) * page_size).limit(page_size))


def advanced_queries(collection) -> None:
    show("Find in-stock books published after 2010", find_in_stock_published_after(collection))
    show("Projection (title, author, price only)", find_title_author_price(collection))
    show("Sort by price ascending", sort_by_price(collection, ASCENDING))
    show("Sort by price descending", sort_by_price(collection, DESCENDING))
    show(f"Pagination - Page 1 ({PAGE_SIZE} books)", find_page(collection, 1))
    show(f"Pagination - Page 2 (next {PAGE_SIZE} books)", find_page(collection, 2))


# --------------------------
# Aggregation
# --------------------------
AVERAGE_PRICE_BY_GENRE = [
    {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
]

AUTHOR_WITH_MOST_BOOKS = [
    {"$group": {"_id": "$author", "count": {"$sum": 1}}},
    {"$sort": {"count": -1}},
    {"$limit": 1},
]

BOOKS_BY_DECADE = [
    {
        "$group": {
            "_id": {"$multiply": [{"$floor": {"$divide": ["$published_year", 10]}}, 10]},
            "count": {"$sum": 1},
        }
    },
    {"$sort": {"_id": 1}},
]


def average_price_by_genre(collection) -> list:
    return list(collection.aggregate(AVERAGE_PRICE_BY_GENRE))


def author_with_most_books(collection) -> list:
    return list(collection.aggregate(AUTHOR_WITH_MOST_BOOKS))


def books_by_decade(collection) -> list:
    return list(collection.aggregate(BOOKS_BY_DECADE))


def aggregations(collection) -> None:
    show("Average price of books by genre", average_price_by_genre(collection))
    show("Author with the most books", author_with_most_books(collection))
    show("Group books by publication decade", books_by_decade(collection))


# --------------------------
# Indexing
# --------------------------
def create_title_index(collection) -> str:
    return collection.create_index([("title", ASCENDING)])


def create_author_year_index(collection) -> str:
    return collection.create_index([("author", ASCENDING), ("published_year", DESCENDING)])


def explain_find_by_title(collection, title: str = "The Hobbit") -> dict:
    # Cursor.explain() takes no verbosity, so issue the explain command directly
    return collection.database.command(
        "explain",
        {"find": collection.name, "filter": {"title": title}},
        verbosity="executionStats",
    )


def indexing(collection) -> None:
    show("Creating index on title", create_title_index(collection))
    show("Creating compound index on author + published_year", create_author_year_index(collection))
    show(
        "Using explain() to check index performance for 'The Hobbit'",
        explain_find_by_title(collection),
    )


def run_queries() -> None:
    try:
        with mongo_client() as client:
            ping(client)
            print("Connected to MongoDB")

            collection = get_books_collection(client)
            basic_crud(collection)
            advanced_queries(collection)
            aggregations(collection)
            indexing(collection)
    except Exception:
        logger.exception("Error while running queries")
    finally:
        print("Connection closed")


def main():
    logging.basicConfig(level=logging.INFO)
    run_queries()


if __name__ == "__main__":
    main()
