# insert_books.py - seed the books collection with the sample catalogue
import logging

from bookstore_mongodb.connect_db import (
    COLLECTION_NAME,
    DB_NAME,
    get_books_collection,
    mongo_client,
    ping,
)

logger = logging.getLogger(__name__)

BOOKS = [
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "genre": "Fiction",
        "published_year": 1960,
        "price": 12.99,
        "in_stock": True,
        "pages": 336,
        "publisher": "J. B. Lippincott & Co.",
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "genre": "Dystopian",
        "published_year": 1949,
        "price": 10.99,
        "in_stock": True,
        "pages": 328,
        "publisher": "Secker & Warburg",
    },
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "genre": "Fiction",
        "published_year": 1925,
        "price": 9.99,
        "in_stock": True,
        "pages": 180,
        "publisher": "Charles Scribner's Sons",
    },
    {
        "title": "Brave New World",
        "author": "Aldous Huxley",
        "genre": "Dystopian",
        "published_year": 1932,
        "price": 11.50,
        "in_stock": False,
        "pages": 311,
        "publisher": "Chatto & Windus",
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "genre": "Fantasy",
        "published_year": 1937,
        "price": 14.99,
        "in_stock": True,
        "pages": 310,
        "publisher": "George Allen & Unwin",
    },
    {
        "title": "The Catcher in the Rye",
        "author": "J.D. Salinger",
        "genre": "Fiction",
        "published_year": 1951,
        "price": 8.99,
        "in_stock": True,
        "pages": 224,
        "publisher": "Little, Brown and Company",
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "Romance",
        "published_year": 1813,
        "price": 7.99,
        "in_stock": True,
        "pages": 432,
        "publisher": "T. Egerton, Whitehall",
    },
    {
        "title": "The Lord of the Rings",
        "author": "J.R.R. Tolkien",
        "genre": "Fantasy",
        "published_year": 1954,
        "price": 19.99,
        "in_stock": True,
        "pages": 1178,
        "publisher": "Allen & Unwin",
    },
    {
        "title": "Animal Farm",
        "author": "George Orwell",
        "genre": "Political Satire",
        "published_year": 1945,
        "price": 8.50,
        "in_stock": False,
        "pages": 112,
        "publisher": "Secker & Warburg",
    },
    {
        "title": "The Alchemist",
        "author": "Paulo Coelho",
        "genre": "Fiction",
        "published_year": 1988,
        "price": 10.99,
        "in_stock": True,
        "pages": 197,
        "publisher": "HarperOne",
    },
    {
        "title": "Moby Dick",
        "author": "Herman Melville",
        "genre": "Adventure",
        "published_year": 1851,
        "price": 12.50,
        "in_stock": False,
        "pages": 635,
        "publisher": "Harper & Brothers",
    },
    {
        "title": "Wuthering Heights",
        "author": "Emily Brontë",
        "genre": "Gothic Fiction",
        "published_year": 1847,
        "price": 9.99,
        "in_stock": True,
        "pages": 342,
        "publisher": "Thomas Cautley Newby",
    },
]


def insert_books(collection):
    """Replace the contents of ``collection`` with the sample catalogue.

    Returns the ids of the inserted documents.
    """
    existing = collection.count_documents({})
    if existing > 0:
        print(f"Collection already contains {existing} documents. Dropping collection...")
        collection.drop()

    # insert_many adds _id to the dicts it is given
    result = collection.insert_many([dict(book) for book in BOOKS])
    return result.inserted_ids


def main():
    logging.basicConfig(level=logging.INFO)
    with mongo_client() as client:
        try:
            ping(client)
            collection = get_books_collection(client)
            inserted = insert_books(collection)
        except Exception:
            logger.exception("Seeding %s.%s failed", DB_NAME, COLLECTION_NAME)
            raise

        print(f"✅ Inserted {len(inserted)} books into {DB_NAME}.{COLLECTION_NAME}")
        for book in collection.find({}, {"_id": 0, "title": 1, "author": 1, "published_year": 1}):
            print(f"- \"{book['title']}\" by {book['author']} ({book['published_year']})")


if __name__ == "__main__":
    main()
