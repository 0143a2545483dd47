"""bookstore_mongodb package initializer

Connection helpers, the sample catalogue seeder and the query walkthrough for
the ``plp_bookstore.books`` collection. Run the modules directly:

    python -m bookstore_mongodb.insert_books
    python -m bookstore_mongodb.queries
"""

__all__ = [
    "connect_db",
    "insert_books",
    "queries",
]
