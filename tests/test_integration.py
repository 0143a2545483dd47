"""Query behaviour against a live MongoDB server.

Uses a scratch database on the server named by MONGO_URI; skipped when no
server answers.
"""
from collections import defaultdict

import pytest
from pymongo import ASCENDING, DESCENDING

from bookstore_mongodb import queries
from bookstore_mongodb.insert_books import BOOKS

pytestmark = pytest.mark.integration


def test_update_is_visible_by_title(live_books):
    queries.update_price(live_books, "The Hobbit", 16.99)
    assert live_books.find_one({"title": "The Hobbit"})["price"] == 16.99


def test_delete_removes_document(live_books):
    assert queries.delete_by_title(live_books, "Moby Dick") == 1
    assert live_books.find_one({"title": "Moby Dick"}) is None
    assert queries.delete_by_title(live_books, "Moby Dick") == 0


def test_genre_average_is_arithmetic_mean(live_books):
    prices = defaultdict(list)
    for book in BOOKS:
        prices[book["genre"]].append(book["price"])

    result = {row["_id"]: row["avgPrice"] for row in queries.average_price_by_genre(live_books)}

    assert set(result) == set(prices)
    for genre, values in prices.items():
        assert result[genre] == pytest.approx(sum(values) / len(values))


def test_author_with_most_books(live_books):
    [top] = queries.author_with_most_books(live_books)
    assert top["count"] == 2
    assert top["_id"] in {"George Orwell", "J.R.R. Tolkien"}


def test_books_by_decade_sorted_buckets(live_books):
    rows = queries.books_by_decade(live_books)
    decades = [row["_id"] for row in rows]
    assert decades == sorted(decades)
    assert sum(row["count"] for row in rows) == len(BOOKS)
    assert 1930 in decades


def test_pages_are_disjoint(live_books):
    page1 = queries.find_page(live_books, 1)
    page2 = queries.find_page(live_books, 2)
    assert len(page1) == len(page2) == queries.PAGE_SIZE
    assert not {d["_id"] for d in page1} & {d["_id"] for d in page2}


def test_sort_descending_reverses_ascending(live_books):
    asc = [d["price"] for d in queries.sort_by_price(live_books, ASCENDING)]
    desc = [d["price"] for d in queries.sort_by_price(live_books, DESCENDING)]
    assert asc == sorted(asc)
    assert desc == list(reversed(asc))


def test_projection_returns_only_requested_fields(live_books):
    for doc in queries.find_title_author_price(live_books):
        assert set(doc) <= {"title", "author", "price"}


def test_index_creation_is_idempotent(live_books):
    first = queries.create_title_index(live_books)
    assert queries.create_title_index(live_books) == first
    compound = queries.create_author_year_index(live_books)
    assert queries.create_author_year_index(live_books) == compound

    names = [ix["name"] for ix in live_books.list_indexes()]
    assert names.count(first) == 1
    assert names.count(compound) == 1
    assert compound == "author_1_published_year_-1"


def test_explain_reports_execution_stats(live_books):
    queries.create_title_index(live_books)
    plan = queries.explain_find_by_title(live_books)
    assert plan["executionStats"]["nReturned"] == 1
