from __future__ import annotations

from datetime import date
from decimal import Decimal

import mysql.connector
import pytest

from record_suite.catalog.model import Product
from record_suite.core.enums import LoanStatus
from record_suite.core.exceptions import ConflictError, NotFoundError
from record_suite.database.tables import BOOKS, LOANS, PRODUCTS
from record_suite.library.model import Book
from record_suite.store.mysql_store import MySQLRecordStore, compile_predicate
from record_suite.store.predicates import All, Before, Contains, Equals, In


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 1
        self.lastrowid = None

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with
        if sql.startswith("INSERT"):
            self._conn.next_id += 1
            self.lastrowid = self._conn.next_id

    def fetchone(self):
        return self._conn.rows.pop(0) if self._conn.rows else None

    def fetchall(self):
        rows, self._conn.rows = self._conn.rows, []
        return rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.executed = []
        self.rows = []
        self.next_id = 0
        self.fail_with = None
        self.committed = 0
        self.rolled_back = 0
        self.transactions = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def start_transaction(self):
        self.transactions += 1

    def commit(self):
        self.committed += 1

    def rollback(self):
        self.rolled_back += 1

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self):
        self.connections = []

    def connect(self, *, with_database=True):
        conn = FakeConnection()
        self.connections.append(conn)
        return conn


@pytest.fixture
def factory():
    return FakeConnectionFactory()


@pytest.fixture
def mysql_store(factory):
    return MySQLRecordStore(factory, [PRODUCTS, BOOKS, LOANS])


def test_row_mapping_round_trips_loan_types():
    row = {
        "id": 7,
        "book_id": 1,
        "borrower_id": 2,
        "issue_date": date(2026, 1, 1),
        "due_date": date(2026, 1, 15),
        "status": "ISSUED",
        "return_date": None,
    }

    loan = LOANS.from_row(row)

    assert loan.id == 7
    assert loan.status is LoanStatus.ISSUED
    assert LOANS.to_row(loan)["status"] == "ISSUED"


def test_row_mapping_decodes_bool_and_decimal():
    book = BOOKS.from_row({"id": 1, "title": "Dune", "author": "H", "category": "SF", "available": 0})
    product = PRODUCTS.from_row({"id": 1, "name": "Cable", "description": "", "price": "3.50", "stock": 4})

    assert book.available is False
    assert BOOKS.to_row(book)["available"] == 0
    assert product.price == Decimal("3.50")


def test_compile_predicates():
    where, params = compile_predicate(All(Contains("title", "50%_Off"), Equals("available", True)), BOOKS)
    assert where == "(LOWER(title) LIKE %s) AND (available = %s)"
    assert params == ["%50\\%\\_off%", 1]

    assert compile_predicate(Equals("author", "Herbert", ignore_case=True), BOOKS) == ("LOWER(author) = %s", ["herbert"])
    assert compile_predicate(Before("due_date", date(2026, 2, 1)), LOANS) == ("due_date < %s", [date(2026, 2, 1)])
    assert compile_predicate(In("book_id", ()), LOANS) == ("1=0", [])
    assert compile_predicate(All(), LOANS) == ("1=1", [])


def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        compile_predicate(Equals("nope", 1), BOOKS)


def test_insert_uses_short_lived_connection(mysql_store, factory):
    saved = mysql_store.save(Book, Book(title="Dune", author="Herbert", category="SF"))

    assert saved.id == 1
    conn = factory.connections[0]
    sql, params = conn.executed[0]
    assert sql == "INSERT INTO books(title, author, category, available) VALUES(%s,%s,%s,%s)"
    assert params == ("Dune", "Herbert", "SF", 1)
    assert conn.committed == 1 and conn.closed


def test_get_for_update_inside_transaction_shares_connection(mysql_store, factory):
    with mysql_store.transaction() as tx:
        factory.connections[0].rows.append({"id": 3, "title": "Dune", "author": "H", "category": "SF", "available": 1})
        book = tx.require(Book, 3, for_update=True)
        tx.save(Book, Book(title=book.title, author=book.author, category=book.category, available=False, id=book.id))

    assert len(factory.connections) == 1
    conn = factory.connections[0]
    assert conn.transactions == 1
    assert conn.executed[0][0].endswith("WHERE id=%s FOR UPDATE")
    assert conn.executed[1][0].startswith("UPDATE books SET")
    assert conn.committed == 1 and conn.rolled_back == 0


def test_transaction_rolls_back_on_error(mysql_store, factory):
    with pytest.raises(NotFoundError):
        with mysql_store.transaction() as tx:
            tx.require(Book, 99, for_update=True)

    conn = factory.connections[0]
    assert conn.rolled_back == 1
    assert conn.committed == 0


def test_duplicate_key_maps_to_conflict(mysql_store, factory):
    original_connect = factory.connect

    def failing_connect(**kwargs):
        conn = original_connect(**kwargs)
        conn.fail_with = mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=1062)
        return conn

    factory.connect = failing_connect

    with pytest.raises(ConflictError):
        mysql_store.save(Product, Product(name="Cable", description="", price=Decimal("3"), stock=1))


def test_unmapped_entity_type(mysql_store):
    class Unmapped:
        pass

    with pytest.raises(ValueError):
        mysql_store.find_all(Unmapped)
