from __future__ import annotations

import threading
from datetime import timedelta

import pytest

from record_suite.core.enums import LoanStatus
from record_suite.core.exceptions import ConflictError, NotFoundError, ValidationError
from record_suite.library.model import Book, Loan


def _assert_availability_invariant(store):
    open_book_ids = {loan.book_id for loan in store.find_all(Loan) if loan.status == LoanStatus.ISSUED}
    for book in store.find_all(Book):
        assert book.available == (book.id not in open_book_ids)


@pytest.fixture
def dune(library):
    return library.add_book(title="Dune", author="Frank Herbert", category="Science Fiction")


@pytest.fixture
def reader(library, today):
    return library.add_borrower(name="Ada", email="ada@example.com", membership_date=today)


def test_lend_issues_loan_and_marks_book_unavailable(library, dune, reader, today):
    loan = library.lend(dune.id, reader.id, today=today)

    assert loan.status == LoanStatus.ISSUED
    assert loan.issue_date == today
    assert loan.due_date == today + timedelta(days=14)
    assert loan.return_date is None
    assert library.get_book(dune.id).available is False


def test_second_lend_of_same_book_conflicts(library, dune, reader, today):
    other = library.add_borrower(name="Bob", email="bob@example.com", membership_date=today)
    library.lend(dune.id, reader.id, today=today)

    with pytest.raises(ConflictError):
        library.lend(dune.id, other.id, today=today)
    with pytest.raises(ConflictError):
        library.lend(dune.id, reader.id, today=today)


def test_lend_unknown_book_or_borrower_is_not_found(library, dune, reader, today):
    with pytest.raises(NotFoundError):
        library.lend(999, reader.id, today=today)
    with pytest.raises(NotFoundError):
        library.lend(dune.id, 999, today=today)


def test_lend_to_unknown_borrower_leaves_book_available(library, store, dune, today):
    with pytest.raises(NotFoundError):
        library.lend(dune.id, 42, today=today)

    assert library.get_book(dune.id).available is True
    assert store.find_all(Loan) == []


def test_return_sets_returned_and_frees_book(library, dune, reader, today):
    loan = library.lend(dune.id, reader.id, today=today)
    later = today + timedelta(days=3)

    returned = library.return_loan(loan.id, today=later)

    assert returned.status == LoanStatus.RETURNED
    assert returned.return_date == later
    assert library.get_book(dune.id).available is True


def test_returning_twice_conflicts(library, dune, reader, today):
    loan = library.lend(dune.id, reader.id, today=today)
    library.return_loan(loan.id, today=today)

    with pytest.raises(ConflictError):
        library.return_loan(loan.id, today=today)


def test_return_unknown_loan_is_not_found(library):
    with pytest.raises(NotFoundError):
        library.return_loan(123)


def test_return_before_issue_date_is_rejected(library, dune, reader, today):
    loan = library.lend(dune.id, reader.id, today=today)

    with pytest.raises(ValidationError):
        library.return_loan(loan.id, today=today - timedelta(days=1))
    assert library.get_loan(loan.id).status == LoanStatus.ISSUED


def test_availability_invariant_holds_across_lend_return_sequence(library, store, reader, today):
    books = [
        library.add_book(title=f"Book {i}", author="Author", category="General")
        for i in range(3)
    ]
    loans = [library.lend(b.id, reader.id, today=today) for b in books[:2]]
    _assert_availability_invariant(store)

    library.return_loan(loans[0].id, today=today)
    _assert_availability_invariant(store)

    relent = library.lend(books[0].id, reader.id, today=today)
    library.return_loan(loans[1].id, today=today)
    library.return_loan(relent.id, today=today)
    _assert_availability_invariant(store)
    assert all(b.available for b in library.list_books())


def test_book_can_be_lent_again_after_return(library, dune, reader, today):
    first = library.lend(dune.id, reader.id, today=today)
    library.return_loan(first.id, today=today)

    second = library.lend(dune.id, reader.id, today=today)
    assert second.id != first.id
    assert second.status == LoanStatus.ISSUED


def test_concurrent_lends_of_one_book_only_one_wins(library, store, dune, today):
    borrowers = [
        library.add_borrower(name=f"Reader {i}", email=f"r{i}@example.com", membership_date=today)
        for i in range(8)
    ]
    results: list[str] = []
    barrier = threading.Barrier(len(borrowers))

    def attempt(borrower_id: int) -> None:
        barrier.wait()
        try:
            library.lend(dune.id, borrower_id, today=today)
            results.append("ok")
        except ConflictError:
            results.append("conflict")

    threads = [threading.Thread(target=attempt, args=(b.id,)) for b in borrowers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("conflict") == len(borrowers) - 1
    assert len(store.find_all(Loan)) == 1
    _assert_availability_invariant(store)


def test_remove_book_on_loan_conflicts(library, dune, reader, today):
    loan = library.lend(dune.id, reader.id, today=today)

    with pytest.raises(ConflictError):
        library.remove_book(dune.id)

    library.return_loan(loan.id, today=today)
    library.remove_book(dune.id)
    with pytest.raises(NotFoundError):
        library.get_book(dune.id)


def test_add_book_requires_title(library):
    with pytest.raises(ValidationError):
        library.add_book(title="  ", author="A", category="C")


def test_add_borrower_requires_valid_email(library):
    with pytest.raises(ValidationError):
        library.add_borrower(name="Ada", email="not-an-email")
