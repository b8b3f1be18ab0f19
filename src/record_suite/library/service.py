from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from loguru import logger

from ..common.datetime_utils import today_local
from ..common.validators import require_email, require_non_empty
from ..core.constants import DEFAULT_LOAN_PERIOD_DAYS
from ..core.enums import LoanStatus
from ..core.exceptions import ConflictError, ValidationError
from ..store.predicates import All, Before, Contains, Equals
from ..store.repository import RecordStore
from .model import Book, Borrower, Loan


class LibraryService:
    """Use case: lend and return books.

    Invariant: a book is unavailable exactly while an ISSUED loan references it.
    Both transitions touch the book and the loan inside one store transaction,
    with the book row read ``for_update`` so two concurrent lends of the same
    book cannot both pass the availability check.
    """

    def __init__(self, store: RecordStore, *, loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS):
        if int(loan_period_days) <= 0:
            raise ValueError("loan_period_days must be positive")
        self._store = store
        self._loan_period = timedelta(days=int(loan_period_days))

    # --- books -----------------------------------------------------------

    def add_book(self, *, title: str, author: str, category: str) -> Book:
        book = Book(
            title=require_non_empty(title, "title"),
            author=require_non_empty(author, "author"),
            category=require_non_empty(category, "category"),
        )
        return self._store.save(Book, book)

    def get_book(self, book_id: int) -> Book:
        return self._store.require(Book, book_id)

    def list_books(self) -> Sequence[Book]:
        return self._store.find_all(Book)

    def remove_book(self, book_id: int) -> None:
        with self._store.transaction() as store:
            store.require(Book, book_id, for_update=True)
            open_loans = store.find_where(Loan, All(Equals("book_id", int(book_id)), Equals("status", LoanStatus.ISSUED)))
            if open_loans:
                raise ConflictError("Book is currently on loan and cannot be removed")
            store.delete(Book, book_id)
        logger.info("Removed book {}", book_id)

    def search_books(
        self,
        *,
        title: Optional[str] = None,
        author: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Sequence[Book]:
        """Case-insensitive substring search on one field (title > author > category)."""

        for field, value in (("title", title), ("author", author), ("category", category)):
            if value is not None and value.strip():
                return self._store.find_where(Book, Contains(field, value.strip()))
        return self._store.find_all(Book)

    # --- borrowers -------------------------------------------------------

    def add_borrower(self, *, name: str, email: str, membership_date: Optional[date] = None) -> Borrower:
        borrower = Borrower(
            name=require_non_empty(name, "name"),
            email=require_email(email),
            membership_date=membership_date or today_local(),
        )
        return self._store.save(Borrower, borrower)

    def get_borrower(self, borrower_id: int) -> Borrower:
        return self._store.require(Borrower, borrower_id)

    def list_borrowers(self) -> Sequence[Borrower]:
        return self._store.find_all(Borrower)

    # --- loans -----------------------------------------------------------

    def get_loan(self, loan_id: int) -> Loan:
        return self._store.require(Loan, loan_id)

    def lend(self, book_id: int, borrower_id: int, *, today: Optional[date] = None) -> Loan:
        today = today or today_local()

        with self._store.transaction() as store:
            book = store.require(Book, book_id, for_update=True)
            if not book.available:
                logger.warning("Lend rejected: book {} is unavailable", book_id)
                raise ConflictError("Book is unavailable")
            store.require(Borrower, borrower_id)

            store.save(Book, _with_availability(book, False))
            loan = store.save(
                Loan,
                Loan(
                    book_id=int(book_id),
                    borrower_id=int(borrower_id),
                    issue_date=today,
                    due_date=today + self._loan_period,
                    status=LoanStatus.ISSUED,
                ),
            )

        logger.info("Book {} lent to borrower {} (loan {}, due {})", book_id, borrower_id, loan.id, loan.due_date)
        return loan

    def return_loan(self, loan_id: int, *, today: Optional[date] = None) -> Loan:
        today = today or today_local()

        with self._store.transaction() as store:
            loan = store.require(Loan, loan_id, for_update=True)
            if loan.status != LoanStatus.ISSUED:
                logger.warning("Return rejected: loan {} is {}", loan_id, loan.status.value)
                raise ConflictError("Loan is not currently issued")
            if today < loan.issue_date:
                raise ValidationError("Return date cannot be before the issue date")

            returned = store.save(Loan, _returned(loan, today))
            book = store.get(Book, loan.book_id, for_update=True)
            if book is not None:
                store.save(Book, _with_availability(book, True))

        logger.info("Loan {} returned; book {} available again", loan_id, loan.book_id)
        return returned

    def overdue_loans(self, as_of: Optional[date] = None) -> Sequence[Loan]:
        """ISSUED loans whose due date lies strictly before ``as_of``."""

        as_of = as_of or today_local()
        return self._store.find_where(Loan, All(Equals("status", LoanStatus.ISSUED), Before("due_date", as_of)))

    def borrower_history(self, borrower_id: int) -> Sequence[Loan]:
        self._store.require(Borrower, borrower_id)
        return self._store.find_where(Loan, Equals("borrower_id", int(borrower_id)))


def _with_availability(book: Book, available: bool) -> Book:
    return Book(
        title=book.title,
        author=book.author,
        category=book.category,
        available=available,
        id=book.id,
    )


def _returned(loan: Loan, today: date) -> Loan:
    return Loan(
        book_id=loan.book_id,
        borrower_id=loan.borrower_id,
        issue_date=loan.issue_date,
        due_date=loan.due_date,
        status=LoanStatus.RETURNED,
        return_date=today,
        id=loan.id,
    )
