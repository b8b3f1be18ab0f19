from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LoanStatus


@dataclass(frozen=True)
class Book:
    """Domain entity: Book.

    ``available`` is False exactly while an ISSUED loan references the book;
    only the lending service flips it.
    """

    title: str
    author: str
    category: str
    available: bool = True
    id: Optional[int] = None


@dataclass(frozen=True)
class Borrower:
    name: str
    email: str
    membership_date: date
    id: Optional[int] = None


@dataclass(frozen=True)
class Loan:
    """Pairs a Book and a Borrower; ``return_date`` is set iff status is RETURNED."""

    book_id: int
    borrower_id: int
    issue_date: date
    due_date: date
    status: LoanStatus
    return_date: Optional[date] = None
    id: Optional[int] = None
