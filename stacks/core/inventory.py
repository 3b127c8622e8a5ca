#!/usr/bin/env python

"""
    Inventory rules for Stacks.

    A book's availability is a single bounded counter in
    [0, total_copies]. Borrowing and returning are each one guarded
    UPDATE statement, so the guard and the mutation are applied
    atomically by the store and concurrent callers cannot push the
    counter outside its bounds. Editing a book resets the counter to
    the new total.

    Closing an issuance is independent of the copy counter: callers
    returning a book must invoke both `return_copy` and
    `complete_issuance`.

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from datetime import date
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from stacks.core.models import Book, Member, Issuance
from stacks.core.utils import store_errors
from stacks.core.validation import field_error
from stacks.core.exceptions import (
    BookNotFoundError,
    BookUnavailableError,
    ReturnRejectedError,
    IssuanceNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def list_books(session: Session, offset: int = 0, limit: Optional[int] = None) -> List[Book]:
    with store_errors(session, "list books"):
        return Book.get_many(session, offset=offset, limit=limit)


def get_book(session: Session, book_id: Optional[int]) -> Book:
    with store_errors(session, f"fetch book {book_id}"):
        book = Book.exists(session, book_id)
    if not book:
        raise BookNotFoundError
    return book


def create_book(session: Session, title: str, author: str, genre: str,
                isbn: str, total_copies: int) -> int:
    """Adds a fully available book and returns its id."""
    with store_errors(session, "add book"):
        book = Book(
            title=title,
            author=author,
            genre=genre,
            isbn=isbn,
            total_copies=total_copies,
            available_copies=total_copies,
        )
        session.add(book)
        session.commit()
        logger.info(f"Added book {book.book_id} with {total_copies} copies")
        return book.book_id


def update_book(session: Session, book_id: Optional[int], title: str, author: str,
                genre: str, isbn: str, total_copies: int) -> None:
    """Replaces the book's fields. Availability is reset to `total_copies`
    whatever the number of copies currently lent out.
    """
    with store_errors(session, f"update book {book_id}"):
        updated = session.query(Book).filter(Book.book_id == book_id).update({
            Book.title: title,
            Book.author: author,
            Book.genre: genre,
            Book.isbn: isbn,
            Book.total_copies: total_copies,
            Book.available_copies: total_copies,
        }, synchronize_session=False)
        if not updated:
            session.rollback()
            raise BookNotFoundError
        session.commit()


def delete_book(session: Session, book_id: Optional[int]) -> None:
    with store_errors(session, f"delete book {book_id}"):
        deleted = session.query(Book).filter(Book.book_id == book_id) \
            .delete(synchronize_session=False)
        if not deleted:
            session.rollback()
            raise BookNotFoundError
        session.commit()


def borrow(session: Session, book_id: Optional[int]) -> None:
    """Takes one copy off the shelf.

    Raises BookUnavailableError when no copy is left or the book does
    not exist; the two cases are not told apart.
    """
    with store_errors(session, f"borrow book {book_id}"):
        updated = session.query(Book).filter(
            Book.book_id == book_id,
            Book.available_copies > 0
        ).update({
            Book.available_copies: Book.available_copies - 1
        }, synchronize_session=False)
        if not updated:
            session.rollback()
            raise BookUnavailableError
        session.commit()


def return_copy(session: Session, book_id: Optional[int]) -> None:
    """Puts one copy back on the shelf.

    Raises ReturnRejectedError when every copy is already available or
    the book does not exist.
    """
    with store_errors(session, f"return book {book_id}"):
        updated = session.query(Book).filter(
            Book.book_id == book_id,
            Book.available_copies < Book.total_copies
        ).update({
            Book.available_copies: Book.available_copies + 1
        }, synchronize_session=False)
        if not updated:
            session.rollback()
            raise ReturnRejectedError
        session.commit()


def list_issuances(session: Session) -> List[Issuance]:
    with store_errors(session, "list issuances"):
        return Issuance.get_many(session)


def create_issuance(session: Session, member_id: int, book_id: int, due_date: date) -> int:
    """Records an open issuance and returns its id. The book's copy
    counter is left untouched.
    """
    with store_errors(session, "add issuance"):
        missing = []
        if not Member.exists(session, member_id):
            missing.append(field_error("member_id", "Member not found", {"member_id": member_id}))
        if not Book.exists(session, book_id):
            missing.append(field_error("book_id", "Book not found", {"book_id": book_id}))
        if missing:
            session.rollback()
            raise ValidationError(missing)

        issuance = Issuance(member_id=member_id, book_id=book_id, due_date=due_date)
        session.add(issuance)
        session.commit()
        logger.info(f"Issued book {book_id} to member {member_id} until {due_date}")
        return issuance.issuance_id


def complete_issuance(session: Session, issuance_id: Optional[int]) -> None:
    """Stamps today's date on an open issuance.

    Raises IssuanceNotFoundError when the issuance does not exist or was
    already returned.
    """
    with store_errors(session, f"return issuance {issuance_id}"):
        updated = session.query(Issuance).filter(
            Issuance.issuance_id == issuance_id,
            Issuance.returned_date.is_(None)
        ).update({
            Issuance.returned_date: func.current_date()
        }, synchronize_session=False)
        if not updated:
            session.rollback()
            raise IssuanceNotFoundError
        session.commit()
