#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    tests.test_inventory
    ~~~~~~~~~~~~~~~~~~~~

    This module tests the copy counter and issuance lifecycle rules.

    :copyright: (c) 2015 by Authors.
    :license: see LICENSE for more details.
"""

from datetime import date
from unittest.mock import MagicMock
import pytest
from sqlalchemy.exc import OperationalError
from stacks.core import inventory
from stacks.core.models import Book, Member, Issuance, MembershipType
from stacks.core.exceptions import (
    BookNotFoundError,
    BookUnavailableError,
    DatabaseError,
    IssuanceNotFoundError,
    ReturnRejectedError,
    ValidationError,
)


def add_book(session, total_copies=5):
    return inventory.create_book(
        session, title="Kindred", author="Octavia E. Butler",
        genre="Fiction", isbn="9780807083697", total_copies=total_copies)


def add_member(session, email="ada@library.org"):
    member = Member(
        name="Ada Lovelace", email=email, phone="555-0100",
        membership_type=MembershipType.STANDARD, address="12 St James's Square",
        password="analytical-engine")
    session.add(member)
    session.commit()
    return member.member_id


def copies(session, book_id):
    book = session.get(Book, book_id)
    return book.available_copies, book.total_copies


def test_created_book_is_fully_available(db_session):
    book_id = add_book(db_session, total_copies=4)
    assert copies(db_session, book_id) == (4, 4)


def test_borrow_and_return_round_trip(db_session):
    book_id = add_book(db_session, total_copies=5)
    for _ in range(3):
        inventory.borrow(db_session, book_id)
    assert copies(db_session, book_id) == (2, 5)

    for _ in range(2):
        inventory.return_copy(db_session, book_id)
    assert copies(db_session, book_id) == (4, 5)


def test_borrow_stops_at_zero(db_session):
    book_id = add_book(db_session, total_copies=1)
    inventory.borrow(db_session, book_id)

    with pytest.raises(BookUnavailableError):
        inventory.borrow(db_session, book_id)
    assert copies(db_session, book_id) == (0, 1)


def test_borrow_unknown_book_is_unavailable(db_session):
    with pytest.raises(BookUnavailableError):
        inventory.borrow(db_session, 404)
    with pytest.raises(BookUnavailableError):
        inventory.borrow(db_session, None)


def test_return_stops_at_total(db_session):
    book_id = add_book(db_session, total_copies=2)

    with pytest.raises(ReturnRejectedError):
        inventory.return_copy(db_session, book_id)
    assert copies(db_session, book_id) == (2, 2)

    with pytest.raises(ReturnRejectedError):
        inventory.return_copy(db_session, 404)


def test_update_resets_availability(db_session):
    """Editing a book discards copies currently lent out."""
    book_id = add_book(db_session, total_copies=5)
    inventory.borrow(db_session, book_id)
    inventory.borrow(db_session, book_id)
    assert copies(db_session, book_id) == (3, 5)

    inventory.update_book(
        db_session, book_id, title="Kindred", author="Octavia E. Butler",
        genre="Fiction", isbn="9780807083697", total_copies=7)
    assert copies(db_session, book_id) == (7, 7)

    inventory.borrow(db_session, book_id)
    inventory.update_book(
        db_session, book_id, title="Kindred", author="Octavia E. Butler",
        genre="Fiction", isbn="9780807083697", total_copies=2)
    assert copies(db_session, book_id) == (2, 2)


def test_update_unknown_book(db_session):
    with pytest.raises(BookNotFoundError):
        inventory.update_book(
            db_session, 404, title="t", author="a", genre="g", isbn="i", total_copies=1)


def test_delete_twice(db_session):
    book_id = add_book(db_session)
    inventory.delete_book(db_session, book_id)
    with pytest.raises(BookNotFoundError):
        inventory.delete_book(db_session, book_id)
    with pytest.raises(BookNotFoundError):
        inventory.get_book(db_session, book_id)


def test_delete_book_removes_its_issuances(db_session):
    book_id = add_book(db_session)
    member_id = add_member(db_session)
    inventory.create_issuance(db_session, member_id, book_id, date(2025, 3, 1))

    inventory.delete_book(db_session, book_id)
    assert inventory.list_issuances(db_session) == []


def test_list_books_pages_in_id_order(db_session):
    ids = [add_book(db_session) for _ in range(5)]
    page = inventory.list_books(db_session, offset=2, limit=2)
    assert [book.book_id for book in page] == ids[2:4]


def test_issuance_lifecycle(db_session):
    book_id = add_book(db_session, total_copies=1)
    member_id = add_member(db_session)
    issuance_id = inventory.create_issuance(db_session, member_id, book_id, date(2025, 3, 1))

    issuance = db_session.get(Issuance, issuance_id)
    assert issuance.returned_date is None
    assert issuance.due_date == date(2025, 3, 1)

    inventory.complete_issuance(db_session, issuance_id)
    issuance = db_session.get(Issuance, issuance_id)
    assert isinstance(issuance.returned_date, date)

    # Closed issuances cannot be closed again
    with pytest.raises(IssuanceNotFoundError):
        inventory.complete_issuance(db_session, issuance_id)


def test_issuance_and_copy_counter_are_independent(db_session):
    book_id = add_book(db_session, total_copies=2)
    member_id = add_member(db_session)

    issuance_id = inventory.create_issuance(db_session, member_id, book_id, date(2025, 3, 1))
    assert copies(db_session, book_id) == (2, 2)

    inventory.borrow(db_session, book_id)
    inventory.complete_issuance(db_session, issuance_id)
    assert copies(db_session, book_id) == (1, 2)


def test_complete_unknown_issuance(db_session):
    with pytest.raises(IssuanceNotFoundError):
        inventory.complete_issuance(db_session, 7)


def test_issuance_requires_existing_member_and_book(db_session):
    with pytest.raises(ValidationError) as excinfo:
        inventory.create_issuance(db_session, 1, 1, date(2025, 3, 1))
    assert [(e["path"], e["msg"]) for e in excinfo.value.errors] == [
        ("member_id", "Member not found"),
        ("book_id", "Book not found"),
    ]
    assert inventory.list_issuances(db_session) == []


def test_store_failure_becomes_database_error(db_session):
    book_id = add_book(db_session, total_copies=2)
    db_session.commit = MagicMock(
        side_effect=OperationalError("UPDATE books", {}, Exception("server closed the connection")))

    with pytest.raises(DatabaseError) as excinfo:
        inventory.borrow(db_session, book_id)
    assert excinfo.value.to_dict() == {"message": "Something went wrong!"}

    del db_session.commit
    assert copies(db_session, book_id) == (2, 2)
