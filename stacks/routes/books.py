#!/usr/bin/env python

"""
    Book routes for Stacks,
    including catalogue maintenance and the borrow/return counters.

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from stacks.core import inventory
from stacks.core.db import get_session
from stacks.core.utils import page_window, parse_id, parse_request_body
from stacks.core.validation import validate_entity
from stacks.schemas.book import Book

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=List[Book])
def get_books(page: Optional[str] = None, limit: Optional[str] = None,
              session: Session = Depends(get_session)):
    offset, limit = page_window(page, limit)
    return inventory.list_books(session, offset=offset, limit=limit)


@router.get("/{book_id}", response_model=Book)
def get_book(book_id: str, session: Session = Depends(get_session)):
    return inventory.get_book(session, parse_id(book_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_book(request: Request, session: Session = Depends(get_session)):
    book = validate_entity("book", await parse_request_body(request))
    book_id = inventory.create_book(session, **book.model_dump())
    return {"message": "Book added successfully", "bookId": book_id}


@router.put("/{book_id}")
async def update_book(book_id: str, request: Request, session: Session = Depends(get_session)):
    book = validate_entity("book", await parse_request_body(request))
    inventory.update_book(session, parse_id(book_id), **book.model_dump())
    return {"message": "Book updated successfully"}


@router.delete("/{book_id}")
def delete_book(book_id: str, session: Session = Depends(get_session)):
    inventory.delete_book(session, parse_id(book_id))
    return {"message": "Book deleted successfully"}


@router.patch("/{book_id}/borrow")
def borrow_book(book_id: str, session: Session = Depends(get_session)):
    inventory.borrow(session, parse_id(book_id))
    return {"message": "Book borrowed successfully"}


@router.patch("/{book_id}/return")
def return_book(book_id: str, session: Session = Depends(get_session)):
    inventory.return_copy(session, parse_id(book_id))
    return {"message": "Book returned successfully"}
