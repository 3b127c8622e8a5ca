#!/usr/bin/env python
"""
    Book Schema for Stacks,
    including the accepted payload and the response shape of a book.

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

from pydantic import BaseModel, Field, field_validator
from stacks.core.models import MAX_ID


class BookIn(BaseModel):

    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1)
    isbn: str = Field(..., min_length=1)
    total_copies: int = Field(..., ge=1, le=MAX_ID)

    class Config:
        coerce_numbers_to_str = True
        json_schema_extra = {
            "example": {
                "title": "The Left Hand of Darkness",
                "author": "Ursula K. Le Guin",
                "genre": "Science Fiction",
                "isbn": "9780441478125",
                "total_copies": 3
            }
        }

    @field_validator("total_copies", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be an integer")
        return value


class Book(BaseModel):

    book_id: int
    title: str
    author: str
    genre: str
    isbn: str
    total_copies: int
    available_copies: int

    class Config:
        from_attributes = True
