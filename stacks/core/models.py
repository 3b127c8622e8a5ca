#!/usr/bin/env python

"""
    Models for Stacks,
    including the Book, Member and Issuance tables.

    :copyright: (c) 2015 by AUTHORS
    :license: see LICENSE for more details
"""

from sqlalchemy import (
    Column, String, Integer, Date, ForeignKey, CheckConstraint,
    Enum as SQLAlchemyEnum
)
from stacks.core.db import Base
import enum

# Largest value a PostgreSQL `integer` key column can hold
MAX_ID = 2**31 - 1


class MembershipType(str, enum.Enum):
    STANDARD = "Standard"
    PREMIUM = "Premium"


class Book(Base):
    __tablename__ = 'books'
    __table_args__ = (
        CheckConstraint('total_copies >= 1', name='ck_books_total_copies'),
        CheckConstraint(
            'available_copies >= 0 AND available_copies <= total_copies',
            name='ck_books_available_copies'
        ),
    )

    book_id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    genre = Column(String(100), nullable=False)
    isbn = Column(String(32), nullable=False)
    total_copies = Column(Integer, nullable=False)
    available_copies = Column(Integer, nullable=False)

    @classmethod
    def exists(cls, session, book_id):
        return session.query(cls).filter(cls.book_id == book_id).first()


class Member(Base):
    __tablename__ = 'members'

    member_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(32), nullable=False)
    membership_type = Column(
        SQLAlchemyEnum(MembershipType, values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )
    address = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)

    @classmethod
    def exists(cls, session, member_id):
        return session.query(cls).filter(cls.member_id == member_id).first()


class Issuance(Base):
    __tablename__ = 'issuances'

    issuance_id = Column(Integer, primary_key=True)
    member_id = Column(Integer, ForeignKey('members.member_id', ondelete='CASCADE'), nullable=False)
    book_id = Column(Integer, ForeignKey('books.book_id', ondelete='CASCADE'), nullable=False)
    due_date = Column(Date, nullable=False)
    returned_date = Column(Date, nullable=True)
