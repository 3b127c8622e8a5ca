import os

# Set TESTING before any stacks imports
os.environ["TESTING"] = "true"
os.environ["API_KEY"] = "test-key"
os.environ.pop("DB_URI", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from stacks.core.db import Base, engine, make_engine

API_KEY = "test-key"
HEADERS = {"x-api-key": API_KEY}


@pytest.fixture(autouse=True)
def reset_schema():
    """Every test starts from empty tables on the shared in-memory engine."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    from stacks.app import app, limiter
    limiter.reset()
    with TestClient(app, headers=HEADERS) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    test_engine = make_engine("sqlite:///:memory:")
    Base.metadata.create_all(test_engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(test_engine)
        test_engine.dispose()


def book_payload(**overrides):
    payload = {
        "title": "The Dispossessed",
        "author": "Ursula K. Le Guin",
        "genre": "Science Fiction",
        "isbn": "9780061054884",
        "total_copies": 3,
    }
    payload.update(overrides)
    return payload


def member_payload(**overrides):
    payload = {
        "name": "Ada Lovelace",
        "email": "ada@library.org",
        "phone": "+44 20 7946 0018",
        "membership_type": "Standard",
        "address": "12 St James's Square, London",
        "password": "analytical-engine",
    }
    payload.update(overrides)
    return payload
