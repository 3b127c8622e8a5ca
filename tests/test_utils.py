import pytest
from stacks.core import limiter as limiter_module
from stacks.core.limiter import RateLimiter
from stacks.core.models import MAX_ID
from stacks.core.utils import page_window, parse_id, parse_int


@pytest.mark.parametrize("page, limit, expected", [
    (None, None, (0, 10)),
    ("1", "10", (0, 10)),
    ("3", "5", (10, 5)),
    ("0", "-4", (0, 10)),
    ("abc", "7xyz", (0, 7)),
    (2, 25, (25, 25)),
    ("99999999999999999999", "99999999999999999999", ((MAX_ID - 1) * MAX_ID, MAX_ID)),
])
def test_page_window(page, limit, expected):
    assert page_window(page, limit) == expected


def test_parse_int():
    assert parse_int("42abc") == 42
    assert parse_int(" -3") == -3
    assert parse_int("abc") is None
    assert parse_int(None) is None
    assert parse_int(True) is None


def test_parse_id():
    assert parse_id("17") == 17
    assert parse_id("17abc") is None
    assert parse_id("-1") is None
    assert parse_id("") is None
    assert parse_id(str(MAX_ID)) == MAX_ID
    assert parse_id(str(MAX_ID + 1)) is None
    assert parse_id("99999999999999999999") is None


def test_rate_limiter_window(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(limiter_module.time, "time", lambda: now[0])
    limiter = RateLimiter(limit=2, window_seconds=60)

    assert not limiter.is_rate_limited("10.0.0.1")
    assert not limiter.is_rate_limited("10.0.0.1")
    assert limiter.is_rate_limited("10.0.0.1")
    assert not limiter.is_rate_limited("10.0.0.2")

    now[0] += 61
    assert not limiter.is_rate_limited("10.0.0.1")


def test_rate_limiter_forgets_idle_clients(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(limiter_module.time, "time", lambda: now[0])
    limiter = RateLimiter(limit=5, window_seconds=60)

    for n in range(100):
        limiter.is_rate_limited(f"10.0.{n // 256}.{n % 256}")
    assert len(limiter._attempts) == 100

    now[0] += 61
    limiter.is_rate_limited("10.1.0.1")
    assert list(limiter._attempts) == ["10.1.0.1"]
