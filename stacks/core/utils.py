import logging
import re
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
from starlette.formparsers import MultiPartException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from stacks.core.exceptions import DatabaseError
from stacks.core.models import MAX_ID

logger = logging.getLogger(__name__)

LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value) -> Optional[int]:
    """Reads the leading integer of `value` ("3abc" -> 3), None if absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = LEADING_INT.match(str(value)) if value is not None else None
    return int(match.group(1)) if match else None


def parse_id(value) -> Optional[int]:
    """Path ids must be whole integers that fit the key column; anything
    else matches no row.
    """
    if value is None or not re.fullmatch(r"\d+", str(value).strip()):
        return None
    value = int(str(value).strip())
    return value if value <= MAX_ID else None


def page_window(page=None, limit=None, default_limit: int = 10):
    """Returns (offset, limit) for 1-based `page` and `limit` query args,
    falling back to page 1 / `default_limit` for missing or non-positive values.
    """
    page = parse_int(page)
    limit = parse_int(limit)
    page = min(page, MAX_ID) if page and page > 0 else 1
    limit = min(limit, MAX_ID) if limit and limit > 0 else default_limit
    return (page - 1) * limit, limit


async def parse_request_body(request: Request) -> dict:
    """Parse request body from JSON or form data, with fallback to empty dict."""
    try:
        body = await request.json()
        return body if isinstance(body, dict) else {}
    except ValueError:
        try:
            form = await request.form()
            return dict(form)
        except (AssertionError, ValueError, MultiPartException):
            return {}


@contextmanager
def store_errors(session: Session, action: str):
    """Rolls back and re-raises store failures as DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise DatabaseError(f"Failed to {action}: {e}") from e


def combined_log_line(request: Request, status_code: int, length, elapsed_ms: float) -> str:
    """Formats one request in Apache combined log format."""
    client = request.client.host if request.client else "-"
    timestamp = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S +0000")
    target = request.url.path
    if request.url.query:
        target += f"?{request.url.query}"
    version = request.scope.get("http_version", "1.1")
    referrer = request.headers.get("referer", "-")
    agent = request.headers.get("user-agent", "-")
    return (
        f'{client} - - [{timestamp}] "{request.method} {target} HTTP/{version}" '
        f'{status_code} {length or "-"} "{referrer}" "{agent}" {elapsed_ms:.3f} ms'
    )
