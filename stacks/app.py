#!/usr/bin/env python3

import hmac
import logging
import time
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from stacks.configs import OPTIONS, LOG_LEVEL, CORS_ORIGINS
from stacks import configs
from stacks.core.exceptions import (
    GENERIC_ERROR,
    StacksAPIError,
    InvalidAPIKeyError,
    RateLimitError,
)
from stacks.core.limiter import RateLimiter
from stacks.core.utils import combined_log_line
from stacks.routes import books, members, issuances
from stacks import __version__ as VERSION

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("stacks.access")

app = FastAPI(
    title="Stacks API",
    description="Stacks: book, member and issuance circulation for libraries",
    version=VERSION,
)

limiter = RateLimiter()


def error_response(error: StacksAPIError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StacksAPIError)
async def stacks_error_handler(request: Request, exc: StacksAPIError):
    return error_response(exc)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=dict(GENERIC_ERROR))


# Middleware registered last runs first: CORS, access log, rate limit, API key.

@app.middleware("http")
async def require_api_key(request: Request, call_next):
    api_key = request.headers.get("x-api-key")
    expected = configs.API_KEY
    if not api_key or not expected or not hmac.compare_digest(api_key.encode(), expected.encode()):
        return error_response(InvalidAPIKeyError())
    return await call_next(request)


@app.middleware("http")
async def rate_limit(request: Request, call_next):
    client = request.client.host if request.client else "unknown"
    if limiter.is_rate_limited(client):
        logger.warning(f"Rate limit exceeded for {client}")
        return error_response(RateLimitError())
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    status_code = 500
    length = None
    try:
        response = await call_next(request)
        status_code = response.status_code
        length = response.headers.get("content-length")
        return response
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(combined_log_line(request, status_code, length, elapsed_ms))


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(books.router)
app.include_router(members.router)
app.include_router(issuances.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("stacks.app:app", **OPTIONS)
