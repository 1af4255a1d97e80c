from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.responses import Response

from jobtracker.config import settings
from jobtracker.errors import AppError, RateLimitError, ValidationError, error_response
from jobtracker.rate_limit import client_key


logger = logging.getLogger(__name__)

AUTH_PATHS = frozenset({"/api/auth/register", "/api/auth/login"})
UNLIMITED_PATHS = frozenset({"/health"})
CONTENT_SECURITY_POLICY = (
    "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'; "
    "script-src 'self'; connect-src 'self'; frame-ancestors 'self';"
)


async def enforce_rate_limits(request: Request, call_next) -> Response:
    """Apply the general limiter to all traffic and the strict limiter to auth attempts.

    Every auth attempt reserves a slot in the strict budget before it runs, so
    concurrent attempts cannot overshoot it. Successful attempts (status < 400)
    hand their slot back.
    """
    path = request.url.path
    if path in UNLIMITED_PATHS:
        return await call_next(request)

    key = client_key(request)
    general_limiter = request.app.state.general_limiter
    auth_limiter = request.app.state.auth_limiter

    if not general_limiter.allow(key):
        logger.warning("Rate limit exceeded for %s on %s", key, path)
        return error_response(RateLimitError())

    if request.method != "POST" or path not in AUTH_PATHS:
        return await call_next(request)

    stamp = auth_limiter.acquire(key)
    if stamp is None:
        logger.warning("Auth rate limit exceeded for %s on %s", key, path)
        return error_response(RateLimitError())

    response = await call_next(request)
    if response.status_code < 400:
        auth_limiter.release(key, stamp)
    return response


async def limit_body_size(request: Request, call_next) -> Response:
    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            too_large = int(content_length) > settings.max_body_bytes
        except ValueError:
            return error_response(ValidationError("Invalid Content-Length header"))
        if too_large:
            return error_response(AppError("Request body too large", status_code=413))
    return await call_next(request)


async def add_security_headers(request: Request, call_next) -> Response:
    response = await call_next(request)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "SAMEORIGIN")
    response.headers.setdefault("Referrer-Policy", "no-referrer")
    response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)
    return response
