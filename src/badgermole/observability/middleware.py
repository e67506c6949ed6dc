"""
badgermole.observability.middleware

HTTP middleware that ties sign-up and redemption log events to one request.

Responsibilities:
- Accept a caller-supplied `x-request-id` or mint one, and echo it back.
- Bind request id, route and client address into structlog contextvars so
  `otp_redeemed` / `otp_redeem_rejected` / `principal_registered` events carry them.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            client=request.client.host if request.client else None,
        )
        try:
            response: Response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        # Rejected redemptions return the id too, so a user report can be matched to the log line.
        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# The submitted `otp` form field is never bound here; only the client address is,
# which is enough to trace repeated bad codes to a source.
