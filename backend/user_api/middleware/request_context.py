from __future__ import annotations

import re
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability.context import request_id_var

REQUEST_ID_HEADER = "X-Request-Id"

# API Gateway / ALB ids and UUIDs fit comfortably; anything else is replaced.
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._:\-]{1,128}")


def resolve_request_id(inbound: str | None) -> str:
    """Trusted inbound id, or a fresh UUIDv4 when absent or malformed."""
    candidate = (inbound or "").strip()
    if _REQUEST_ID_RE.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds one request id per call: stored on `request.state.request_id`,
    exposed to log lines through `request_id_var`, echoed as `X-Request-Id`.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
