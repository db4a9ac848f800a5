from __future__ import annotations

from typing import Any

import orjson
from pydantic import BaseModel
from starlette.responses import Response

from .observability.logging import get_logger

JSON = "application/json"

log = get_logger("responses")


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def render_body(body: Any) -> bytes:
    """
    Serialize a response body. `None` and unserializable bodies both render
    as an empty body.
    """
    if body is None:
        return b""
    try:
        return orjson.dumps(body, default=_default)
    except TypeError as e:
        log.warning("response_marshal_failed", error=str(e), body_type=type(body).__name__)
        return b""


def api_response(status_code: int, body: Any = None, *, headers: dict[str, str] | None = None) -> Response:
    return Response(
        content=render_body(body),
        status_code=int(status_code),
        media_type=JSON,
        headers=headers,
    )


def error_body(message: str | None) -> dict[str, str]:
    # `error` is omitted when there is no message.
    return {"error": message} if message else {}


def error_response(status_code: int, message: str | None, *, headers: dict[str, str] | None = None) -> Response:
    return api_response(status_code, error_body(message), headers=headers)
