from __future__ import annotations

from typing import Any, Awaitable, Callable


class NormalizePathMiddleware:
    """
    Rewrite `/users/` to `/users` in the ASGI scope instead of redirecting.

    The app runs with `redirect_slashes=False`; API Gateway and some clients
    still append a trailing slash.
    """

    def __init__(self, app: Callable[..., Awaitable[Any]]):
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable):
        if scope.get("type") == "http":
            path = str(scope.get("path") or "")
            if path and path != "/" and path.endswith("/"):
                new_path = path.rstrip("/") or "/"
                scope["path"] = new_path
                # Route matching uses scope["path"]; keep raw_path consistent.
                if isinstance(scope.get("raw_path"), (bytes, bytearray)):
                    scope["raw_path"] = new_path.encode("utf-8")
        return await self.app(scope, receive, send)
