from __future__ import annotations

from fastapi import APIRouter, Request

from .. import __version__
from ..settings import get_settings

router = APIRouter()


@router.get("/", tags=["health"])
def health(request: Request):
    settings = get_settings()
    repo = getattr(request.app.state, "user_repository", None)
    return {
        "message": "User API",
        "version": __version__,
        "status": "running",
        "environment": settings.normalized_environment,
        "store": type(repo).__name__ if repo is not None else "missing",
        "table": settings.users_table_name,
        "endpoints": [
            "GET /users",
            "GET /users?email=",
            "POST /users",
            "PUT /users",
            "DELETE /users?email=",
        ],
    }
