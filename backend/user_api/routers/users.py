from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from ..errors import ERROR_METHOD_NOT_ALLOWED
from ..repositories.base_repository import UserRepository
from ..responses import api_response, error_response
from ..services import users_service

router = APIRouter(tags=["users"])

# Everything is routed here so unsupported methods get the uniform 405 body.
ACCEPTED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.user_repository


def _get(repo: UserRepository, request: Request, _: bytes) -> Response:
    email = request.query_params.get("email") or ""
    if email:
        user = users_service.fetch_user(repo, email)
        return api_response(200, user)
    return api_response(200, users_service.list_users(repo))


def _post(repo: UserRepository, _: Request, body: bytes) -> Response:
    users_service.create_user(repo, body)
    return api_response(201)


def _put(repo: UserRepository, _: Request, body: bytes) -> Response:
    users_service.update_user(repo, body)
    return api_response(201)


def _delete(repo: UserRepository, request: Request, _: bytes) -> Response:
    email = request.query_params.get("email", "")
    return api_response(200, users_service.delete_user(repo, email))


_HANDLERS: dict[str, Callable[[UserRepository, Request, bytes], Response]] = {
    "GET": _get,
    "POST": _post,
    "PUT": _put,
    "DELETE": _delete,
}


@router.api_route("/users", methods=ACCEPTED_METHODS)
async def users(request: Request, repo: UserRepository = Depends(get_user_repository)):
    handler = _HANDLERS.get(request.method.upper())
    if handler is None:
        return error_response(405, ERROR_METHOD_NOT_ALLOWED)
    body = await request.body()
    # Store calls block; keep them off the event loop.
    return await run_in_threadpool(handler, repo, request, body)
