from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from . import __version__
from .errors import (
    ERROR_INTERNAL,
    ERROR_INVALID_USER_DATA,
    ERROR_METHOD_NOT_ALLOWED,
    ERROR_ROUTE_NOT_FOUND,
    UserServiceError,
)
from .middleware.access_log import AccessLogMiddleware
from .middleware.normalize_path import NormalizePathMiddleware
from .middleware.request_context import RequestContextMiddleware
from .observability.logging import configure_logging, get_logger
from .repositories.base_repository import UserRepository
from .repositories.users_repo import build_user_repository
from .responses import error_response
from .routers.health import router as health_router
from .routers.users import router as users_router
from .settings import Settings, get_settings


def create_app(
    *,
    repository: UserRepository | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    # Logging must be configured before the app starts handling requests.
    configure_logging(level=settings.log_level)
    log = get_logger("startup")

    app = FastAPI(
        title="User API",
        version=__version__,
        # Trailing slashes are rewritten by NormalizePathMiddleware instead.
        redirect_slashes=False,
    )

    app.state.user_repository = repository if repository is not None else build_user_repository(settings)
    app.state.settings = settings

    log.info(
        "app_starting",
        settings=settings.to_log_safe_dict(),
        repository=type(app.state.user_repository).__name__,
    )

    # Middlewares (order matters; last added is outermost)
    app.add_middleware(AccessLogMiddleware, exclude_paths={"/"})
    # Request context (request-id) wraps access logging so log lines carry it.
    app.add_middleware(RequestContextMiddleware)
    # Outermost: path rewrite must happen before anything reads the path.
    app.add_middleware(NormalizePathMiddleware)

    # Error handlers
    app.add_exception_handler(UserServiceError, _user_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    # Routes
    app.include_router(health_router)
    app.include_router(users_router)

    return app


def _user_error_handler(request: Request, exc: UserServiceError) -> Response:
    # Details (store error codes, parse errors) stay in the logs.
    log = get_logger("users")
    log.info(
        "user_request_rejected",
        kind=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
        operation=getattr(exc, "operation", None),
        cause=str(exc.cause) if exc.cause else None,
        http_method=request.method.upper(),
    )
    return error_response(exc.status_code, exc.message)


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    status_code = int(getattr(exc, "status_code", 500) or 500)
    detail = getattr(exc, "detail", None)

    if status_code == 404:
        message = ERROR_ROUTE_NOT_FOUND
    elif status_code == 405:
        message = ERROR_METHOD_NOT_ALLOWED
    else:
        message = str(detail) if detail else None

    return error_response(status_code, message, headers=getattr(exc, "headers", None))


def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    return error_response(422, ERROR_INVALID_USER_DATA)


def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    # The response stays generic outside development; operators need the traceback.
    log = get_logger("unhandled")
    rid = getattr(getattr(request, "state", None), "request_id", None)
    log.exception(
        "unhandled_exception",
        request_id=str(rid) if rid else None,
        http_method=str(getattr(request, "method", "") or "").upper() or None,
        path=str(getattr(getattr(request, "url", None), "path", "") or ""),
    )

    message = ERROR_INTERNAL
    settings = getattr(request.app.state, "settings", None) or get_settings()
    if settings.is_development and str(exc):
        message = str(exc)
    return error_response(500, message)


app = create_app()
