from __future__ import annotations

from typing import Any, Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from ...errors import StoreFailure
from ...observability.logging import get_logger

T = TypeVar("T")

log = get_logger("dynamodb")


def _aws_request_id_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("ResponseMetadata", {}).get("RequestId")


def _err_code_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("Error", {}).get("Code")


def ddb_call(
    operation: str,
    fn: Callable[[], T],
    *,
    message: str,
    table_name: str | None = None,
    key: dict[str, Any] | None = None,
) -> T:
    """
    Run one DynamoDB call. botocore failures are logged with their details and
    re-raised as `StoreFailure(message)`; nothing is retried.
    """
    try:
        return fn()
    except ClientError as e:
        code = _err_code_from_client_error(e)
        log.warning(
            "ddb_error",
            operation=operation,
            table=table_name,
            key=key,
            error_code=code,
            aws_request_id=_aws_request_id_from_client_error(e),
            error=str(e),
        )
        raise StoreFailure(
            message=message,
            operation=operation,
            table_name=table_name,
            error_code=code,
            cause=e,
        ) from e
    except BotoCoreError as e:
        log.warning(
            "ddb_error",
            operation=operation,
            table=table_name,
            key=key,
            error=str(e),
        )
        raise StoreFailure(
            message=message,
            operation=operation,
            table_name=table_name,
            cause=e,
        ) from e
