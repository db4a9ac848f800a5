from __future__ import annotations

from functools import lru_cache

import boto3
from botocore.config import Config

from ...settings import get_settings


@lru_cache(maxsize=1)
def botocore_config() -> Config:
    # Single attempt per call: failures surface to the caller as-is.
    return Config(
        retries={"total_max_attempts": 1, "mode": "standard"},
        connect_timeout=2,
        read_timeout=10,
    )


@lru_cache(maxsize=1)
def dynamodb_client():
    settings = get_settings()
    return boto3.client(
        "dynamodb",
        region_name=settings.aws_region,
        endpoint_url=settings.dynamodb_endpoint_url or None,
        config=botocore_config(),
    )
