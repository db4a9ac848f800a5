#!/usr/bin/env python3
"""
Create the users table (partition key `email`, on-demand billing).

Mostly useful against DynamoDB Local during development; production tables are
expected to be provisioned by infrastructure code.

Usage:
    python scripts/create_users_table.py [--table NAME] [--endpoint-url URL] [--wait]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure `backend/` is on sys.path so `import user_api.*` works from a checkout.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import boto3
from botocore.exceptions import ClientError

from user_api.observability.logging import configure_logging, get_logger
from user_api.settings import get_settings

log = get_logger("create_users_table")


def create_users_table(client, *, table_name: str, wait: bool = False) -> bool:
    """Create the table; returns False if it already exists."""
    try:
        client.create_table(
            TableName=table_name,
            AttributeDefinitions=[{"AttributeName": "email", "AttributeType": "S"}],
            KeySchema=[{"AttributeName": "email", "KeyType": "HASH"}],
            BillingMode="PAY_PER_REQUEST",
        )
    except ClientError as e:
        if (e.response or {}).get("Error", {}).get("Code") == "ResourceInUseException":
            log.info("table_exists", table=table_name)
            return False
        raise

    if wait:
        client.get_waiter("table_exists").wait(TableName=table_name)
    log.info("table_created", table=table_name)
    return True


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create the users DynamoDB table")
    parser.add_argument("--table", default=settings.users_table_name)
    parser.add_argument("--endpoint-url", default=settings.dynamodb_endpoint_url)
    parser.add_argument("--region", default=settings.aws_region)
    parser.add_argument("--wait", action="store_true", help="Block until the table is ACTIVE")
    args = parser.parse_args(argv)

    configure_logging(level=settings.log_level)
    client = boto3.client("dynamodb", region_name=args.region, endpoint_url=args.endpoint_url or None)
    create_users_table(client, table_name=args.table, wait=args.wait)
    return 0


if __name__ == "__main__":
    sys.exit(main())
