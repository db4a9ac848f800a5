"""Shared DynamoDB utilities.

This package centralizes:
- boto3 client configuration
- mapping botocore failures to `StoreFailure` with a static, client-safe message
"""
