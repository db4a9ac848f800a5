"""
AWS Lambda entry point for API Gateway proxy events (REST v1 and HTTP v2).

Configure the function handler as `user_api.lambda_handler.handler`.
"""

from __future__ import annotations

from fastapi import FastAPI
from mangum import Mangum

from .main import app as default_app
from .settings import get_settings


def build_handler(app: FastAPI | None = None) -> Mangum:
    return Mangum(
        app or default_app,
        lifespan="off",
        api_gateway_base_path=get_settings().api_gateway_base_path or "/",
    )


handler = build_handler()
