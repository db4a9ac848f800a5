from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="APP_ENV")
    port: int = Field(default=8080, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # AWS / data
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    users_table_name: str = Field(default="LambdaInGoUser", validation_alias="USERS_TABLE_NAME")
    # Point at DynamoDB Local (or similar) during development.
    dynamodb_endpoint_url: str | None = Field(
        default=None, validation_alias="DYNAMODB_ENDPOINT_URL"
    )
    # "dynamodb" or "memory"
    user_store_backend: str = Field(default="dynamodb", validation_alias="USER_STORE_BACKEND")

    # Lambda (API Gateway stage prefix stripped before routing)
    api_gateway_base_path: str = Field(default="/", validation_alias="API_GATEWAY_BASE_PATH")

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    @property
    def is_development(self) -> bool:
        return self.normalized_environment == "development"

    @property
    def normalized_store_backend(self) -> str:
        return (self.user_store_backend or "").strip().lower() or "dynamodb"

    def require_in_production(self) -> None:
        """
        Enforce required settings in production.

        Development/staging may run against the in-memory store, production
        must be backed by a real table.
        """
        if not self.is_production:
            return

        problems: list[str] = []
        if not (self.users_table_name or "").strip():
            problems.append("USERS_TABLE_NAME is required")
        if self.normalized_store_backend != "dynamodb":
            problems.append("USER_STORE_BACKEND must be 'dynamodb'")

        if problems:
            raise RuntimeError("Invalid production configuration: " + ", ".join(problems))

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A representation safe for structured logs / diagnostics.
        """
        return {
            "environment": self.normalized_environment,
            "port": self.port,
            "log_level": self.log_level,
            "aws": {
                "aws_region": self.aws_region,
                "users_table_name": self.users_table_name,
                "dynamodb_endpoint_url": self.dynamodb_endpoint_url,
            },
            "store_backend": self.normalized_store_backend,
            "api_gateway_base_path": self.api_gateway_base_path,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()
    s.require_in_production()
    return s

