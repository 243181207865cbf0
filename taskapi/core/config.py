# taskapi/core/config.py

import logging
import secrets
from typing import Annotated
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


logger = logging.getLogger(__name__)

MIN_SECRET_LENGTH = 32


class ConfigError(RuntimeError):
    pass


# -------------------------------
# Settings
# -------------------------------

class Settings(BaseSettings):
    """
    Runtime configuration for the API, read from the environment and `.env`.
    Built once at startup and handed to the components that need it.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    jwt_secret_key: str = ""
    jwt_issuer: str = "TaskApi"
    jwt_audience: str = "TaskApiClient"
    access_token_expire_hours: int = 12
    clock_skew_seconds: int = Field(120, validation_alias="TOKEN_CLOCK_SKEW_SECONDS")
    database_url: str = "sqlite:///./data/taskapi.db"
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:5173"]
    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    @model_validator(mode="after")
    def check_secret(self) -> "Settings":
        self.jwt_secret_key = resolve_secret(self.jwt_secret_key, self.environment)
        return self


def resolve_secret(secret: str | None, environment: str) -> str:
    """
    Returns the configured signing secret.
    Production refuses to start without a sufficiently long one; other
    environments get a random per-process key so no known default exists.
    """
    production = environment.lower() == "production"
    if not secret:
        if production:
            raise ConfigError("JWT_SECRET_KEY must be set when APP_ENV=production")
        logger.warning(
            "JWT_SECRET_KEY is not set; using an ephemeral key. "
            "Issued tokens will not survive a restart."
        )
        return secrets.token_urlsafe(48)
    if production and len(secret.encode("utf-8")) < MIN_SECRET_LENGTH:
        raise ConfigError(f"JWT_SECRET_KEY must be at least {MIN_SECRET_LENGTH} bytes")
    return secret
