"""
Configuration — typed, validated settings loaded from environment/.env.

Only the service wrapper needs configuration; the codec itself reads no
environment and has no settings.

AppSettings is the single BaseSettings instance. Sub-settings are plain
BaseModel classes populated via env_nested_delimiter="__", so the env var
DATABASE__HOST maps to database.host and HTTP__PORT to http.port.
Configuration errors surface at startup, not on the first request.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env at the project root, independent of the working directory.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class DatabaseSettings(BaseModel):
    """
    PostgreSQL connection for the uniqueness lookup.

    Either DATABASE__DSN, or all of DATABASE__HOST, DATABASE__NAME,
    DATABASE__USERNAME and DATABASE__PASSWORD (port defaults to 5432).
    The DSN wins when both are given.
    """

    dsn: SecretStr | None = Field(
        default=None,
        description="Full PostgreSQL connection string (overrides individual fields)",
    )
    host: str | None = Field(default=None, description="PostgreSQL host")
    port: int = Field(default=5432, ge=1, le=65535, description="PostgreSQL port")
    name: str | None = Field(default=None, description="PostgreSQL database name")
    username: str | None = Field(default=None, description="PostgreSQL username")
    password: SecretStr | None = Field(default=None, description="PostgreSQL password")

    @model_validator(mode="after")
    def resolve_dsn(self) -> DatabaseSettings:
        """Build `dsn` from the components when it was not given directly."""
        if self.dsn is not None:
            return self
        missing = [
            env_name
            for env_name, value in (
                ("DATABASE__HOST", self.host),
                ("DATABASE__NAME", self.name),
                ("DATABASE__USERNAME", self.username),
                ("DATABASE__PASSWORD", self.password),
            )
            if not value
        ]
        if missing:
            raise ValueError("Set DATABASE__DSN or provide all of: " + ", ".join(missing))
        dsn_value = (
            f"postgresql://{self.username}:{self.password.get_secret_value()}"  # type: ignore[union-attr]
            f"@{self.host}:{self.port}/{self.name}"
        )
        object.__setattr__(self, "dsn", SecretStr(dsn_value))
        return self

    def get_dsn(self) -> str:
        """Active DSN as a plain string; `resolve_dsn` guarantees it is set."""
        assert self.dsn is not None
        return self.dsn.get_secret_value()


class HttpSettings(BaseModel):
    """Bind address for the uvicorn server."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8000, ge=1, le=65535, description="TCP port")


class AppSettings(BaseSettings):
    """
    Root settings.

    Load order (highest priority first): environment variables, .env file,
    defaults.
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    database: DatabaseSettings
    http: HttpSettings = Field(default_factory=lambda: HttpSettings())

    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False, description="Render logs as JSON lines")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject unknown level names."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level
