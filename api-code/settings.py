from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator


DEFAULT_BOT_NAME = "EchoBot 9000"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_NAMES = frozenset(
    {"CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET"}
)


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    bot_name: str = Field(
        default=DEFAULT_BOT_NAME,
        alias="BOT_NAME",
        description="Display name embedded in every backendSignature.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level for the process.",
    )
    cors_allow_origins: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed to call the API.",
    )
    static_dir: str = Field(
        default="public",
        alias="STATIC_DIR",
        description="Directory holding the static chat client.",
    )
    serve_static: bool = Field(
        default=True,
        alias="SERVE_STATIC",
        description="When true, the static chat client is mounted at '/'.",
    )
    host: str = Field(default="0.0.0.0", alias="HOST", description="Bind address for uvicorn.")
    port: int = Field(default=9000, alias="PORT", description="Bind port for uvicorn.")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("bot_name")
    @classmethod
    def _strip_bot_name(cls, value: str) -> str:
        cleaned = value.strip()
        return cleaned or DEFAULT_BOT_NAME

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        # Unknown names fall back so logging.basicConfig never rejects them.
        level = value.strip().upper()
        return level if level in LOG_LEVEL_NAMES else DEFAULT_LOG_LEVEL

    @property
    def allowed_origins(self) -> List[str]:
        origins = [item.strip() for item in self.cors_allow_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(os.environ)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()
