"""Environment-driven settings.

Loads connection and logging settings from ``ROW_BAG_*`` environment
variables (or a ``.env`` file) and turns them into a ConnectionConfig.

Usage:
    from row_bag.core.settings import get_settings

    settings = get_settings()
    mapper = Mapper.from_config(settings.to_connection_config())
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from row_bag.core.connection import ConnectionConfig


class RowBagSettings(BaseSettings):
    # Database
    driver: str = "sqlite"
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str = ":memory:"
    pool_size: int = Field(5, ge=1)
    extra: dict[str, Any] = {}

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="ROW_BAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_connection_config(self) -> ConnectionConfig:
        """Connection fields of these settings as a ConnectionConfig."""
        return ConnectionConfig(
            driver=self.driver,
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            database=self.database,
            pool_size=self.pool_size,
            extra=self.extra,
        )


@lru_cache(maxsize=1)
def get_settings() -> RowBagSettings:
    """Cached settings instance, so the environment is parsed once."""
    return RowBagSettings()
