"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from row_bag.core.connection import ConnectionConfig
from row_bag.core.settings import RowBagSettings, get_settings


class TestRowBagSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ROW_BAG_DRIVER", raising=False)
        settings = RowBagSettings(_env_file=None)
        assert settings.driver == "sqlite"
        assert settings.database == ":memory:"
        assert settings.log_level == "INFO"

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ROW_BAG_DRIVER", "postgresql")
        monkeypatch.setenv("ROW_BAG_HOST", "db.internal")
        monkeypatch.setenv("ROW_BAG_PORT", "5433")
        monkeypatch.setenv("ROW_BAG_DATABASE", "records")
        monkeypatch.setenv("ROW_BAG_POOL_SIZE", "2")
        settings = RowBagSettings(_env_file=None)
        assert settings.driver == "postgresql"
        assert settings.host == "db.internal"
        assert settings.port == 5433
        assert settings.pool_size == 2

    def test_to_connection_config(self) -> None:
        settings = RowBagSettings(
            _env_file=None, driver="mysql", host="h", port=3306, database="d", pool_size=3
        )
        config = settings.to_connection_config()
        assert isinstance(config, ConnectionConfig)
        assert config.driver == "mysql"
        assert config.host == "h"
        assert config.port == 3306
        assert config.database == "d"
        assert config.pool_size == 3

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
