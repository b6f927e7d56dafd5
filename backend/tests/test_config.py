"""Tests for environment-driven settings."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from app.api.dependencies import build_repository
from app.core.config import BACKEND_DIR, Settings
from app.core.exceptions import ConfigurationError
from app.core.logging import setup_logging
from app.repositories.local_repo import LocalRepository


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for name in ("ENVIRONMENT", "STORAGE_BACKEND", "DATA_DIR", "STATIC_DIR", "LOG_LEVEL", "HOST", "PORT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.environment == "development"
        assert settings.storage_backend == "local"
        assert settings.data_dir == BACKEND_DIR / "data"
        assert settings.static_dir == BACKEND_DIR / "static"
        assert settings.port == 8000

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STORAGE_BACKEND", " Firestore ")
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("PORT", "9000")
        settings = Settings.from_env()
        assert settings.storage_backend == "firestore"
        assert settings.data_dir == Path(tmp_path)
        assert settings.log_level == "DEBUG"
        assert settings.port == 9000

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "postgres")
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env()
        assert exc_info.value.details["allowed"] == ["local", "firestore"]

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ConfigurationError):
            Settings.from_env()


class TestBuildRepository:
    """Tests for repository selection."""

    def test_local_backend(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            "app.api.dependencies.get_settings",
            lambda: Settings(data_dir=tmp_path / "ledger"),
        )
        repo = build_repository("local")
        assert isinstance(repo, LocalRepository)
        assert repo.data_dir == tmp_path / "ledger"

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError):
            build_repository("sqlite")


class TestCorsEnvironment:
    """Tests for CORS origins chosen from the configured environment."""

    def test_development_origins(self):
        from app.core.config import get_settings
        from app.main import CORS_ORIGINS, ENVIRONMENT, origins

        assert ENVIRONMENT == get_settings().environment == "development"
        assert origins == CORS_ORIGINS["development"]
        assert "http://localhost:5173" in origins


class TestSetupLogging:
    """Tests for reconfiguring the already-initialized logger."""

    @pytest.fixture
    def restore_level(self):
        logger = logging.getLogger("kakeibo")
        levels = [logger.level] + [h.level for h in logger.handlers]
        yield logger
        logger.setLevel(levels[0])
        for handler, level in zip(logger.handlers, levels[1:]):
            handler.setLevel(level)

    def test_explicit_level_applies_after_import(self, restore_level):
        logger = setup_logging("debug")
        assert logger is restore_level
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    def test_no_level_keeps_current_configuration(self, restore_level):
        restore_level.setLevel(logging.WARNING)
        setup_logging()
        assert restore_level.level == logging.WARNING
        assert len(restore_level.handlers) == 1
