"""
Application settings read from the environment.

Values may come from a .env file at the project root, loaded by app.main
before the first call to get_settings().
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from app.core.exceptions import ConfigurationError

# backend/app/core/config.py -> backend
BACKEND_DIR = Path(__file__).resolve().parents[2]

STORAGE_BACKENDS = ("local", "firestore")


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    storage_backend: str = "local"
    data_dir: Path = BACKEND_DIR / "data"
    static_dir: Path = BACKEND_DIR / "static"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        storage_backend = os.environ.get("STORAGE_BACKEND", "local").strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend: {storage_backend}",
                details={"allowed": list(STORAGE_BACKENDS)},
            )

        port_value = os.environ.get("PORT", "8000")
        try:
            port = int(port_value)
        except ValueError as e:
            raise ConfigurationError(f"PORT must be an integer, got {port_value!r}") from e

        return cls(
            environment=os.environ.get("ENVIRONMENT", "development"),
            storage_backend=storage_backend,
            data_dir=Path(os.environ.get("DATA_DIR", str(BACKEND_DIR / "data"))),
            static_dir=Path(os.environ.get("STATIC_DIR", str(BACKEND_DIR / "static"))),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            host=os.environ.get("HOST", "127.0.0.1"),
            port=port,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
