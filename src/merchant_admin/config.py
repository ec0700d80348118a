"""Environment-driven configuration for the admin back-office."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    raw = _env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class AppConfig:
    env: str = field(default_factory=lambda: _env("APP_ENV", "development"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))

    @property
    def is_development(self) -> bool:
        return self.env == "development"


@dataclass(frozen=True)
class DataServiceConfig:
    """Connection settings for the CRUD data service behind the admin screens."""

    base_url: str = field(
        default_factory=lambda: _env("DATA_SERVICE_URL", "http://localhost:3000")
    )
    token: str = field(default_factory=lambda: _env("DATA_SERVICE_TOKEN"))
    timeout: float = field(default_factory=lambda: _env_float("DATA_SERVICE_TIMEOUT", 10.0))


@dataclass(frozen=True)
class EditorConfig:
    """Timing defaults for the save engines."""

    debounce_ms: int = field(default_factory=lambda: _env_int("AUTOSAVE_DEBOUNCE_MS", 3000))
    saved_display_ms: int = field(default_factory=lambda: _env_int("SAVED_DISPLAY_MS", 2000))


@dataclass(frozen=True)
class Settings:
    app: AppConfig = field(default_factory=AppConfig)
    data_service: DataServiceConfig = field(default_factory=DataServiceConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
