"""
Configuration management for Keypad Calc.

Handles loading configuration from environment variables, YAML files,
and provides sensible defaults for all settings.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="KEYPAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    app_name: str = "Keypad Calc"
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    # Server settings
    host: str = "127.0.0.1"
    port: int = 8000

    # Engine settings
    precision: int = Field(12, ge=0, le=15)  # Decimal places kept in results

    # Keypad settings
    empty_display: str = "0"
    error_text: str = "Error"
    strip_trailing_operator: bool = True  # "2+" evaluates as "2" instead of failing
    history_limit: int = Field(50, ge=0)

    # API settings
    max_sessions: int = Field(1000, ge=1)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )


# Global settings instance
settings = Settings()


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    import yaml

    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def configure(overrides: dict[str, Any]) -> Settings:
    """
    Rebuild the global settings with explicit overrides applied.

    Overrides take priority over environment variables and `.env`.
    The module-level ``settings`` object is updated in place so modules
    that imported it see the new values.
    """
    fresh = Settings(**overrides)
    for name in Settings.model_fields:
        setattr(settings, name, getattr(fresh, name))
    return settings


def settings_environ(config: Settings | None = None) -> dict[str, str]:
    """
    Render settings as ``KEYPAD_*`` environment variables.

    A child process (uvicorn's reloader) rebuilding ``Settings`` from these
    gets the same values, including overrides from ``--config``.
    """
    config = config or settings
    prefix = config.model_config.get("env_prefix", "")
    environ = {}
    for name, value in config.model_dump().items():
        if isinstance(value, (list, dict)):
            value = json.dumps(value)
        environ[f"{prefix}{name}".upper()] = str(value)
    return environ
