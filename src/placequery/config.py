"""Settings: file + environment resolution with a module-level cache."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError

ENV_PREFIX = "PLACEQUERY_"
CONFIG_NAMES = (".placequery.json", "placequery.json")


class Settings(BaseModel):
    """placequery settings."""

    url_encode: bool = True
    base_url: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


_SETTINGS: Settings | None = None
_SETTINGS_PATH: Path | None = None


def resolve_config_path(cli_path: Optional[Path] = None) -> Optional[Path]:
    """
    Resolve the settings file path with precedence:
    1. Explicit path (CLI --config)
    2. PLACEQUERY_PATH env var
    3. CWD: .placequery.json or placequery.json (prefer .placequery.json)

    Returns None when no file applies; defaults are used then.
    """
    if cli_path:
        return cli_path

    env = os.getenv(f"{ENV_PREFIX}PATH")
    if env:
        return Path(env).expanduser()

    cwd = Path.cwd()
    for name in CONFIG_NAMES:
        p = cwd / name
        if p.exists():
            return p

    return None


def _load_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config in {path} must be a JSON object")
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in Settings.model_fields:
        value = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def reset() -> None:
    """Reset cached settings (primarily for tests)."""

    global _SETTINGS, _SETTINGS_PATH
    _SETTINGS = None
    _SETTINGS_PATH = None


def settings_path() -> Path | None:
    """Return the path the active settings were loaded from, if any."""

    return _SETTINGS_PATH


def use(path: Path | str | None = None) -> Settings:
    """Load settings from ``path`` (or fallback locations) and cache them.

    Raises:
        ConfigError: If the file is unreadable or values are invalid
    """

    target = Path(path) if path is not None else None
    resolved = resolve_config_path(target)
    data = _load_file(resolved) if resolved is not None else {}
    data.update(_env_overrides())

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    global _SETTINGS, _SETTINGS_PATH
    _SETTINGS = settings
    _SETTINGS_PATH = resolved
    return settings


def require() -> Settings:
    """Return the cached settings, loading them if necessary."""

    if _SETTINGS is None:
        return use(None)
    return _SETTINGS


__all__ = [
    "Settings",
    "require",
    "reset",
    "resolve_config_path",
    "settings_path",
    "use",
]
