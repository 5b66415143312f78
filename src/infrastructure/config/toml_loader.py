"""TOML configuration loader with env overrides.

config/default.toml is read first, config/development.toml (optional,
not committed) is merged over it section by section, then environment
variables win over both.
"""

import logging
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from src.domain.ports.config import (
    AnalyzerConfig,
    AppConfig,
    SecurityConfig,
    ServerConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _lower(value: str) -> str:
    return value.strip().lower()


# ENV name -> (section, key, cast). Cast errors are logged and the variable is ignored.
ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "PORT": ("server", "port", int),
    "LOG_LEVEL": ("logging", "level", str.upper),
    "LOG_FORMAT": ("logging", "format", _lower),
    "LOG_FILE": ("logging", "file", str.strip),
    "CORS_ORIGINS": ("security", "cors_origins", _csv),
    "RATE_LIMIT_PER_MINUTE": ("security", "rate_limit_requests_per_minute", int),
    "ANALYZER_MAX_WORKERS": ("analyzer", "max_workers", int),
    "ANALYZER_MAX_LINE_LENGTH": ("analyzer", "max_line_length", int),
    "ANALYZER_MAX_FILE_SIZE": ("analyzer", "max_file_size", int),
}


def _load_toml(path: Path) -> dict:
    """Load TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_sections(base: dict, override: dict) -> dict:
    """Merge override into base one level deep: tables are merged, scalars replaced."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(config: dict) -> dict:
    """Apply environment variable overrides."""
    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if not raw:
            continue
        try:
            value = cast(raw)
        except ValueError:
            logger.warning("Invalid %s env value: %r, ignoring", env_name, raw)
            continue
        config.setdefault(section, {})[key] = value
    return config


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Load configuration from TOML files with env overrides.

    Args:
        config_dir: Directory with default.toml / development.toml;
            defaults to the repository's config/.

    Raises:
        pydantic.ValidationError: If a section holds invalid values.
    """
    config_dir = config_dir or DEFAULT_CONFIG_DIR

    config: dict = {}
    for name in ("default.toml", "development.toml"):
        path = config_dir / name
        if path.exists():
            config = _merge_sections(config, _load_toml(path))

    config = _apply_env_overrides(config)

    logging_raw = config.get("logging") or {}
    return AppConfig(
        server=ServerConfig(**(config.get("server") or {})),
        security=SecurityConfig(**(config.get("security") or {})),
        analyzer=AnalyzerConfig(**(config.get("analyzer") or {})),
        log_level=logging_raw.get("level", "INFO"),
        log_file=(logging_raw.get("file") or "").strip(),
        log_format=str(logging_raw.get("format", "")).strip().lower(),
        log_rotation_max_mb=int(logging_raw.get("log_rotation_max_mb", 5)),
        log_rotation_backups=int(logging_raw.get("log_rotation_backups", 3)),
    )
