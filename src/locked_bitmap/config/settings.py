"""
Configuration settings for locked_bitmap.

This module handles loading and validating configuration from TOML files
and environment variables.

Configuration hierarchy (later overrides earlier):
1. Default values (built-in)
2. config/default.toml
3. config/local.toml (gitignored)
4. File named by LOCKED_BITMAP_CONFIG_PATH
5. Environment variables (LOCKED_BITMAP_* prefix)
6. Command-line arguments

Example:
    >>> from locked_bitmap.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(f"Comparator: {settings.search.comparator}")
    >>> print(f"Result depth: {settings.transforms.bit_depth} bpp")
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from locked_bitmap.color import Color

ENV_PREFIX = "LOCKED_BITMAP_"
CONFIG_PATH_ENV = "LOCKED_BITMAP_CONFIG_PATH"


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="console", description="Output format (console or json)")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        if value not in ("console", "json"):
            raise ValueError(f"format must be 'console' or 'json', got {value!r}")
        return value


class SearchSettings(BaseModel):
    """Template search settings."""

    model_config = ConfigDict(extra="ignore")

    comparator: str = Field(
        default="exact",
        description="Registered comparator name (exact, rgb, tolerance)",
    )
    tolerance: int = Field(
        default=0,
        ge=0,
        le=255,
        description="Per-channel tolerance for the tolerance comparator",
    )


class TransformSettings(BaseModel):
    """Transform output settings."""

    model_config = ConfigDict(extra="ignore")

    bit_depth: int = Field(default=32, description="Bit depth of transform results")
    binary_threshold: int = Field(default=128, ge=0, le=255, description="Default luma threshold")
    brighter: str = Field(default="#FFFFFF", description="Color above the threshold")
    darker: str = Field(default="#000000", description="Color at or below the threshold")

    @field_validator("bit_depth")
    @classmethod
    def _check_bit_depth(cls, value: int) -> int:
        if value not in (8, 24, 32):
            raise ValueError(f"bit_depth must be 8, 24 or 32, got {value}")
        return value

    @field_validator("brighter", "darker")
    @classmethod
    def _check_color(cls, value: str) -> str:
        Color.from_hex(value)
        return value

    @property
    def brighter_color(self) -> Color:
        return Color.from_hex(self.brighter)

    @property
    def darker_color(self) -> Color:
        return Color.from_hex(self.darker)


class Settings(BaseModel):
    """Main settings container."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="locked-bitmap")

    # Subsystems
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    transforms: TransformSettings = Field(default_factory=TransformSettings)


def _find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Returns:
        List of config file paths (in order of priority)
    """
    files = []

    cwd = Path.cwd()
    for name in ["config/default.toml", "config/local.toml"]:
        path = cwd / name
        if path.exists():
            files.append(path)

    env_config = os.environ.get(CONFIG_PATH_ENV)
    if env_config:
        path = Path(env_config)
        if path.exists():
            files.append(path)

    return files


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _coerce(original: Any, value: str) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if isinstance(original, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original, int):
        return int(value)
    if isinstance(original, float):
        return float(value)
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Environment variables with the LOCKED_BITMAP_ prefix override config
    values. The first underscore-separated part that names a section selects
    it, the rest names the key:
    LOCKED_BITMAP_TRANSFORMS_BIT_DEPTH -> transforms.bit_depth

    Args:
        config: Configuration dictionary (defaults already merged in)

    Returns:
        Modified configuration
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == CONFIG_PATH_ENV:
            continue

        config_key = key[len(ENV_PREFIX) :].lower()
        section, _, rest = config_key.partition("_")

        if section in config and isinstance(config[section], dict) and rest:
            target = config[section]
            name = rest
        else:
            target = config
            name = config_key

        if name in target and not isinstance(target[name], dict):
            target[name] = _coerce(target[name], value)

    return config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from configuration files.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Settings instance
    """
    # Start from the built-in defaults so every key can be overridden
    config: dict[str, Any] = Settings().model_dump()

    if config_path:
        files = [Path(config_path)]
    else:
        files = _find_config_files()

    for path in files:
        file_config = _load_toml(path)
        config = _merge_dicts(config, file_config)

    config = _apply_env_overrides(config)

    return Settings(**config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance (cached after first call)
    """
    return load_settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache).

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
