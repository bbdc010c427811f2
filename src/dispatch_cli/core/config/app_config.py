from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator

from dispatch_cli.core.common.exceptions import ConfigurationError
from dispatch_cli.core.interfaces.configuration_interface import IConfig
from dispatch_cli.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILES = (".env", ".env.local")
DEFAULT_PLUGINS = ("calculator", "toolbox")


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.WARNING
    log_file: str | None = None
    verbose: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class PluginsConfig(DomainModel):
    """Which plugins are loaded at bootstrap."""

    enabled: list[str] = Field(default_factory=lambda: list(DEFAULT_PLUGINS))
    discover_entry_points: bool = True


class AppConfig(DomainModel, IConfig):
    """Complete application configuration."""

    app_name: str = "dispatch-cli"
    version: str = "1.0.0"

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    # Flat key/value store read by plugins (credentials, endpoints, ...)
    settings: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Create AppConfig from environment variables.

        Returns:
            AppConfig instance
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        return _validate_config(_config_from_env(env))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key.

        Dotted keys address model attributes (``logging.level``); anything
        else is looked up in ``settings``.
        """
        if key in self.settings:
            return self.settings[key]

        value: Any = self
        for part in key.split("."):
            if isinstance(value, dict):
                if part not in value:
                    return default
                value = value[part]
            elif isinstance(value, DomainModel) and part in type(value).model_fields:
                value = getattr(value, part)
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a value in the settings store."""
        self.settings[key] = str(value)


def _config_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Translate environment variables into a partial configuration mapping."""
    config: dict[str, Any] = {}
    logging_section: dict[str, Any] = {}
    plugins_section: dict[str, Any] = {}

    if env.get("LOG_LEVEL"):
        logging_section["level"] = env["LOG_LEVEL"]
    if env.get("LOG_FILE_PATH"):
        logging_section["log_file"] = env["LOG_FILE_PATH"]
    if "VERBOSE" in env:
        logging_section["verbose"] = _env_to_bool("VERBOSE", False, env)

    if "DISPATCH_CLI_PLUGINS" in env:
        plugins_section["enabled"] = _split_csv(env["DISPATCH_CLI_PLUGINS"])
    if "DISPATCH_CLI_DISCOVER_PLUGINS" in env:
        plugins_section["discover_entry_points"] = _env_to_bool(
            "DISPATCH_CLI_DISCOVER_PLUGINS", True, env
        )

    if logging_section:
        config["logging"] = logging_section
    if plugins_section:
        config["plugins"] = plugins_section

    settings = {key: value for key, value in env.items() if value}
    if settings:
        config["settings"] = settings
    return config


def _validate_config(data: dict[str, Any]) -> AppConfig:
    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError("Invalid configuration", cause=str(exc)) from exc


def _merge_dicts(d1: dict[str, Any], d2: dict[str, Any]) -> dict[str, Any]:
    for k, v in d2.items():
        if k in d1 and isinstance(d1[k], dict) and isinstance(v, dict):
            _merge_dicts(d1[k], v)
        else:
            d1[k] = v
    return d1


def _load_yaml_file(path: Path) -> dict[str, Any]:
    if path.suffix.lower() not in (".yaml", ".yml"):
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}",
            cause="Use YAML (.yaml/.yml).",
        )
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Failed to load config from {path}", cause=str(exc)
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration structure in {path}",
            cause="Top-level YAML value must be a mapping.",
        )
    return data


def _load_env_file(env_file: str | Path | None) -> dict[str, str]:
    """Read the first existing dotenv file."""
    candidates = (
        [Path(env_file)]
        if env_file
        else [Path.cwd() / name for name in DEFAULT_ENV_FILES]
    )
    for candidate in candidates:
        if candidate.exists():
            values = dotenv_values(candidate)
            logger.debug("Loaded %d values from %s", len(values), candidate)
            return {k: v for k, v in values.items() if v is not None}
    return {}


def load_config(
    config_path: str | Path | None = None,
    *,
    env_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load configuration from file, dotenv and environment.

    Args:
        config_path: Optional path to a YAML configuration file
        env_file: Optional dotenv file; defaults to .env then .env.local
        environ: Environment mapping, defaults to os.environ

    Returns:
        AppConfig instance
    """
    env = os.environ if environ is None else environ
    config_data: dict[str, Any] = AppConfig().model_dump()

    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning(f"Configuration file not found: {config_path}")
        else:
            _merge_dicts(config_data, _load_yaml_file(path))

    # Process environment wins over dotenv values
    layered_env: dict[str, str] = {**_load_env_file(env_file), **dict(env)}
    _merge_dicts(config_data, _config_from_env(layered_env))

    return _validate_config(config_data)
