"""
Logging utilities for the dispatch CLI.

This module provides utilities for logging, including:
- Structured loggers handed to the dispatcher, plugin manager and plugins
- Test/production environment tagging
- Redaction of configured secrets
"""

from __future__ import annotations

import logging
import os
import re
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Literal

import structlog

if TYPE_CHECKING:
    from dispatch_cli.core.config.app_config import AppConfig

DEFAULT_LOG_FORMAT = (
    "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"
)

# Settings whose key contains one of these markers are treated as secrets
SECRET_KEY_MARKERS = ("KEY", "TOKEN", "SECRET", "PASSWORD")


def _is_running_under_pytest() -> bool:
    """Detect if we're running under pytest."""
    return "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST") is not None


def _get_environment_tag() -> str:
    """Get the environment tag for logging.

    Returns:
        'test' if running under pytest, 'prod' otherwise
    """
    return "test" if _is_running_under_pytest() else "prod"


class EnvironmentTaggingFilter(logging.Filter):
    """Logging filter that adds environment tags to log records."""

    def __init__(self) -> None:
        super().__init__()
        self._env_tag = _get_environment_tag()

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.env_tag = self._env_tag
        return True


class EnvironmentTaggingFormatter(logging.Formatter):
    """Logging formatter that includes environment tags."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
    ) -> None:
        super().__init__(fmt or DEFAULT_LOG_FORMAT, datefmt, style=style)


class SecretRedactionFilter(logging.Filter):
    """Logging filter that masks known secret values in log records."""

    def __init__(self, secrets: Iterable[str] | None = None, mask: str = "***") -> None:
        super().__init__()
        self.mask = mask
        values = {s for s in (secrets or []) if s}
        self.pattern: re.Pattern[str] | None = None
        if values:
            # Prefer longer matches when one secret contains another
            escaped = sorted((re.escape(v) for v in values), key=len, reverse=True)
            self.pattern = re.compile("|".join(escaped))

    def _sanitize(self, obj: object) -> object:
        if self.pattern is None:
            return obj
        if isinstance(obj, str):
            return self.pattern.sub(self.mask, obj)
        if isinstance(obj, dict):
            return {k: self._sanitize(v) for k, v in obj.items()}
        if isinstance(obj, list | tuple):
            return type(obj)(self._sanitize(v) for v in obj)
        return obj

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if self.pattern is None:
            return True
        if isinstance(record.msg, str):
            record.msg = self._sanitize(record.msg)  # type: ignore[assignment]
        if record.args:
            if isinstance(record.args, dict):
                record.args = self._sanitize(record.args)  # type: ignore[assignment]
            elif isinstance(record.args, tuple):
                record.args = tuple(self._sanitize(a) for a in record.args)
        return True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    # Records must never reach stdout, even before configure_logging runs
    if not structlog.is_configured():
        _configure_structlog()
    return structlog.get_logger(name)  # type: ignore


def collect_secrets(settings: dict[str, str]) -> set[str]:
    """Return the setting values that look like credentials."""
    return {
        value
        for key, value in settings.items()
        if value and any(marker in key.upper() for marker in SECRET_KEY_MARKERS)
    }


def configure_logging_with_environment_tagging(
    level: int = logging.INFO,
    log_format: str | None = None,
    log_file: str | None = None,
    secrets: Iterable[str] | None = None,
) -> None:
    """Configure stdlib and structlog logging with environment tagging.

    Args:
        level: Logging level
        log_format: Optional log format string
        log_file: Optional log file path
        secrets: Values to mask in every emitted record
    """
    formatter = EnvironmentTaggingFormatter(fmt=log_format)
    filters: list[logging.Filter] = [
        EnvironmentTaggingFilter(),
        SecretRedactionFilter(secrets),
    ]

    # Console output goes to stderr so command output on stdout stays parseable
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        for filter_instance in filters:
            handler.addFilter(filter_instance)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    _configure_structlog()


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(config: AppConfig) -> None:
    """Configure logging based on configuration."""
    level = (
        logging.DEBUG
        if config.logging.verbose
        else getattr(logging, config.logging.level.value)
    )
    configure_logging_with_environment_tagging(
        level=level,
        log_file=config.logging.log_file,
        secrets=collect_secrets(config.settings),
    )
