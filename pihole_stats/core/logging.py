"""
Centralized Logging.

structlog on top of the standard library logging module. Every record,
whether emitted through structlog or a plain stdlib logger (httpx, for
example), is rendered by the same ProcessorFormatter.

Configuration comes from config/settings/logging.yaml; explicit arguments
to setup_logging() take precedence.

Usage:
    from pihole_stats.core.logging import get_logger, setup_logging

    setup_logging(level="DEBUG", format_type="console")
    logger = get_logger(__name__)
    logger.info("Fetched status", endpoint="status")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog

from pihole_stats.core.config import find_project_root, load_yaml_config

LOG_SOURCES = {"cli", "api", "services", "internal", "unknown"}

LOG_FILE_NAME = "pihole_stats.log"

DEFAULT_LOGGING_CONFIG: dict[str, Any] = {
    "level": "WARNING",
    "format": "console",
    "handlers": {
        "console": {"enabled": True},
        "file": {"enabled": False},
    },
}

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """Load logging.yaml and cache the result."""
    global _logging_config
    _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _get_logging_config() -> dict[str, Any]:
    """
    Return the cached logging configuration, loading it on first use.

    Outside a source checkout there is no config/settings/logging.yaml;
    DEFAULT_LOGGING_CONFIG is used instead.
    """
    global _logging_config
    if _logging_config is None:
        try:
            return _load_logging_config()
        except FileNotFoundError:
            _logging_config = DEFAULT_LOGGING_CONFIG
    return _logging_config


def _get_logs_dir() -> Path:
    """Return data/logs under the project root, creating it if needed."""
    logs_dir = find_project_root() / "data" / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _build_formatter(format_type: str, colors: bool) -> structlog.stdlib.ProcessorFormatter:
    processors: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if format_type == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=processors,
    )


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Args:
        level: Log level name. Defaults to logging.yaml "level".
        format_type: "console" or "json". Defaults to logging.yaml "format".
        enable_file_logging: Write to data/logs/pihole_stats.log.
            Defaults to logging.yaml handlers.file.enabled.
    """
    config = _get_logging_config()
    handlers_config = config.get("handlers", {})
    file_config = handlers_config.get("file", {})

    level = (level or config.get("level", "WARNING")).upper()
    format_type = format_type or config.get("format", "console")
    if enable_file_logging is None:
        enable_file_logging = file_config.get("enabled", False)

    structlog.configure(
        processors=_shared_processors()
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    # Logs go to stderr, report output owns stdout
    if handlers_config.get("console", {}).get("enabled", True):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            _build_formatter(format_type, colors=sys.stderr.isatty())
        )
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        file_handler = RotatingFileHandler(
            _get_logs_dir() / LOG_FILE_NAME,
            maxBytes=file_config.get("max_bytes", 10485760),
            backupCount=file_config.get("backup_count", 5),
        )
        # Files are always JSON so they can be shipped as-is
        file_handler.setFormatter(_build_formatter("json", colors=False))
        root_logger.addHandler(file_handler)

    # httpx logs every request at INFO, including the full URL with the token
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the given name."""
    return structlog.get_logger(name)


def log_with_source(
    logger: Any,
    source: str,
    level: str,
    message: str,
    **kwargs: Any,
) -> None:
    """
    Log a message tagged with its source.

    Args:
        logger: Logger from get_logger()
        source: One of LOG_SOURCES
        level: debug, info, warning, error or critical
        message: Event message
        **kwargs: Extra structured fields
    """
    if source not in LOG_SOURCES:
        source = "unknown"
    getattr(logger, level)(message, source=source, **kwargs)
