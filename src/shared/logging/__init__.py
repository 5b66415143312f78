"""Structured logging setup with stdlib integration."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

LOG_FORMATS = ("json", "console")

# Per-request analysis is chatty at DEBUG; keep third-party noise down
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _pick_renderer(level: str, log_format: str):
    """JSON by default, console for DEBUG unless format is set explicitly."""
    fmt = log_format.lower().strip()
    if fmt not in LOG_FORMATS:
        fmt = "console" if level.upper() == "DEBUG" else "json"
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(
    level: str = "INFO",
    file_path: str = "",
    rotation_max_mb: int = 5,
    rotation_backups: int = 3,
    log_format: str = "",
) -> None:
    """Configure structlog integrated with standard library logging.

    Analyzer modules log through logging.getLogger(), the API layer through
    structlog.get_logger(); both end up in the same handlers and format.
    Values bound with structlog.contextvars (e.g. request_id) are merged into
    every structlog event of the current request.

    Args:
        level: Root log level name.
        file_path: Optional log file; rotated at rotation_max_mb, keeping
            rotation_backups old files. Directory is created if missing.
        log_format: "json" or "console"; empty picks console for DEBUG.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _pick_renderer(level, log_format),
        ],
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(log_level)
    root.addHandler(stream_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if file_path and file_path.strip():
        path = Path(file_path.strip()).resolve()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                path,
                maxBytes=rotation_max_mb * 1024 * 1024,
                backupCount=rotation_backups,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(log_level)
            root.addHandler(file_handler)
        except OSError as e:
            # stdout handler stays; report on stderr
            sys.stderr.write(f"Log file disabled: could not open {path}: {e}\n")
