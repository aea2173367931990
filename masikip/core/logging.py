"""
Centralized Logging.

structlog on top of stdlib logging, configured once per process from the
validated logging.yaml. Modules never build their own loggers:

    from masikip.core.logging import get_logger, log_with_source

    logger = get_logger(__name__)
    logger.info("Notes loaded", count=12)
    log_with_source(logger, "state", "warning", "Backend sync failed", note_id="42")

Records written to the JSONL file (logs/system.jsonl by default) carry
timestamp, level, logger, event, func_name and lineno, plus whatever was
bound or passed. Two fields matter for filtering:

    source   - who emitted it: tui, cli, service, state, internal
    action   - note transaction type: CREATE_NOTE, UPDATE_NOTE, SET_PRIORITY, DELETE_NOTE

The TUI owns the terminal, so it runs with the console handler disabled and
logs to the file only.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from masikip.core.config import find_project_root, get_app_config
from masikip.core.config_schema import FileHandlerSchema, LoggingSchema

VALID_SOURCES = frozenset({
    "tui",
    "cli",
    "service",
    "state",
    "internal",
    "unknown",
})

# Third-party loggers that are noisy below WARNING.
QUIET_LOGGERS = ("httpx", "httpcore")


def _normalize_source(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Record unrecognized source values as 'unknown'."""
    source = event_dict.get("source")
    if source is not None and source not in VALID_SOURCES:
        event_dict["source"] = "unknown"
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        _normalize_source,
    ]


def _resolve_log_path(configured_path: str) -> Path:
    """Relative paths in logging.yaml are relative to the project root."""
    path = Path(configured_path)
    if path.is_absolute():
        return path
    return find_project_root() / path


def _file_handler(file_config: FileHandlerSchema, formatter: logging.Formatter) -> RotatingFileHandler:
    log_path = _resolve_log_path(file_config.path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
    config: LoggingSchema | None = None,
) -> None:
    """
    Configure structlog and the root logger's handlers.

    Every argument left as None falls back to logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: Console renderer, 'json' or 'console'. The file is always JSON.
        enable_console: Attach a stdout handler
        enable_file_logging: Attach the rotating JSONL file handler
        config: Logging settings to use instead of get_app_config().logging
    """
    config = config or get_app_config().logging
    handlers = config.handlers

    log_level = getattr(logging, (level or config.level).upper())
    use_console = handlers.console.enabled if enable_console is None else enable_console
    use_file = handlers.file.enabled if enable_file_logging is None else enable_file_logging

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared,
    )
    if (format_type or config.format) == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=shared,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if use_file:
        root_logger.addHandler(_file_handler(handlers.file, json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Structlog logger for a module; pass __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log with an explicit source field.

    Raises:
        AttributeError: If level is not a log method name
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
