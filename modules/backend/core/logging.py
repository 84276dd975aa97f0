"""
Board Logging.

structlog over the stdlib root logger, configured from the validated
config/settings/logging.yaml (POSTIT_LOG_LEVEL overrides the level).

Board code logs stdlib-style with an ``extra`` dict; the fields are lifted
to the top level of the record, so a JSON line for a move reads:

    {"event": "Note moved", "note_id": "...", "x": 10.0, "y": 4.0,
     "z_order": 7, "request_id": "...", "frontend": "cli", ...}

Usage:
    from modules.backend.core.logging import get_logger, setup_logging

    setup_logging()                                  # from logging.yaml
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": note.id, "color": note.color})

    # Outside a request (the terminal client), tag records with their source
    logger = get_logger(__name__, source="cli")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from modules.backend.core.config import find_project_root, get_app_config, get_settings

# Noisy per-request loggers; a drag sends a request per pointer step.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def lift_extra(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Merge an ``extra={...}`` argument into the record; explicit keys win."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    return event_dict


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structured logging for the board server and its CLIs.

    Arguments override logging.yaml. Without a level argument,
    POSTIT_LOG_LEVEL wins over the YAML level.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'json' or 'console'
        enable_console: Write records to stdout
        enable_file_logging: Write JSON records to the rotating file
    """
    config = get_app_config().logging

    effective_level = level or get_settings().log_level or config.level
    effective_format = format_type or config.format
    console_enabled = config.handlers.console.enabled if enable_console is None else enable_console
    file_enabled = config.handlers.file.enabled if enable_file_logging is None else enable_file_logging

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        lift_extra,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, effective_level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        if effective_format == "console":
            console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
                foreign_pre_chain=shared_processors,
            ))
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    if file_enabled:
        file_config = config.handlers.file
        log_path = find_project_root() / file_config.path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=file_config.max_bytes,
            backupCount=file_config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, source: str | None = None) -> Any:
    """
    Get a structlog logger, optionally bound to a fixed source.

    Request handlers leave source unset; the request middleware binds
    the caller's frontend instead.
    """
    logger = structlog.get_logger(name)
    if source is not None:
        logger = logger.bind(source=source)
    return logger
