"""
Logging for the bh CLI.

structlog renders through the stdlib logging tree. Defaults come from
bh/core/settings/logging.yaml; the -v/--debug flags, BOUNTYHUB_LOG_LEVEL
and BOUNTYHUB_LOG_FILE override them.

Console records go to stderr. Stdout carries command output (tokens,
ids, generated docs, completion scripts) and must stay machine-readable.

Fields in every JSON record:
    timestamp, level, logger, event, func_name, lineno
    source   - set explicitly by the caller (cli, api, storage, internal)

Usage:
    from bh.core.logging import get_logger, log_with_source

    logger = get_logger(__name__)
    logger.info("Job deleted", job_id=str(job_id))
    log_with_source(logger, "api", "debug", "API request", method="GET", path=path)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from bh.core.config import get_app_config, get_user_config_dir
from bh.core.config_schema import FileHandlerSchema

VALID_SOURCES = frozenset({"cli", "api", "storage", "internal"})

# Third-party loggers that log full URLs at INFO. Presigned URLs embed credentials.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _resolve_log_path(configured_path: str | Path) -> Path:
    """Resolve a relative log file path against the user config directory."""
    path = Path(configured_path).expanduser()
    if path.is_absolute():
        return path
    return get_user_config_dir() / path


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
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _stderr_handler(format_type: str, pre_chain: list[Processor]) -> logging.Handler:
    if format_type == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(renderer, pre_chain))
    return handler


def _file_handler(path: Path, file_config: FileHandlerSchema, pre_chain: list[Processor]) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=file_config.max_bytes,
        backupCount=file_config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer(), pre_chain))
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
    log_file: Path | None = None,
) -> None:
    """
    Configure structlog and the root logger. Safe to call more than once.

    Arguments left as None fall back to logging.yaml.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'console' or 'json' for the stderr handler
        enable_console: Attach the stderr handler
        enable_file_logging: Attach the rotating JSONL file handler
        log_file: JSONL file path; implies file logging
    """
    config = get_app_config().logging
    file_config = config.handlers.file

    level = level or config.level
    format_type = format_type or config.format
    if enable_console is None:
        enable_console = config.handlers.console.enabled
    if log_file is not None:
        enable_file_logging = True
    elif enable_file_logging is None:
        enable_file_logging = file_config.enabled

    pre_chain = _shared_processors()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        root_logger.addHandler(_stderr_handler(format_type, pre_chain))
    if enable_file_logging:
        path = _resolve_log_path(log_file if log_file is not None else file_config.path)
        root_logger.addHandler(_file_handler(path, file_config, pre_chain))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger; pass __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log `message` at `level` tagged with an explicit `source`.

    Raises:
        AttributeError: If level is not a valid log level
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
