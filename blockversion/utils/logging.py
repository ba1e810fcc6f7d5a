"""Logging utilities for Block Version.

structlog hands every event to the standard library logger of the same
name. The handlers installed here render it: the console uses the
configured format, the optional log file always gets one JSON object per
line.
"""

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import Processor


# Names of the root handlers owned by setup_logging
CONSOLE_HANDLER = "blockversion.console"
FILE_HANDLER = "blockversion.file"


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.THREAD_NAME,
            ]
        ),
    ]


def _formatter(renderer: Processor, json: bool) -> structlog.stdlib.ProcessorFormatter:
    processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json:
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=processors,
    )


def setup_logging(
    level: str = "INFO", format_type: str = "console", log_file: str | None = None
) -> None:
    """Configure structured logging for the application.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Minimum level name
        format_type: "console" or "json" for the console output
        log_file: Also write JSON lines to this file
    """
    # Convert string level to logging constant
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.dev.set_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Handlers are swapped on every call; do not pin loggers to old ones
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    _remove_handlers(root)

    if format_type == "json":
        console_renderer: Processor = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer()

    console = logging.StreamHandler(sys.stdout)
    console.set_name(CONSOLE_HANDLER)
    console.setFormatter(_formatter(console_renderer, json=format_type == "json"))
    root.addHandler(console)

    # Mirror to a file if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer(), json=True))
        root.addHandler(file_handler)

    root.setLevel(log_level)


def reset_logging() -> None:
    """Remove the handlers installed by setup_logging and restore structlog defaults."""
    root = logging.getLogger()
    _remove_handlers(root)
    root.setLevel(logging.WARNING)
    structlog.reset_defaults()


def _remove_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if handler.get_name() in (CONSOLE_HANDLER, FILE_HANDLER):
            root.removeHandler(handler)
            handler.close()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)
