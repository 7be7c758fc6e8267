"""
FormatForge structured logging.

Routes structlog events for plugin discovery and registry population
through the standard library handlers chosen in ``LoggingConfig``.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from formatforge.core.config import LoggingConfig


_configured = False


def build_processors(json_format: bool) -> list[structlog.types.Processor]:
    """Processor chain ending in a JSON or console renderer."""
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def setup_logging(config: LoggingConfig) -> None:
    """Configure structured logging for FormatForge."""
    global _configured

    if _configured:
        return

    handlers: list[logging.Handler] = []

    if config.console_enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.level))
        handlers.append(console_handler)

    if config.file_enabled:
        config.log_directory.mkdir(parents=True, exist_ok=True)
        log_file = config.log_directory / f"formatforge_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, format="%(message)s")

    structlog.configure(
        processors=build_processors(config.json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name or "formatforge")


class OperationLogger:
    """Context manager for logging operations with start/end tracking."""

    def __init__(
        self,
        operation: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        **context: Any,
    ):
        self.operation = operation
        self.logger = logger or get_logger()
        self.context = context
        self.start_time: datetime | None = None

    def __enter__(self) -> OperationLogger:
        self.start_time = datetime.now()
        self.logger.debug(
            f"Starting {self.operation}",
            operation=self.operation,
            **self.context,
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        duration = (datetime.now() - self.start_time).total_seconds() if self.start_time else 0

        if exc_type is not None:
            self.logger.error(
                f"Failed {self.operation}",
                operation=self.operation,
                duration_seconds=duration,
                error_type=exc_type.__name__,
                error=str(exc_val),
                **self.context,
            )
        else:
            self.logger.info(
                f"Completed {self.operation}",
                operation=self.operation,
                duration_seconds=duration,
                **self.context,
            )

    def update(self, **additional_context: Any) -> None:
        """Update the operation context."""
        self.context.update(additional_context)
