"""Bootstrap: structlog configuration on top of stdlib logging."""

from __future__ import annotations

import logging
import logging.handlers

import structlog

from onionchain.core.config import OnionchainConfig


def _formatter(renderer: structlog.types.Processor) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer)


def _console_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handlers(config: OnionchainConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter(_console_renderer(config.log_format)))
    handlers: list[logging.Handler] = [console]

    if config.log_dir is not None:
        # Rotating file output is always JSON, whatever the console shows.
        config.log_dir.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            config.log_dir / "onionchain.log",
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count,
        )
        rotating.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        handlers.append(rotating)
    return handlers


def configure_logging(config: OnionchainConfig) -> None:
    """Route structlog through the stdlib root logger.

    Replaces any handlers already on the root logger with a console handler
    and, when ``config.log_dir`` is set, a rotating JSON file.
    """
    root = logging.getLogger()
    root.setLevel(config.log_level)
    root.handlers.clear()
    for handler in _build_handlers(config):
        root.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
