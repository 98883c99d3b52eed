"""
Logging Configuration for the Marketplace Dashboard Engine

Engine modules log through structlog; configure_logging routes those events
through the standard library root logger so the host application decides
where they end up. Every event carries the engine name, version and
environment.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.processors import JSONRenderer, TimeStamper
from structlog.stdlib import ProcessorFormatter, add_log_level
from structlog.typing import EventDict, Processor, WrappedLogger

from dashboard_engine.config.settings import Settings, get_settings

# Third-party loggers that are chatty below WARNING
QUIET_LOGGERS = ["faker", "faker.factory"]


def _engine_context(settings: Settings) -> Processor:
    def add_engine_context(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", settings.app_name)
        event_dict.setdefault("version", settings.version)
        event_dict.setdefault("environment", settings.app_env)
        return event_dict

    return add_engine_context


def _shared_processors(settings: Settings) -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
        _engine_context(settings),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _handlers(settings: Settings, shared: List[Processor], level: int) -> List[logging.Handler]:
    """stdout in the configured format, plus a JSON file when log_file is set"""
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ProcessorFormatter(
        processor=_renderer(settings.monitoring.log_format),
        foreign_pre_chain=shared,
    ))
    handlers: List[logging.Handler] = [console]

    if settings.monitoring.log_file:
        file_handler = logging.FileHandler(settings.monitoring.log_file, encoding="utf-8")
        file_handler.setFormatter(ProcessorFormatter(processor=JSONRenderer(), foreign_pre_chain=shared))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Configure structured logging for the engine.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
    """
    settings = get_settings()
    level = log_level or settings.monitoring.log_level
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared = _shared_processors(settings)
    structlog.configure(
        processors=shared + [ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in _handlers(settings, shared, numeric_level):
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=level,
        format=settings.monitoring.log_format,
        log_file=settings.monitoring.log_file,
    )
