"""Structured Logging for schema_enforcer

Enforcer construction and option selection emit structlog events:

    keyword_enforcer_built   debug    keywords, coercing
    options_built            debug    labels
    option_selected          debug    value_type, label, validity
    cyclic_schema            warning  depth
    schema_too_deep          warning  depth, max_depth

Events go to stdlib loggers under "schema_enforcer", which only carries a
NullHandler on import: debug events are dropped at the default WARNING level
and anything else follows the host's own logging setup. configure_logging()
routes the package's events through a single stdout handler on the
"schema_enforcer" stdlib logger, rendered as colored console lines or JSON.
"""
import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from schema_enforcer.config import get_settings

PACKAGE_LOGGER = "schema_enforcer"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def _add_library_name(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("library", "schema-enforcer")
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_library_name,
    ]


def _select_renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(
    level: str | None = None,
    json_logs: bool | None = None,
) -> logging.Logger:
    """Route schema_enforcer events to stdout.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL setting.
        json_logs: Render JSON instead of console lines. Defaults to LOG_JSON.

    Returns:
        The configured package logger.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    use_json = settings.LOG_JSON if json_logs is None else json_logs

    shared_processors = get_shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _select_renderer(use_json),
        ],
    ))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))
    package_logger.propagate = False
    return package_logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """A structlog logger writing to the stdlib logger of the same name.

    Events obey that logger's level and handlers even when structlog was
    never configured.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class LoggerRegistry:
    """One logger per library component, created on first use."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, component: str) -> structlog.stdlib.BoundLogger:
        if component not in cls._loggers:
            cls._loggers[component] = get_logger(f"{PACKAGE_LOGGER}.{component}")
        return cls._loggers[component]


def enforcer_logger() -> structlog.stdlib.BoundLogger:
    """Logger for enforcer construction."""
    return LoggerRegistry.get("enforcer")


def options_logger() -> structlog.stdlib.BoundLogger:
    """Logger for option generation and selection."""
    return LoggerRegistry.get("options")
