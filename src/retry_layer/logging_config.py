"""Structured logging setup for applications embedding the retry layer.

The retry engine only emits events through ``structlog.get_logger``; it never
configures logging itself. Host applications call ``configure_from_settings``
(or ``configure_logging`` directly) once at startup.

Every event emitted during ``RetryEngine.execute`` carries ``stop_condition``
and ``backoff`` through ``structlog.contextvars``. The ``merge_contextvars``
processor below is what puts them into the rendered line, so it must stay
first in the chain.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, WrappedLogger

from retry_layer.config import Settings


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the library name."""
    event_dict["app"] = "retry-layer"
    return event_dict


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Route structlog through the stdlib root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "production" renders JSON lines; anything else renders
            colored console output (exceptions included by ConsoleRenderer)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    renderer: structlog.types.Processor
    if is_production:
        processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )
    handler.setLevel(level)

    root_logger = logging.getLogger()
    # Replace, not append: repeated configuration must not duplicate lines
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # Per-attempt sleeps make asyncio debug output noisy
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from LOG_LEVEL and ENVIRONMENT."""
    configure_logging(log_level=settings.LOG_LEVEL, environment=settings.ENVIRONMENT)
