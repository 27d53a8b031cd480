"""Structured logging setup.

Modules obtain loggers with ``structlog.get_logger(__name__)`` and log
snake_case event names with key-value context. The embedding application
calls ``configure_logging`` once to choose rendering:

- Development: human-readable console renderer with colors
- Testing/CI/Production: JSON renderer for machine parsing

Tokens, passwords and MFA codes are never passed as log context.
"""

import logging
import sys

import structlog

from robinhood_connector.core.config import RobinhoodSettings
from robinhood_connector.core.enums import Environment


def configure_logging(settings: RobinhoodSettings) -> None:
    """Configure structlog processors for the given settings.

    Args:
        settings: Connector settings (environment and log_level are used).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if settings.environment == Environment.DEVELOPMENT:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.log_level]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
