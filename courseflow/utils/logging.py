# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for CourseFlow.

Domain services log through the standard ``logging`` module and the event
dispatcher logs key-value events through structlog. setup_logging() sends
both through one structlog ProcessorFormatter on the ``courseflow`` logger,
so fields bound with log_context() (course, student, event type) appear on
every line written while a grade event is being applied.

Example:
    >>> setup_logging(get_settings())
    >>> with log_context(course_id="c1", student_id="s1"):
    ...     get_logger(__name__).info("gradebook.updated")
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from courseflow.core.config.settings import Settings

PACKAGE_LOGGER = "courseflow"

# Quieted unless the package level is WARNING or above anyway
_NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg", "asyncio")


def _renderers(settings: "Settings") -> list[Processor]:
    if settings.is_development or settings.debug:
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging(settings: "Settings") -> None:
    """Configure structlog and the ``courseflow`` stdlib logger.

    Console output in development or debug mode, one JSON object per line
    otherwise. Calling it again replaces the previous configuration.

    Args:
        settings: Application settings providing log_level, debug and environment.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(settings),
            ],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger; pass ``__name__`` to stay under ``courseflow``."""
    return structlog.get_logger(name)


@contextmanager
def log_context(**fields: object) -> Iterator[None]:
    """Bind fields to every log line written inside the block.

    Fields bound by an enclosing block are restored on exit, so nested
    contexts for one request and one event compose.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield
