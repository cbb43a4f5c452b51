"""Structlog setup shared by every probe in the application.

Probes log through ``structlog.get_logger()``. Execution context values
(correlation_id, user_id, workspace_id, ...) are bound as contextvars and
merged into each line here.
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_TRUTHY = ("1", "true", "yes")


def _wants_colors() -> bool:
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return True
    return sys.stdout.isatty()


def _add_app_name(app_name: str) -> Processor:
    def processor(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def configure_logging(debug: bool = False, app_name: str | None = None) -> None:
    """Configure structlog for console (TTY) or JSON lines output.

    Args:
        debug: Emit debug-level events (e.g. admin token refreshes, event
            deliveries); otherwise only info and above
        app_name: Added to every line as ``app`` when given
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if app_name:
        processors.append(_add_app_name(app_name))

    if _wants_colors():
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
