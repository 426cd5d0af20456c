"""structlog configuration.

``local`` mode renders human-readable console output at DEBUG level. Every
other mode emits one JSON object per line at INFO level so CloudWatch can
index the fields.
"""

import logging

import structlog

LOCAL_MODE = "local"


def configure_logging(mode: str) -> None:
    """Configure structlog for the given boot mode.

    Args:
        mode: Boot mode (``dev``, ``local`` or ``prod``).
    """
    if mode == LOCAL_MODE:
        level = logging.DEBUG
        renderer = structlog.dev.ConsoleRenderer()
    else:
        level = logging.INFO
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
