# src/factorials/log.py
from __future__ import annotations

import logging

import structlog

from factorials.runtime import current as _rt_current

PACKAGE_LOGGER = "factorials"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Structlog logger on top of the stdlib logger `name`.

    Events are filtered by the stdlib level first, so nothing is rendered
    until configure_logging() (or the host application) enables it.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(debug: bool | None = None) -> None:
    """Enable package logging; `debug` defaults to the runtime BEHAVIOUR.DEBUG flag."""
    if debug is None:
        debug = _rt_current().debug
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    get_logger(PACKAGE_LOGGER).info("logging_configured", debug=debug)
