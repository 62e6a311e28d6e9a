"""
Structured logging for comparemeans.

Loggers are structlog BoundLoggers wrapped around stdlib loggers under the
'comparemeans' namespace, so events carry key-value context (analysis_type,
variable_name, ...) and still travel through the standard logging tree.
The library never configures the root logger or structlog's global state;
configure_logging() is for scripts and interactive sessions that want to
see the router's request trace.
"""

import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = 'comparemeans'

# Event dict -> logging kwargs: the event becomes the message, the context
# becomes LogRecord extras, exc_info reaches the handler untouched.
_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.processors.StackInfoRenderer(),
    structlog.stdlib.render_to_log_kwargs,
]

_handler: logging.Handler | None = None


def _qualified(name: str | None) -> str:
    if name is None or name == LOGGER_NAME:
        return LOGGER_NAME
    if name.startswith(LOGGER_NAME + '.'):
        return name
    return f"{LOGGER_NAME}.{name}"


def wrap_logger(logger: Any) -> Any:
    """
    Accept a stdlib logger or a structlog logger.

    Stdlib loggers are wrapped so they take key-value context; anything
    else is assumed to speak structlog already and is returned as is.
    """
    if isinstance(logger, logging.Logger):
        return structlog.wrap_logger(
            logger,
            processors=_PROCESSORS,
            wrapper_class=structlog.stdlib.BoundLogger,
        )
    return logger


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger for 'comparemeans' or 'comparemeans.<name>'."""
    return wrap_logger(logging.getLogger(_qualified(name)))


def configure_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    stream: Any = None,
) -> logging.Logger:
    """
    Attach a rendering handler to the package logger.

    Calling it again replaces the handler instead of stacking a second one.

    Args:
        level: Logging level name or number
        json_format: One JSON object per line instead of key=value pairs
        stream: Output stream (default sys.stderr)

    Returns:
        The stdlib package logger
    """
    global _handler

    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.processors.KeyValueRenderer(
            key_order=['timestamp', 'level', 'logger', 'event'],
        )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt='iso'),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(formatter)
    logger.addHandler(_handler)
    logger.setLevel(level)
    return logger
