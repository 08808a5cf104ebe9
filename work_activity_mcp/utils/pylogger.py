"""Logging helpers for the Work Activity MCP Server.

All output goes to stderr: with the stdio transport, stdout carries the
MCP protocol stream.
"""

import logging
import sys

import structlog

DEFAULT_LOGGER_NAME = "work_activity_mcp"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def get_python_logger(
    log_level: str = "INFO", name: str = DEFAULT_LOGGER_NAME
) -> logging.Logger:
    """Return a named stdlib logger set to the given level.

    Args:
        log_level: Level name such as "DEBUG" or "INFO".
        name: Logger name, defaults to the package logger.

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(log_level))
    return logger


def force_reconfigure_all_loggers(log_level: str = "INFO") -> None:
    """Reset the root logger and structlog to a single stderr handler.

    FastMCP installs its own handlers on startup, so this runs after the
    server object is created.
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers = []

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.getLogger(DEFAULT_LOGGER_NAME).setLevel(level)
