"""Logging configuration for the MCP demo servers and driver.

Stdout is reserved for the MCP stdio transport, so records go to stderr
or, on request, to the local syslog socket.
"""

import logging
import logging.handlers
import sys

STDERR_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
SYSLOG_FORMAT = "%(name)s[%(process)d]: [%(levelname)s] %(message)s"

# Library loggers that log every request at INFO
QUIET_LOGGERS = ("mcp", "httpx")


def _build_handler(use_syslog: bool) -> logging.Handler:
    if use_syslog:
        handler: logging.Handler = logging.handlers.SysLogHandler(address="/dev/log")
        handler.setFormatter(logging.Formatter(SYSLOG_FORMAT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(STDERR_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(use_syslog: bool = False, log_level: int = logging.INFO) -> None:
    """Configure the root logger for a demo process.

    Calling this again replaces the previously installed handlers.

    Args:
        use_syslog: If True, log to syslog. Otherwise, log to stderr.
        log_level: Logging level (default: INFO)
    """
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)

    root_logger.addHandler(_build_handler(use_syslog))
    root_logger.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name."""
    return logging.getLogger(name)
