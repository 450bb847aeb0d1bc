"""
Logging setup for the RSS Aggregator.

Per-feed failures are only visible through these logs, so every entrypoint
(API and CLI) calls :func:`configure_logging` once at start.

It includes:
- 'AggregatorStreamHandler' and 'AggregatorFileHandler': the handlers
  installed on the root logger, typed so a later call can find and replace them.
- 'configure_logging': attaches them to the root logger.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AggregatorStreamHandler(logging.StreamHandler):
    """Stream handler installed by :func:`configure_logging`."""


class AggregatorFileHandler(logging.FileHandler):
    """File handler installed by :func:`configure_logging`."""

    def __init__(self, filename: str):
        super().__init__(filename, encoding="utf-8")


AGGREGATOR_HANDLERS = (AggregatorStreamHandler, AggregatorFileHandler)


def configure_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a stream handler (stdout by default), and a file handler when
    ``log_file`` is set, to the root logger.

    Calling it again replaces the handlers installed by a previous call.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, AGGREGATOR_HANDLERS):
            root_logger.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [AggregatorStreamHandler(stream or sys.stdout)]
    if log_file:
        handlers.append(AggregatorFileHandler(log_file))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.setLevel(level.upper())
    return root_logger
