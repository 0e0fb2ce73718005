"""Logging for the ferrydeck package.

Everything under the ``ferrydeck`` logger goes to stderr and, when
configured, to an appended log file. ``urllib3`` (the connection pool
under ``requests``) logs every connection it opens at DEBUG; it is held at
WARNING unless ferrydeck itself runs at DEBUG.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "ferrydeck"
HTTP_LOGGER = "urllib3"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: int = logging.INFO, log_file: str | None = None
) -> logging.Logger:
    """Attach handlers to the package logger and return it.

    Safe to call more than once; earlier handlers are closed and replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        old.close()
        logger.removeHandler(old)

    logger.addHandler(_handler(logging.StreamHandler(sys.stderr), level))
    if log_file:
        logger.addHandler(
            _handler(
                logging.FileHandler(log_file, mode="a", encoding="utf-8"),
                level,
            )
        )

    logging.getLogger(HTTP_LOGGER).setLevel(
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )
    logger.debug(
        "Logging at %s%s",
        logging.getLevelName(level),
        f", also to {log_file}" if log_file else "",
    )
    return logger
