"""Logging setup for the ``csv2beancount`` package.

Standard output carries the generated ledger, so records always go to a
separate stream (stderr unless told otherwise) through a single handler on the
``"csv2beancount"`` logger. The CLI calls :func:`configure_logging` once at
startup; library modules only call ``get_logger("csv2beancount.<module>")`` and
never attach handlers themselves.

The level defaults to ``WARNING`` and can be raised for a run with the
``CSV2BEANCOUNT_LOG_LEVEL`` environment variable (e.g. ``DEBUG`` to see which
rules matched).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "csv2beancount"
_LEVEL_ENV_VAR = "CSV2BEANCOUNT_LOG_LEVEL"
_FORMAT = "%(levelname)s %(name)s %(message)s"
_CONFIGURED = False


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(_LEVEL_ENV_VAR) or logging.WARNING
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING


def configure_logging(level: int | str | None = None, *, stream: IO[str] | None = None) -> None:
    """Attach the package's stderr handler; later calls are no-ops.

    ``level`` wins over ``CSV2BEANCOUNT_LOG_LEVEL``; unknown level names fall
    back to ``WARNING``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger, silent until :func:`configure_logging` runs."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
