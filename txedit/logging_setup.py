"""Logging for ``txedit``.

Validators and steppers log only at DEBUG: which correction was applied to a
buffer, and why a step was refused. The ``txedit`` logger carries a
``NullHandler`` so embedding the engine in an editor prints nothing until the
host (or the CLI) calls :func:`configure_logging`. ``TXEDIT_LOG_LEVEL=DEBUG``
turns the correction trail on from the environment.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

ROOT_LOGGER = "txedit"
LEVEL_ENV = "TXEDIT_LOG_LEVEL"

_FORMAT = "%(levelname)s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


class _ConsoleHandler(logging.StreamHandler):
    """The one console handler :func:`configure_logging` owns."""


def level_from_env(default: int = logging.WARNING) -> int:
    """Read ``TXEDIT_LOG_LEVEL`` as a level name or number; ``default`` if unset or unknown."""

    raw = os.getenv(LEVEL_ENV, "").strip().upper()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


def configure_logging(
    level: int | None = None, *, stream: IO[str] | None = None
) -> logging.Handler:
    """Route ``txedit`` records to ``stream`` (stderr when omitted).

    Calling it again replaces the console handler instead of adding a second
    one. Returns the installed handler.
    """

    resolved = level if level is not None else level_from_env()
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        if isinstance(handler, _ConsoleHandler):
            root.removeHandler(handler)

    console = _ConsoleHandler(stream if stream is not None else sys.stderr)
    console.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(console)
    root.setLevel(resolved)
    root.propagate = False
    return console


def get_logger(module: str) -> logging.Logger:
    """Logger for a ``txedit`` submodule, e.g. ``get_logger("validators")``."""

    return logging.getLogger(f"{ROOT_LOGGER}.{module}")


__all__ = ["ROOT_LOGGER", "LEVEL_ENV", "configure_logging", "get_logger", "level_from_env"]
