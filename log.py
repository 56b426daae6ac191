"""
log.py — Logger Tree for the Visualizer
========================================
Every module that logs does so through

    logger = get_logger(__name__)

which hands back "dijkstra_stepper.<module>".  The single handler sits on
the "dijkstra_stepper" logger; children carry no level of their own, so
one call to set_global_log_level() retunes the whole app.

Who logs:
  • graph.graph       – adjacency-list import (debug / info)
  • engine.stepper    – start / finish of playback (debug)
  • engine.recorder   – one summary line per recorded run (info)
  • main              – rejected requests (warning), server start (info)

The search itself (algorithms/) never logs: it only yields events.

Design decisions:
  - The handler is attached lazily, on the first get_logger() call, and
    only once.  reset_logging() undoes it so tests can re-attach their
    own handler.
  - Records still propagate to the stdlib root logger, which is where
    pytest's caplog listens.
"""

import logging
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "dijkstra_stepper"

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler_attached = False


def _root() -> logging.Logger:
    return logging.getLogger(ROOT_LOGGER_NAME)


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach one handler to the app's root logger (no-op after the first call)."""
    global _handler_attached
    if _handler_attached:
        return

    out = handler if handler is not None else logging.StreamHandler(sys.stdout)
    out.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    root = _root()
    root.handlers.clear()
    root.addHandler(out)
    root.setLevel(level)
    root.propagate = True

    _handler_attached = True


def get_logger(name: str) -> logging.Logger:
    """Logger for `name`, nested under the app's root logger."""
    setup_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def _as_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def set_global_log_level(level: Union[int, str]) -> None:
    """Retune the whole tree.  Accepts logging.DEBUG or "debug"."""
    setup_root_logger()
    numeric = _as_level(level)
    root = _root()
    root.setLevel(numeric)
    for h in root.handlers:
        h.setLevel(numeric)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def reset_logging() -> None:
    """Detach the handler and clear the level (tests)."""
    global _handler_attached
    _handler_attached = False
    root = _root()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
