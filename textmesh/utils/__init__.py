"""
Utility functions for textmesh.

.. currentmodule:: textmesh.utils

.. autosummary::
    :toctree: utils/

    Color
    enums
    units.parse_unit
    units.parse_float
    EventTarget

"""

import os
import sys
import logging
import contextlib

from .color import Color  # noqa: F401
from . import enums  # noqa: F401
from ._events import Event, EventTarget, EventType, LinkEvent  # noqa: F401

logger = logging.getLogger("textmesh")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("TEXTMESH_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid textmesh log level: {level}")


_set_log_level()


_error_messages_seen = set()


@contextlib.contextmanager
def log_exception(kind):
    """Context manager to log any exceptions, but only log a one-liner
    for subsequent occurrences of the same error to avoid spamming.
    """
    try:
        yield
    except Exception as err:
        # Store exc info for postmortem debugging
        exc_info = list(sys.exc_info())
        exc_info[2] = exc_info[2].tb_next  # skip *this* function
        sys.last_type, sys.last_value, sys.last_traceback = exc_info
        msg = str(err)
        if msg not in _error_messages_seen:
            _error_messages_seen.add(msg)
            logger.error(kind, exc_info=err)
        else:
            logger.error(f"{kind}: {msg} (repeated)")
