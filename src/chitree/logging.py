"""Logging helpers for chitree.

chitree logs through loguru and disables its own messages on import, so a
host application sees nothing unless it opts in::

    from chitree.logging import enable_logging

    with enable_logging(level="DEBUG"):
        tree = build_tree(data)

Importing this module also removes loguru's default stderr handler (ID 0),
so that ``enable_logging`` does not print every message twice.  The
``ValueError`` loguru raises when handler 0 is already gone is suppressed.
"""

from __future__ import annotations

import contextlib
import sys
from typing import ClassVar

from loguru import logger

PACKAGE_NAME = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

SHORT_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {function} - {message}"


class LoggingHandle:
    """Owns one loguru handler added by :func:`enable_logging`.

    Call :meth:`disable` or use the handle as a context manager to remove the
    handler.  When the last live handle goes away the package logger is
    disabled again.
    """

    _active_ids: ClassVar[set[int]] = set()

    def __init__(self, handler_id: int):
        self.handler_id: int | None = handler_id
        LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        if self.handler_id is None:
            return
        LoggingHandle._active_ids.discard(self.handler_id)
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        if not LoggingHandle._active_ids:
            logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disable()


def enable_logging(*, level: str = "INFO", sink=sys.stderr) -> LoggingHandle:
    """
    Route chitree log records of at least ``level`` to ``sink``.

    Parameters
    ----------
    level : str, default="INFO"
        Minimum loguru level.  ``"DEBUG"`` shows every split and every pruned
        node; ``"INFO"`` only build and prune summaries.
    sink : object, default=sys.stderr
        Anything ``logger.add`` accepts (stream, path, callable).

    Returns
    -------
    LoggingHandle
        Handle that removes the handler again.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sink,
        level=level,
        format=SHORT_FORMAT,
        filter=PACKAGE_NAME,
    )
    return LoggingHandle(handler_id)
