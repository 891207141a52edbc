"""Logging setup for scripts that want to see solver diagnostics."""

from __future__ import annotations

import logging

_LOGGER = logging.getLogger("pyclinstats")


def configure_logging(*, level: str | int = "INFO", fmt: str = "%(message)s") -> None:
    """Attach a stream handler to the ``pyclinstats`` logger once.

    The library itself only installs a ``NullHandler``; call this from a
    script or notebook to surface warnings about unrecognized selectors and
    (at ``level="DEBUG"``) iteration-cap hits in the numerical solvers.

    Parameters
    ----------
    level : str or int
        Logging level (e.g. ``"INFO"``, ``"DEBUG"``).
    fmt : str
        Format string for the handler.
    """
    _LOGGER.setLevel(level)
    if any(not isinstance(h, logging.NullHandler) for h in _LOGGER.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    _LOGGER.addHandler(handler)
