"""Sentinel-preserving arithmetic on values derived from user counts.

Counts supplied by callers can be zero anywhere. Instead of raising, these
helpers follow IEEE semantics: ``x/0 -> +/-inf``, ``0/0 -> nan``,
``log(0) -> -inf``.
"""

from __future__ import annotations

import numpy as np


def ratio(num: float, den: float) -> float:
    """``num / den`` with ``inf``/``nan`` in place of ``ZeroDivisionError``."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(num), np.float64(den)))


def log(x: float) -> float:
    """Natural log returning ``-inf`` at 0 and ``nan`` below 0."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log(np.float64(x)))


def sqrt(x: float) -> float:
    """Square root returning ``nan`` for negative input."""
    with np.errstate(invalid="ignore"):
        return float(np.sqrt(np.float64(x)))


def exp(x: float) -> float:
    """Exponential returning ``inf`` on overflow."""
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.exp(np.float64(x)))
