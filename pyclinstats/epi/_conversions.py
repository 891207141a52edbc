"""Closed-form conversions between effect-size metrics.

References
----------
Zhang & Yu (1998). What's the relative risk? *JAMA*, 280, 1690-1691.

Chinn (2000). A simple method for converting an odds ratio to effect size
for use in meta-analysis. *Statistics in Medicine*, 19, 3127-3131.

Validates against: R ``effectsize::oddsratio_to_d()``, ``effectsize::d_to_r()``
"""

from __future__ import annotations

import math

from pyclinstats import _numeric

# Scale of the standard logistic distribution, pi / sqrt(3)
LOGISTIC_SCALE = math.pi / math.sqrt(3.0)


def or_to_rr(odds_ratio: float, p0: float) -> float:
    """Odds ratio to relative risk given baseline risk ``p0`` (Zhang-Yu)."""
    return _numeric.ratio(odds_ratio, 1.0 - p0 + p0 * odds_ratio)


def rr_to_or(rr: float, p0: float) -> float:
    """Relative risk to odds ratio given baseline risk ``p0``."""
    return _numeric.ratio(rr * (1.0 - p0), 1.0 - rr * p0)


def or_to_d(odds_ratio: float) -> float:
    """Odds ratio to Cohen's d: ``ln(OR) / (pi / sqrt(3))``."""
    return _numeric.log(odds_ratio) / LOGISTIC_SCALE


def d_to_or(d: float) -> float:
    """Cohen's d to odds ratio: ``exp(d * pi / sqrt(3))``."""
    return _numeric.exp(d * LOGISTIC_SCALE)


def d_to_hedges_g(d: float, n1: int, n2: int) -> float:
    """Small-sample corrected Hedges' g: ``d * (1 - 3 / (4 df - 1))``, ``df = n1 + n2 - 2``."""
    df = n1 + n2 - 2
    if df < 1:
        raise ValueError(f"n1 + n2 must be at least 3, got {n1 + n2}")
    return d * (1.0 - 3.0 / (4.0 * df - 1.0))


def r_to_d(r: float) -> float:
    """Correlation to Cohen's d: ``2r / sqrt(1 - r^2)``; ``+/-inf`` at ``|r| = 1``."""
    return _numeric.ratio(2.0 * r, _numeric.sqrt(1.0 - r * r))


def d_to_r(d: float) -> float:
    """Cohen's d to correlation: ``d / sqrt(d^2 + 4)``."""
    return d / math.sqrt(d * d + 4.0)
