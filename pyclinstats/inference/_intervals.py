"""Confidence intervals for proportions, differences of proportions and rates.

Every function takes the critical value ``z`` (default: 97.5th normal
percentile, i.e. two-sided 95%) or ``alpha`` for the exact methods.

References
----------
Newcombe (1998). Interval estimation for the difference between
independent proportions: comparison of eleven methods.
*Statistics in Medicine*, 17, 873-890.

Agresti & Coull (1998). Approximate is better than "exact" for interval
estimation of binomial proportions. *The American Statistician*, 52,
119-126.

Validates against: R ``binom::binom.confint()``, ``stats::poisson.test()``.
"""

from __future__ import annotations

import math

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import chi_squared_quantile, f_quantile, z_critical
from pyclinstats.inference._common import DifferenceInterval, Interval, RateInterval


def _z(z: float | None) -> float:
    return z_critical(0.05) if z is None else z


def wald_ci(p: float, n: float, z: float | None = None) -> Interval:
    """Wald interval ``p +/- z * sqrt(p(1-p)/n)``, clipped to [0, 1]."""
    z = _z(z)
    se = _numeric.sqrt(_numeric.ratio(p * (1.0 - p), n))
    return Interval(max(0.0, p - z * se), min(1.0, p + z * se), se)


def wilson_ci(p: float, n: float, z: float | None = None) -> Interval:
    """Wilson score interval, clipped to [0, 1]; ``nan`` bounds when ``n == 0``."""
    if n <= 0:
        return Interval(math.nan, math.nan)
    z = _z(z)
    z2 = z * z
    denom = 1.0 + z2 / n
    centre = (p + z2 / (2.0 * n)) / denom
    margin = (z / denom) * math.sqrt(max(0.0, p * (1.0 - p) / n + z2 / (4.0 * n * n)))
    return Interval(max(0.0, centre - margin), min(1.0, centre + margin))


def clopper_pearson_ci(x: int, n: int, alpha: float = 0.05) -> Interval:
    """Exact Clopper-Pearson interval for ``x`` successes out of ``n``.

    Uses the F-quantile relation; the lower bound is 0 when ``x == 0`` and
    the upper bound is 1 when ``x == n``.
    """
    if x == 0:
        lower = 0.0
    else:
        f_lo = f_quantile(alpha / 2.0, 2.0 * x, 2.0 * (n - x + 1))
        lower = 1.0 / (1.0 + (n - x + 1.0) / (x * f_lo))
    if x == n:
        upper = 1.0
    else:
        f_hi = f_quantile(1.0 - alpha / 2.0, 2.0 * (x + 1), 2.0 * (n - x))
        upper = 1.0 / (1.0 + (n - x) / ((x + 1.0) * f_hi))
    return Interval(lower, upper)


def agresti_coull_ci(p: float, n: float, z: float | None = None) -> Interval:
    """Agresti-Coull interval: shrunken centre with a Wald-style margin."""
    z = _z(z)
    n_tilde = n + z * z
    p_tilde = (p * n + z * z / 2.0) / n_tilde
    se = math.sqrt(p_tilde * (1.0 - p_tilde) / n_tilde)
    return Interval(max(0.0, p_tilde - z * se), min(1.0, p_tilde + z * se), se)


def newcombe_ci(
    p1: float, n1: float, p2: float, n2: float, z: float | None = None,
) -> DifferenceInterval:
    """Newcombe hybrid score interval for ``p1 - p2`` (method 10)."""
    z = _z(z)
    w1 = wilson_ci(p1, n1, z)
    w2 = wilson_ci(p2, n2, z)
    diff = p1 - p2
    lower = diff - math.sqrt((p1 - w1.lower) ** 2 + (w2.upper - p2) ** 2)
    upper = diff + math.sqrt((w1.upper - p1) ** 2 + (p2 - w2.lower) ** 2)
    return DifferenceInterval(diff, lower, upper)


def poisson_exact_ci(k: int, alpha: float = 0.05) -> Interval:
    """Exact interval for a Poisson count via chi-squared quantiles.

    ``lower = chi2(alpha/2; 2k) / 2`` (0 when ``k == 0``),
    ``upper = chi2(1 - alpha/2; 2(k+1)) / 2``.
    """
    lower = 0.0 if k == 0 else chi_squared_quantile(alpha / 2.0, 2.0 * k) / 2.0
    upper = chi_squared_quantile(1.0 - alpha / 2.0, 2.0 * (k + 1)) / 2.0
    return Interval(lower, upper)


def log_rate_ci(events: float, person_time: float, alpha: float = 0.05) -> RateInterval:
    """Delta-method interval for a rate on the log scale, ``se(log rate) = 1/sqrt(events)``.

    Zero events give ``lower = 0`` and ``upper = nan``.
    """
    z = z_critical(alpha)
    rate = _numeric.ratio(events, person_time)
    se = _numeric.ratio(math.sqrt(events), person_time)
    log_rate = _numeric.log(rate)
    log_se = _numeric.ratio(1.0, math.sqrt(events))
    return RateInterval(
        rate=rate,
        se=se,
        lower=_numeric.exp(log_rate - z * log_se),
        upper=_numeric.exp(log_rate + z * log_se),
    )
