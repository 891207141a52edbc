"""Incidence rates, rate ratios, SMRs and direct standardization.

Exact Poisson CIs for single rates and SMRs; a log-scale Wald CI for the
rate ratio.

Validates against: R ``epitools::pois.exact()``, ``epitools::ageadjust.direct()``
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import z_critical
from pyclinstats.epi._common import RateRatioResult, RateResult, SMRResult, StandardizedRate
from pyclinstats.inference._common import Interval
from pyclinstats.inference._intervals import poisson_exact_ci


def incidence_rate(events: int, person_time: float, alpha: float = 0.05) -> RateResult:
    """Incidence rate ``events / person_time`` with an exact Poisson CI.

    Examples
    --------
    >>> res = incidence_rate(10, 1000)
    >>> res.rate
    0.01
    """
    if events < 0:
        raise ValueError(f"events must be non-negative, got {events}")
    if not person_time > 0:
        raise ValueError(f"person_time must be > 0, got {person_time}")
    ci = poisson_exact_ci(events, alpha)
    return RateResult(
        rate=events / person_time,
        ci=Interval(ci.lower / person_time, ci.upper / person_time),
        events=events,
        person_time=person_time,
    )


def rate_ratio(
    events1: int,
    pt1: float,
    events2: int,
    pt2: float,
    alpha: float = 0.05,
) -> RateRatioResult:
    """Ratio of two incidence rates, ``se(ln RR) = sqrt(1/e1 + 1/e2)``.

    A zero count in either group gives ``se = inf`` and the CI
    ``(0, inf)``.
    """
    if not (pt1 > 0 and pt2 > 0):
        raise ValueError("person-time must be > 0 in both groups")
    r1 = events1 / pt1
    r2 = events2 / pt2
    ratio = _numeric.ratio(r1, r2)
    se = _numeric.sqrt(_numeric.ratio(1.0, events1) + _numeric.ratio(1.0, events2))

    if math.isfinite(se):
        z = z_critical(alpha)
        ln = math.log(ratio)
        ci = Interval(math.exp(ln - z * se), math.exp(ln + z * se), se)
    else:
        ci = Interval(0.0, math.inf, se)
    return RateRatioResult(ratio=ratio, ci=ci, se_ln=se, rate1=r1, rate2=r2)


def smr(observed: int, expected: float, alpha: float = 0.05) -> SMRResult:
    """Standardized mortality ratio ``observed / expected`` with an exact CI."""
    if observed < 0:
        raise ValueError(f"observed must be non-negative, got {observed}")
    if not expected > 0:
        raise ValueError(f"expected must be > 0, got {expected}")
    ci = poisson_exact_ci(observed, alpha)
    return SMRResult(
        smr=observed / expected,
        ci=Interval(ci.lower / expected, ci.upper / expected),
        observed=observed,
        expected=expected,
    )


def direct_standardization(
    standard_population: ArrayLike,
    *,
    events: ArrayLike | None = None,
    population: ArrayLike | None = None,
    rates: ArrayLike | None = None,
    se: ArrayLike | None = None,
    alpha: float = 0.05,
) -> StandardizedRate:
    """Directly standardized rate across strata (e.g. age groups).

    ``rate = sum(w_i r_i) / sum(w_i)`` and
    ``var = sum((w_i se_i)^2) / sum(w_i)^2`` where ``w_i`` is the standard
    population of stratum ``i``.

    Parameters
    ----------
    standard_population : array_like
        Standard-population weight per stratum.
    events, population : array_like, optional
        Per-stratum counts; then ``r_i = events / population`` and
        ``se_i = sqrt(events) / population``.
    rates, se : array_like, optional
        Per-stratum rates and their SEs, used when counts are not given.
    alpha : float
        Two-sided level of the normal CI.

    Returns
    -------
    StandardizedRate
    """
    w = np.asarray(standard_population, dtype=np.float64)
    if events is not None and population is not None:
        e = np.asarray(events, dtype=np.float64)
        pop = np.asarray(population, dtype=np.float64)
        if e.shape != w.shape or pop.shape != w.shape:
            raise ValueError("events, population and standard_population must have equal length")
        r = e / pop
        s = np.sqrt(e) / pop
    elif rates is not None and se is not None:
        r = np.asarray(rates, dtype=np.float64)
        s = np.asarray(se, dtype=np.float64)
        if r.shape != w.shape or s.shape != w.shape:
            raise ValueError("rates, se and standard_population must have equal length")
    else:
        raise ValueError("Provide either events and population, or rates and se")

    total = float(np.sum(w))
    rate = float(np.sum(r * w)) / total
    std_se = math.sqrt(float(np.sum((s * w) ** 2))) / total
    z = z_critical(alpha)
    return StandardizedRate(rate=rate, se=std_se, ci=Interval(rate - z * std_se, rate + z * std_se, std_se))
