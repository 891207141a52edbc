"""Hypothesis tests for proportions and 2x2 tables.

Two-proportion z-test, Pearson chi-squared (with optional Yates
correction), Fisher's exact test, McNemar's test, and the Cochran-Armitage
test for trend.

Validates against: R ``stats::prop.test()``, ``chisq.test()``,
``fisher.test()``, ``mcnemar.test()``, ``prop.trend.test()``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import chi_squared_sf, normal_cdf
from pyclinstats.distributions._discrete import binomial_pmf, hypergeometric_pmf
from pyclinstats.inference._common import (
    ChiSquaredResult,
    FisherResult,
    McNemarResult,
    TrendResult,
    ZTestResult,
)

# Relative tolerance when comparing table probabilities against the observed one
_FISHER_REL_TOL = 1e-7


def _two_sided_normal_p(z: float) -> float:
    if math.isnan(z):
        return math.nan
    return 2.0 * (1.0 - normal_cdf(abs(z)))


def two_proportion_z_test(
    x1: int,
    n1: int,
    x2: int,
    n2: int,
    *,
    pooled: bool = True,
    continuity_correction: bool = False,
) -> ZTestResult:
    """Z-test for the difference of two independent proportions.

    Parameters
    ----------
    x1, n1 : int
        Events and total in group 1.
    x2, n2 : int
        Events and total in group 2.
    pooled : bool
        Use the pooled-proportion SE (default) or the unpooled SE.
    continuity_correction : bool
        Subtract ``0.5 (1/n1 + 1/n2)`` from ``|p1 - p2|``.

    Returns
    -------
    ZTestResult
        ``z`` is computed from ``|p1 - p2|`` and is therefore non-negative
        unless the correction exceeds the difference.
    """
    p1 = x1 / n1
    p2 = x2 / n2
    diff = p1 - p2

    if pooled:
        p_pool = (x1 + x2) / (n1 + n2)
        se = math.sqrt(p_pool * (1.0 - p_pool) * (1.0 / n1 + 1.0 / n2))
    else:
        se = math.sqrt(p1 * (1.0 - p1) / n1 + p2 * (1.0 - p2) / n2)

    correction = 0.5 * (1.0 / n1 + 1.0 / n2) if continuity_correction else 0.0
    z = _numeric.ratio(abs(diff) - correction, se)

    return ZTestResult(p1=p1, p2=p2, diff=diff, se=se, z=z, p_value=_two_sided_normal_p(z))


def chi_squared_test_2x2(a: int, b: int, c: int, d: int, yates: bool = False) -> ChiSquaredResult:
    """Pearson chi-squared test for a 2x2 table, df = 1.

    ``chi2 = n (ad - bc)^2 / ((a+b)(c+d)(a+c)(b+d))``; with ``yates=True``
    the numerator uses ``max(0, |ad - bc| - n/2)``.
    A zero margin gives ``chi2 = nan``.
    """
    n = a + b + c + d
    cross = a * d - b * c
    if yates:
        num = n * max(0.0, abs(cross) - n / 2.0) ** 2
    else:
        num = n * float(cross) ** 2
    denom = float(a + b) * (c + d) * (a + c) * (b + d)
    chi2 = _numeric.ratio(num, denom)
    return ChiSquaredResult(chi2=chi2, df=1, p_value=chi_squared_sf(chi2, 1), yates=yates)


def fisher_exact(a: int, b: int, c: int, d: int) -> FisherResult:
    """Fisher's exact test, two-sided.

    Sums the hypergeometric probabilities of every table with the observed
    margins whose probability does not exceed that of the observed table.

    Examples
    --------
    >>> round(fisher_exact(3, 1, 1, 3).p_value, 4)
    0.4857
    """
    n = a + b + c + d
    r1, r2 = a + b, c + d
    c1 = a + c
    p_obs = hypergeometric_pmf(a, n, r1, c1)
    threshold = p_obs * (1.0 + _FISHER_REL_TOL)

    p_value = 0.0
    for i in range(max(0, c1 - r2), min(r1, c1) + 1):
        p_i = hypergeometric_pmf(i, n, r1, c1)
        if p_i <= threshold:
            p_value += p_i
    return FisherResult(p_value=min(1.0, p_value), p_obs=p_obs)


def mcnemar_test(b: int, c: int, exact: bool = False) -> McNemarResult:
    """McNemar's test from the discordant cells ``b`` and ``c``.

    The asymptotic form is ``(b - c)^2 / (b + c)`` on 1 df (no continuity
    correction). The exact form doubles the binomial(b + c, 1/2) tail at
    ``min(b, c)`` and caps it at 1.
    """
    odds_ratio = _numeric.ratio(b, c)
    if exact:
        n = b + c
        tail = sum(binomial_pmf(i, n, 0.5) for i in range(min(b, c) + 1))
        return McNemarResult(
            chi2=None, df=None, p_value=min(1.0, 2.0 * tail),
            method="exact", odds_ratio=odds_ratio,
        )

    chi2 = _numeric.ratio(float(b - c) ** 2, b + c)
    return McNemarResult(
        chi2=chi2, df=1, p_value=chi_squared_sf(chi2, 1),
        method="asymptotic", odds_ratio=odds_ratio,
    )


def cochran_armitage_trend(
    counts: ArrayLike,
    totals: ArrayLike,
    scores: Sequence[float] | None = None,
) -> TrendResult:
    """Cochran-Armitage test for a linear trend in proportions.

    Parameters
    ----------
    counts : array of int
        Events in each ordered group.
    totals : array of int
        Group sizes.
    scores : sequence of float or None
        Group scores; default ``0, 1, ..., k-1``.

    Returns
    -------
    TrendResult
    """
    counts = np.asarray(counts, dtype=np.float64)
    totals = np.asarray(totals, dtype=np.float64)
    if counts.ndim != 1 or counts.shape != totals.shape:
        raise ValueError("counts and totals must be 1-D arrays of equal length")
    k = counts.shape[0]
    s = np.arange(k, dtype=np.float64) if scores is None else np.asarray(scores, dtype=np.float64)
    if s.shape != counts.shape:
        raise ValueError(f"scores must have length {k}, got {s.shape[0]}")

    N = totals.sum()
    p_bar = counts.sum() / N
    s_bar = float(np.sum(totals * s) / N)

    T = float(np.sum(counts * (s - s_bar)))
    sum_ns = float(np.sum(totals * s))
    sum_ns2 = float(np.sum(totals * s * s))
    var_t = float(p_bar * (1.0 - p_bar) * (sum_ns2 - sum_ns * sum_ns / N))

    z = _numeric.ratio(T, _numeric.sqrt(var_t))
    return TrendResult(z=z, p_value=_two_sided_normal_p(z), T=T, var_t=var_t)
