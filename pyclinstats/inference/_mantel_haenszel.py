"""Mantel-Haenszel pooling of stratified 2x2 tables.

Pooled odds ratio with the Robins-Breslow-Greenland variance and a
Breslow-Day homogeneity test, or pooled risk ratio with the
Greenland-Robins variance.

References
----------
Robins, Breslow & Greenland (1986). Estimators of the Mantel-Haenszel
variance consistent in both sparse data and large-strata limiting models.
*Biometrics*, 42, 311-323.

Greenland & Robins (1985). Estimation of a common effect parameter from
sparse follow-up data. *Biometrics*, 41, 55-68.

Breslow & Day (1980). *Statistical Methods in Cancer Research, Vol. I*.

Validates against: R ``stats::mantelhaen.test()``,
``DescTools::BreslowDayTest()``, ``epiR::epi.2by2()``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import chi_squared_sf, z_critical
from pyclinstats.inference._common import (
    BreslowDayResult,
    CountTable,
    Interval,
    MantelHaenszelResult,
    Measure,
    as_tables,
    parse_measure,
)
from pyclinstats.special._common import BRESLOW_DAY_MAX_ITER

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Breslow-Day
# ---------------------------------------------------------------------------

def _expected_a(t: CountTable, odds_ratio: float) -> tuple[float, bool]:
    """Solve for the expected ``a`` whose table has the given odds ratio.

    With margins fixed, ``f(x) = x (r2 - c1 + x) - OR (r1 - x)(c1 - x)`` is
    increasing on the valid range ``[max(0, c1 - r2), min(r1, c1)]``, where
    it changes sign. Newton steps that leave the current bracket are
    replaced by bisection.
    """
    r1, r2, c1 = t.a + t.b, t.c + t.d, t.a + t.c
    lo, hi = max(0.0, c1 - r2), float(min(r1, c1))

    x = min(max(float(t.a), lo), hi)
    for _ in range(BRESLOW_DAY_MAX_ITER):
        f = x * (r2 - c1 + x) - odds_ratio * (r1 - x) * (c1 - x)
        if f == 0.0:
            return x, True
        if f < 0.0:
            lo = x
        else:
            hi = x
        fprime = (r2 - c1 + 2.0 * x) + odds_ratio * ((r1 - x) + (c1 - x))
        x_new = x - f / fprime if fprime > 0.0 else (lo + hi) / 2.0
        if not lo < x_new < hi:
            x_new = (lo + hi) / 2.0
        if abs(x_new - x) < 1e-10 * max(1.0, abs(x)):
            return x_new, True
        x = x_new

    logger.debug("Breslow-Day: stratum %s did not converge", tuple(t))
    return x, False


def _breslow_day(tables: list[CountTable], odds_ratio: float) -> BreslowDayResult:
    if not (math.isfinite(odds_ratio) and odds_ratio > 0.0):
        return BreslowDayResult(
            statistic=math.nan, df=max(len(tables) - 1, 0), p_value=math.nan, converged=False,
        )

    statistic = 0.0
    contributing = 0
    all_converged = True
    for t in tables:
        if min(t.a + t.b, t.c + t.d, t.a + t.c, t.b + t.d) == 0:
            continue
        a_exp, converged = _expected_a(t, odds_ratio)
        all_converged = all_converged and converged
        b_exp = t.a + t.b - a_exp
        c_exp = t.a + t.c - a_exp
        d_exp = t.c + t.d - c_exp
        if min(a_exp, b_exp, c_exp, d_exp) <= 0.0:
            continue
        var_a = 1.0 / (1.0 / a_exp + 1.0 / b_exp + 1.0 / c_exp + 1.0 / d_exp)
        statistic += (t.a - a_exp) ** 2 / var_a
        contributing += 1

    # df counts only strata that entered the statistic
    df = max(contributing - 1, 0)
    return BreslowDayResult(
        statistic=statistic,
        df=df,
        p_value=chi_squared_sf(statistic, df),
        converged=all_converged,
    )


# ---------------------------------------------------------------------------
# Pooled estimates
# ---------------------------------------------------------------------------

def _pooled_or(tables: list[CountTable], z: float) -> MantelHaenszelResult:
    sum_r = sum_s = 0.0
    sum_pr = sum_ps_qr = sum_qs = 0.0
    for t in tables:
        n = t.n
        r = t.a * t.d / n
        s = t.b * t.c / n
        p = (t.a + t.d) / n
        q = (t.b + t.c) / n
        sum_r += r
        sum_s += s
        sum_pr += p * r
        sum_ps_qr += p * s + q * r
        sum_qs += q * s

    or_mh = _numeric.ratio(sum_r, sum_s)
    var_ln = (
        _numeric.ratio(sum_pr, 2.0 * sum_r * sum_r)
        + _numeric.ratio(sum_ps_qr, 2.0 * sum_r * sum_s)
        + _numeric.ratio(sum_qs, 2.0 * sum_s * sum_s)
    )
    se = _numeric.sqrt(var_ln)
    ln_or = _numeric.log(or_mh)

    return MantelHaenszelResult(
        measure=Measure.OR.value,
        estimate=or_mh,
        ln_estimate=ln_or,
        se=se,
        ci=Interval(_numeric.exp(ln_or - z * se), _numeric.exp(ln_or + z * se)),
        breslow_day=_breslow_day(tables, or_mh),
        stratum_estimates=np.array([_numeric.ratio(t.a * t.d, t.b * t.c) for t in tables]),
    )


def _pooled_rr(tables: list[CountTable], z: float) -> MantelHaenszelResult:
    sum_num = sum_den = 0.0
    p_sum = 0.0
    for t in tables:
        n = t.n
        n1, n0 = t.a + t.b, t.c + t.d
        sum_num += t.a * n0 / n
        sum_den += t.c * n1 / n
        p_sum += (n1 * n0 * (t.a + t.c) - t.a * t.c * n) / (n * n)

    rr_mh = _numeric.ratio(sum_num, sum_den)
    se = _numeric.sqrt(_numeric.ratio(p_sum, sum_num * sum_den))
    ln_rr = _numeric.log(rr_mh)

    return MantelHaenszelResult(
        measure=Measure.RR.value,
        estimate=rr_mh,
        ln_estimate=ln_rr,
        se=se,
        ci=Interval(_numeric.exp(ln_rr - z * se), _numeric.exp(ln_rr + z * se)),
        breslow_day=None,
        stratum_estimates=np.array([
            _numeric.ratio(_numeric.ratio(t.a, t.a + t.b), _numeric.ratio(t.c, t.c + t.d))
            for t in tables
        ]),
    )


def mantel_haenszel(
    tables: Iterable,
    measure: str = "OR",
    *,
    alpha: float = 0.05,
) -> MantelHaenszelResult | None:
    """Mantel-Haenszel pooled odds ratio or risk ratio across strata.

    Parameters
    ----------
    tables : iterable
        Strata as ``{a, b, c, d}`` mappings, 4-sequences or
        :class:`CountTable`. Empty strata (n = 0) are ignored.
    measure : str
        ``'OR'`` or ``'RR'``. Any other selector returns ``None``.
    alpha : float
        Two-sided level for the interval (default 0.05).

    Returns
    -------
    MantelHaenszelResult or None

    Validates against: R ``mantelhaen.test()$estimate``
    """
    m = parse_measure(measure, allowed=(Measure.OR, Measure.RR))
    if m is None:
        return None
    strata = [t for t in as_tables(tables) if t.n > 0]
    if not strata:
        raise ValueError("All strata are empty")

    z = z_critical(alpha)
    if m is Measure.OR:
        return _pooled_or(strata, z)
    return _pooled_rr(strata, z)
