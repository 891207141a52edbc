"""Small-study effects and publication bias: Egger, Begg, trim-and-fill.

References
----------
Egger, Davey Smith, Schneider & Minder (1997). Bias in meta-analysis
detected by a simple, graphical test. *BMJ*, 315, 629-634.

Begg & Mazumdar (1994). Operating characteristics of a rank correlation
test for publication bias. *Biometrics*, 50, 1088-1101.

Duval & Tweedie (2000). Trim and fill: a simple funnel-plot-based method
of testing and adjusting for publication bias in meta-analysis.
*Biometrics*, 56, 455-463.

Validates against: R ``meta::metabias()``, ``metafor::trimfill()``
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import normal_cdf, t_cdf
from pyclinstats.meta._common import (
    BeggResult,
    EggerResult,
    TrimAndFillResult,
    as_study_arrays,
)
from pyclinstats.meta._pooling import meta_analysis_random_effects


def egger_test(effects: ArrayLike, se: ArrayLike) -> EggerResult:
    """Egger's regression test for funnel-plot asymmetry.

    Regresses the standardized effect ``y_i / se_i`` on precision
    ``1 / se_i``; an intercept far from zero indicates small-study
    effects. The intercept is tested with a t-statistic on ``k - 2`` df.

    Parameters
    ----------
    effects : array_like
        Study effect estimates.
    se : array_like
        Their standard errors (not variances).

    Returns
    -------
    EggerResult

    Raises
    ------
    ValueError
        With fewer than 3 studies.
    """
    y, s = as_study_arrays(effects, se, name="se")
    k = y.size
    if k < 3:
        raise ValueError(f"Egger's test needs at least 3 studies, got {k}")

    x = 1.0 / s
    z = y / s
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(z))
    sum_xy = float(np.sum(x * z))
    sum_x2 = float(np.sum(x * x))

    # equal standard errors leave no spread in precision; slope is 0/0
    slope = _numeric.ratio(k * sum_xy - sum_x * sum_y, k * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / k

    resid_ss = float(np.sum((z - (intercept + slope * x)) ** 2))
    mse = resid_ss / (k - 2)
    spread = _numeric.ratio((sum_x / k) ** 2, sum_x2 - sum_x * sum_x / k)
    se_a = _numeric.sqrt(mse * (1.0 / k + spread))

    t_stat = _numeric.ratio(intercept, se_a)
    if math.isnan(t_stat):
        p_value = math.nan
    else:
        p_value = 2.0 * (1.0 - t_cdf(abs(t_stat), k - 2))
    return EggerResult(
        intercept=intercept,
        slope=slope,
        se=se_a,
        t=t_stat,
        p_value=p_value,
        df=k - 2,
    )


def begg_test(effects: ArrayLike, se: ArrayLike) -> BeggResult:
    """Begg's rank correlation between effect size and standard error.

    Kendall's tau over all study pairs (ties count as neither concordant
    nor discordant), ``var(tau) = 2(2k + 5) / (9k(k - 1))``, two-sided
    normal p-value.
    """
    y, s = as_study_arrays(effects, se, name="se")
    k = y.size
    if k < 2:
        raise ValueError(f"Begg's test needs at least 2 studies, got {k}")

    iu = np.triu_indices(k, 1)
    sign = np.sign((y[:, None] - y[None, :]) * (s[:, None] - s[None, :]))[iu]
    concordant = int(np.sum(sign > 0))
    discordant = int(np.sum(sign < 0))

    tau = (concordant - discordant) / (k * (k - 1) / 2.0)
    var_tau = 2.0 * (2.0 * k + 5.0) / (9.0 * k * (k - 1.0))
    z = tau / math.sqrt(var_tau)
    return BeggResult(
        tau=tau,
        z=z,
        p_value=2.0 * (1.0 - normal_cdf(abs(z))),
        concordant=concordant,
        discordant=discordant,
    )


def trim_and_fill(effects: ArrayLike, variances: ArrayLike) -> TrimAndFillResult:
    """Duval-Tweedie trim-and-fill using the R0 rank estimator.

    Ranks ``|y_i - center|`` around the random-effects pooled estimate and
    sums the ranks of the positive residuals (``S``). The number of missing
    studies is ``k0 = round(max(0, (4S - k(k + 1)) / (2k - 1)))``. The
    ``k0`` studies with the largest positive residuals are mirrored as
    ``2 * center - y_i`` (keeping their variances) and the augmented set is
    re-pooled.

    Returns
    -------
    TrimAndFillResult
    """
    y, v = as_study_arrays(effects, variances)
    k = y.size
    original = meta_analysis_random_effects(y, v)
    center = original.pooled

    resid = y - center
    ranks = np.empty(k, dtype=np.float64)
    ranks[np.argsort(np.abs(resid), kind="stable")] = np.arange(1, k + 1)
    s_plus = float(np.sum(ranks[resid > 0]))
    k0 = int(math.floor(max(0.0, (4.0 * s_plus - k * (k + 1)) / (2.0 * k - 1.0)) + 0.5))

    right = np.flatnonzero(resid > 0)
    right = right[np.argsort(-resid[right], kind="stable")][:k0]
    imputed_y = 2.0 * center - y[right]
    imputed_v = v[right]

    adjusted = meta_analysis_random_effects(
        np.concatenate([y, imputed_y]), np.concatenate([v, imputed_v]),
    )
    return TrimAndFillResult(
        k0=k0,
        original=original,
        adjusted=adjusted,
        imputed_effects=imputed_y,
        imputed_variances=imputed_v,
    )
