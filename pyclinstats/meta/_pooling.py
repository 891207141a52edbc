"""Inverse-variance pooling: fixed effect, DerSimonian-Laird random effects,
and pooling of raw 2x2 tables.

References
----------
DerSimonian & Laird (1986). Meta-analysis in clinical trials.
*Controlled Clinical Trials*, 7, 177-188.

IntHout, Ioannidis & Borm (2014). The Hartung-Knapp-Sidik-Jonkman method
for random effects meta-analysis is straightforward and considerably
outperforms the standard DerSimonian-Laird method. *BMC Medical Research
Methodology*, 14, 25.

Validates against: R ``meta::metagen()``, ``metafor::rma(method = "DL")``
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import (
    chi_squared_sf,
    normal_cdf,
    t_cdf,
    t_quantile,
    z_critical,
)
from pyclinstats.inference._common import Interval, Measure, as_tables, parse_measure
from pyclinstats.inference._mantel_haenszel import mantel_haenszel
from pyclinstats.meta._common import (
    FixedEffectResult,
    RandomEffectsResult,
    TableMetaResult,
    as_study_arrays,
)


def _normal_p(z: float) -> float:
    if math.isnan(z):
        return math.nan
    return 2.0 * (1.0 - normal_cdf(abs(z)))


def _inverse(v: NDArray[np.float64]) -> NDArray[np.float64]:
    with np.errstate(divide="ignore"):
        return 1.0 / v


# ---------------------------------------------------------------------------
# Fixed effect
# ---------------------------------------------------------------------------

def meta_analysis_fixed_effect(
    effects: ArrayLike,
    variances: ArrayLike,
    weights: ArrayLike | None = None,
    *,
    alpha: float = 0.05,
) -> FixedEffectResult:
    """Inverse-variance fixed-effect meta-analysis.

    Parameters
    ----------
    effects : array_like
        Study effect estimates (on the analysis scale, e.g. log OR).
    variances : array_like
        Within-study variances.
    weights : array_like or None
        Custom weights; default ``1 / variances``.
    alpha : float
        Two-sided level of the CI (default 0.05).

    Returns
    -------
    FixedEffectResult
    """
    y, v = as_study_arrays(effects, variances)
    w = _inverse(v) if weights is None else np.asarray(weights, dtype=np.float64)
    if w.shape != y.shape:
        raise ValueError("weights must have the same length as effects")

    sum_w = float(np.sum(w))
    pooled = float(np.sum(w * y)) / sum_w
    se = _numeric.sqrt(_numeric.ratio(1.0, sum_w))
    z = z_critical(alpha)
    z_stat = _numeric.ratio(pooled, se)

    return FixedEffectResult(
        pooled=pooled,
        se=se,
        ci=Interval(pooled - z * se, pooled + z * se),
        z=z_stat,
        p_value=_normal_p(z_stat),
        weights=w,
    )


# ---------------------------------------------------------------------------
# Random effects
# ---------------------------------------------------------------------------

def meta_analysis_random_effects(
    effects: ArrayLike,
    variances: ArrayLike,
    *,
    hksj: bool = False,
    hksj_t: bool = False,
    alpha: float = 0.05,
) -> RandomEffectsResult:
    """DerSimonian-Laird random-effects meta-analysis.

    Computes the fixed-effect estimate, Cochran's Q, ``I^2``, ``H^2`` and
    the moment estimator ``tau^2 = max(0, (Q - df) / (sum w - sum w^2 / sum w))``,
    then re-weights with ``1 / (v_i + tau^2)``.

    Parameters
    ----------
    effects : array_like
        Study effect estimates.
    variances : array_like
        Within-study variances.
    hksj : bool
        Apply the Hartung-Knapp-Sidik-Jonkman variance inflation: the SE is
        scaled by the square root of the weighted residual mean square. The
        CI and p-value stay normal-based. Ignored for a single study.
    hksj_t : bool
        With ``hksj``, also take the CI critical value and the p-value from
        a t-distribution with ``k - 1`` df.
    alpha : float
        Two-sided level of the CI (default 0.05).

    Returns
    -------
    RandomEffectsResult

    Notes
    -----
    ``I^2`` is 0 when ``Q = 0``. With a single study ``tau^2 = 0`` and
    ``H^2`` and the heterogeneity p-value are ``nan``. The prediction
    interval uses ``t_{k-2}`` and falls back to the normal for ``k <= 2``.

    Examples
    --------
    >>> res = meta_analysis_random_effects([0.5, 0.5, 0.5], [0.04, 0.04, 0.04])
    >>> res.tau2, res.i2
    (0.0, 0.0)
    """
    y, v = as_study_arrays(effects, variances)
    k = y.size
    df = k - 1
    fixed = meta_analysis_fixed_effect(y, v, alpha=alpha)

    w = fixed.weights
    sum_w = float(np.sum(w))
    sum_w2 = float(np.sum(w * w))
    q = float(np.sum(w * (y - fixed.pooled) ** 2))

    p_het = chi_squared_sf(q, df)
    i2 = max(0.0, (q - df) / q) if q > 0 else 0.0
    h2 = q / df if df > 0 else math.nan
    if df > 0:
        tau2 = max(0.0, (q - df) / (sum_w - sum_w2 / sum_w))
    else:
        tau2 = 0.0

    w_re = _inverse(v + tau2)
    sum_re = float(np.sum(w_re))
    pooled = float(np.sum(w_re * y)) / sum_re
    se = _numeric.sqrt(_numeric.ratio(1.0, sum_re))

    use_hksj = hksj and k > 1
    if use_hksj:
        q_hksj = float(np.sum(w_re * (y - pooled) ** 2)) / df
        se *= math.sqrt(q_hksj)
    use_t = use_hksj and hksj_t
    crit = t_quantile(1.0 - alpha / 2.0, df) if use_t else z_critical(alpha)

    z_stat = _numeric.ratio(pooled, se)
    if use_t and not math.isnan(z_stat):
        p_value = 2.0 * (1.0 - t_cdf(abs(z_stat), df))
    else:
        p_value = _normal_p(z_stat)

    t_pred = t_quantile(1.0 - alpha / 2.0, k - 2) if k > 2 else z_critical(alpha)
    pred_se = math.sqrt(se * se + tau2)

    return RandomEffectsResult(
        pooled=pooled,
        se=se,
        ci=Interval(pooled - crit * se, pooled + crit * se),
        z=z_stat,
        p_value=p_value,
        q=q,
        df=df,
        p_heterogeneity=p_het,
        i2=i2,
        h2=h2,
        tau2=tau2,
        prediction_interval=Interval(pooled - t_pred * pred_se, pooled + t_pred * pred_se),
        weights=w_re / sum_re * 100.0,
        fixed=fixed,
        hksj=use_hksj,
    )


# ---------------------------------------------------------------------------
# Raw 2x2 tables
# ---------------------------------------------------------------------------

def _table_effects(
    cells: NDArray[np.float64], measure: Measure,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    a, b, c, d = cells.T
    with np.errstate(divide="ignore", invalid="ignore"):
        if measure is Measure.OR:
            effects = np.log((a * d) / (b * c))
            variances = 1.0 / a + 1.0 / b + 1.0 / c + 1.0 / d
        elif measure is Measure.RR:
            effects = np.log((a / (a + b)) / (c / (c + d)))
            variances = 1.0 / a - 1.0 / (a + b) + 1.0 / c - 1.0 / (c + d)
        else:
            effects = a / (a + b) - c / (c + d)
            variances = a * b / (a + b) ** 3 + c * d / (c + d) ** 3
    return effects, variances


def meta_analysis_tables(
    tables: Iterable,
    measure: str = "OR",
    *,
    alpha: float = 0.05,
) -> TableMetaResult | None:
    """Pool a set of 2x2 tables by inverse variance and by Mantel-Haenszel.

    Per-study effects are ``ln(OR)`` (variance ``1/a + 1/b + 1/c + 1/d``),
    ``ln(RR)`` (``1/a - 1/(a+b) + 1/c - 1/(c+d)``) or the risk difference
    (``ab/(a+b)^3 + cd/(c+d)^3``). The inverse-variance pooling is
    random-effects.

    Parameters
    ----------
    tables : iterable
        ``{a, b, c, d}`` mappings, 4-sequences or :class:`CountTable`.
    measure : str
        ``'OR'``, ``'RR'`` or ``'RD'``. Any other value returns ``None``.
    alpha : float
        Two-sided level of the CIs.

    Returns
    -------
    TableMetaResult or None
        ``mh`` is ``None`` for the risk difference. :func:`mantel_haenszel`
        pools only OR and RR, and no RR result is substituted for an RD
        request.

    Notes
    -----
    Zero cells are not continuity-corrected. A study with a zero cell has
    a non-finite effect or variance, which propagates ``nan`` into the
    inverse-variance result.
    """
    m = parse_measure(measure)
    if m is None:
        return None
    cells = np.array(as_tables(tables), dtype=np.float64)
    effects, variances = _table_effects(cells, m)

    iv = meta_analysis_random_effects(effects, variances, alpha=alpha)
    mh = None if m is Measure.RD else mantel_haenszel(cells.tolist(), m.value, alpha=alpha)
    return TableMetaResult(
        measure=m.value,
        iv=iv,
        mh=mh,
        effects=effects,
        variances=variances,
    )
