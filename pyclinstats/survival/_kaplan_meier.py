"""Kaplan-Meier survival estimation and restricted mean survival time.

Greenwood variance with a log-log transformed confidence interval.

References
----------
Kaplan & Meier (1958). Nonparametric estimation from incomplete
observations. *JASA*, 53, 457-481.

Royston & Parmar (2013). Restricted mean survival time: an alternative to
the hazard ratio for the design and analysis of randomized trials with a
time-to-event outcome. *BMC Medical Research Methodology*, 13, 152.

Validates against: R ``survival::survfit(conf.type = "log-log")``,
``survRM2::rmst2()``
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyclinstats.distributions._continuous import z_critical
from pyclinstats.inference._common import Interval
from pyclinstats.survival._common import KaplanMeierResult, RMSTResult


def as_survival_arrays(
    times: ArrayLike, events: ArrayLike,
) -> tuple[NDArray[np.float64], NDArray[np.bool_]]:
    """Validate follow-up times and event indicators (1 = event, 0 = censored)."""
    t = np.asarray(times, dtype=np.float64)
    e = np.asarray(events)
    if t.ndim != 1 or e.ndim != 1:
        raise ValueError("times and events must be 1-D")
    if t.size == 0:
        raise ValueError("Need at least one observation")
    if t.shape != e.shape:
        raise ValueError(
            f"times and events must have the same length, got {t.size} and {e.size}"
        )
    if np.any(np.isnan(t)):
        raise ValueError("times must not contain NaN")
    return t, e.astype(bool)


def _fit(t: NDArray[np.float64], e: NDArray[np.bool_], z: float) -> KaplanMeierResult:
    n = t.size
    uniq = np.unique(t)
    deaths = np.array([np.sum(e & (t == u)) for u in uniq], dtype=np.int64)
    censored = np.array([np.sum(~e & (t == u)) for u in uniq], dtype=np.int64)
    n_risk = n - np.concatenate([[0], np.cumsum(deaths + censored)[:-1]])

    m = uniq.size
    surv = np.empty(m)
    se = np.empty(m)
    lower = np.empty(m)
    upper = np.empty(m)

    s = 1.0
    greenwood = 0.0
    for i in range(m):
        d, r = deaths[i], n_risk[i]
        if d > 0:
            s *= 1.0 - d / r
            if d < r:
                greenwood += d / (r * (r - d))
        surv[i] = s
        se[i] = s * math.sqrt(greenwood)
        if 0.0 < s < 1.0:
            log_s = math.log(s)
            centre = math.log(-log_s)
            se_ll = math.sqrt(greenwood) / abs(log_s)
            lower[i] = math.exp(-math.exp(centre + z * se_ll))
            upper[i] = math.exp(-math.exp(centre - z * se_ll))
        else:
            lower[i] = upper[i] = s

    median = None
    median_ci = None
    below = np.flatnonzero(surv <= 0.5)
    if below.size:
        median = float(uniq[below[0]])
        lo = np.flatnonzero(surv <= 0.5 + z * se)
        hi = np.flatnonzero(surv <= 0.5 - z * se)
        median_ci = Interval(
            float(uniq[lo[0]]) if lo.size else math.nan,
            float(uniq[hi[0]]) if hi.size else math.nan,
        )

    return KaplanMeierResult(
        time=np.concatenate([[0.0], uniq]),
        n_risk=np.concatenate([[n], n_risk]).astype(np.int64),
        events=np.concatenate([[0], deaths]),
        censored=np.concatenate([[0], censored]),
        survival=np.concatenate([[1.0], surv]),
        se=np.concatenate([[0.0], se]),
        ci_lower=np.concatenate([[1.0], lower]),
        ci_upper=np.concatenate([[1.0], upper]),
        median=median,
        median_ci=median_ci,
        n=n,
    )


def kaplan_meier(
    times: ArrayLike,
    events: ArrayLike,
    groups: Sequence[Hashable] | None = None,
    *,
    alpha: float = 0.05,
) -> KaplanMeierResult | dict[Hashable, KaplanMeierResult]:
    """Kaplan-Meier product-limit estimate with Greenwood standard errors.

    At each distinct time the survival is multiplied by
    ``1 - events / at_risk`` (only when events occur) and the Greenwood
    sum accumulates ``events / (at_risk (at_risk - events))``. The
    number at risk then drops by ``events + censored``.

    Parameters
    ----------
    times : array_like
        Follow-up time per subject.
    events : array_like
        1 (or True) for an event, 0 for censoring.
    groups : sequence or None
        Optional group label per subject.
    alpha : float
        Two-sided level of the pointwise CIs (default 0.05).

    Returns
    -------
    KaplanMeierResult or dict
        A single result without ``groups``; otherwise a dict keyed by
        group label in order of first appearance.

    Notes
    -----
    The log-log CI is only defined for ``0 < S < 1``; at the boundaries it
    collapses to the point estimate. When every subject at risk has the
    event the survival drops to 0, the Greenwood term is undefined and is
    skipped, so ``se = 0`` from then on.

    Examples
    --------
    >>> km = kaplan_meier([5, 6, 6, 8], [1, 1, 0, 1])
    >>> km.survival.round(4).tolist()
    [1.0, 0.75, 0.5, 0.0]
    >>> km.median
    6.0
    """
    t, e = as_survival_arrays(times, events)
    z = z_critical(alpha)
    if groups is None:
        return _fit(t, e, z)

    labels = np.asarray(groups, dtype=object)
    if labels.shape != t.shape:
        raise ValueError("groups must have the same length as times")
    return {g: _fit(t[labels == g], e[labels == g], z) for g in dict.fromkeys(groups)}


def _area(time: NDArray[np.float64], surv: NDArray[np.float64], start: int, tau: float) -> float:
    """Area under the step function ``surv`` from ``time[start]`` to ``tau``."""
    lo = time[start:]
    hi = np.minimum(np.append(time[start + 1:], np.inf), tau)
    return float(np.sum(surv[start:] * np.clip(hi - lo, 0.0, None)))


def restricted_mean_survival_time(
    km: KaplanMeierResult,
    tau: float,
    *,
    alpha: float = 0.05,
) -> RMSTResult:
    """Restricted mean survival time: area under the KM curve on ``[0, tau]``.

    The variance is the Greenwood-type sum
    ``sum_j A_j^2 d_j / (n_j (n_j - d_j))`` over event times ``t_j <= tau``,
    where ``A_j`` is the area under the curve from ``t_j`` to ``tau``.
    Beyond the last observed time the curve is carried forward.
    """
    if not tau > 0:
        raise ValueError(f"tau must be > 0, got {tau}")

    rmst = _area(km.time, km.survival, 0, tau)
    variance = 0.0
    for j in range(1, km.time.size):
        if km.time[j] > tau:
            break
        d, r = km.events[j], km.n_risk[j]
        if d > 0 and r > d:
            a_j = _area(km.time, km.survival, j, tau)
            variance += a_j * a_j * d / (r * (r - d))

    se = math.sqrt(variance)
    z = z_critical(alpha)
    return RMSTResult(rmst=rmst, se=se, ci=Interval(rmst - z * se, rmst + z * se), tau=tau)
