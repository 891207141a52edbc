"""Log-rank (Mantel-Cox) test for two survival curves.

Validates against: R ``survival::survdiff()``
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyclinstats import _numeric
from pyclinstats.distributions._continuous import chi_squared_sf, z_critical
from pyclinstats.inference._common import Interval
from pyclinstats.survival._common import LogRankResult
from pyclinstats.survival._kaplan_meier import as_survival_arrays

logger = logging.getLogger(__name__)


def log_rank_test(
    times: ArrayLike,
    events: ArrayLike,
    groups: Sequence[Hashable],
    *,
    alpha: float = 0.05,
) -> LogRankResult | None:
    """Compare two survival curves with the log-rank test.

    At each distinct event time the observed and expected events in the
    first group are accumulated together with the hypergeometric variance
    ``n1 n2 d (N - d) / (N^2 (N - 1))``. ``chi2 = (O - E)^2 / V`` on 1 df.

    Parameters
    ----------
    times : array_like
        Follow-up time per subject.
    events : array_like
        1 (or True) for an event, 0 for censoring.
    groups : sequence
        Group label per subject; exactly two distinct labels.
    alpha : float
        Two-sided level of the hazard-ratio CI.

    Returns
    -------
    LogRankResult or None
        ``None`` (with a warning) unless there are exactly two groups.
        With no events, ``V = 0`` and the statistic is ``nan``.
    """
    t, e = as_survival_arrays(times, events)
    labels = np.asarray(groups, dtype=object)
    if labels.shape != t.shape:
        raise ValueError("groups must have the same length as times")

    uniq = tuple(dict.fromkeys(groups))
    if len(uniq) != 2:
        logger.warning("log-rank test needs exactly 2 groups, got %d", len(uniq))
        return None

    in_first = labels == uniq[0]
    event_times = np.unique(t[e])

    # at-risk and event counts per group, one row per event time
    at_risk = t[None, :] >= event_times[:, None]
    died = (t[None, :] == event_times[:, None]) & e[None, :]
    n1 = np.sum(at_risk & in_first, axis=1).astype(np.float64)
    n2 = np.sum(at_risk & ~in_first, axis=1).astype(np.float64)
    d1 = np.sum(died & in_first, axis=1).astype(np.float64)
    d = np.sum(died, axis=1).astype(np.float64)
    n = n1 + n2

    observed = float(np.sum(d1))
    expected = float(np.sum(n1 * d / n))
    multi = n > 1
    variance = float(np.sum(
        n1[multi] * n2[multi] * d[multi] * (n[multi] - d[multi])
        / (n[multi] ** 2 * (n[multi] - 1.0))
    ))

    o_minus_e = observed - expected
    chi2 = _numeric.ratio(o_minus_e * o_minus_e, variance)
    ln_hr = _numeric.ratio(o_minus_e, variance)
    se = _numeric.ratio(1.0, _numeric.sqrt(variance))
    z = z_critical(alpha)

    return LogRankResult(
        chi2=chi2,
        df=1,
        p_value=chi_squared_sf(chi2, 1),
        observed=observed,
        expected=expected,
        variance=variance,
        hr=_numeric.exp(ln_hr),
        hr_ci=Interval(_numeric.exp(ln_hr - z * se), _numeric.exp(ln_hr + z * se)),
        se_ln_hr=se,
        groups=uniq,
    )
