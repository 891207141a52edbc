"""Sensitivity analyses: leave-one-out, cumulative and subgroup pooling."""

from __future__ import annotations

import math
from collections.abc import Hashable, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pyclinstats.distributions._continuous import chi_squared_sf, z_critical
from pyclinstats.inference._common import Interval
from pyclinstats.meta._common import (
    CumulativeResult,
    LeaveOneOutResult,
    SubgroupResult,
    as_study_arrays,
)
from pyclinstats.meta._pooling import meta_analysis_random_effects


def leave_one_out(effects: ArrayLike, variances: ArrayLike) -> list[LeaveOneOutResult]:
    """Random-effects pooling with each study omitted in turn."""
    y, v = as_study_arrays(effects, variances)
    if y.size < 2:
        raise ValueError("leave-one-out needs at least 2 studies")

    results = []
    for i in range(y.size):
        keep = np.arange(y.size) != i
        ma = meta_analysis_random_effects(y[keep], v[keep])
        results.append(LeaveOneOutResult(
            excluded=i, pooled=ma.pooled, ci=ma.ci, i2=ma.i2, tau2=ma.tau2,
        ))
    return results


def cumulative_meta_analysis(
    effects: ArrayLike,
    variances: ArrayLike,
    labels: Sequence[str] | None = None,
) -> list[CumulativeResult]:
    """Random-effects pooling over a growing prefix of the studies.

    Studies are added in the order given (typically publication year).
    The first step is the single study's own estimate with a normal CI.
    Default labels are ``'Study 1'``, ``'Study 2'``, ...
    """
    y, v = as_study_arrays(effects, variances)
    if labels is not None and len(labels) != y.size:
        raise ValueError("labels must have the same length as effects")

    results = []
    for i in range(y.size):
        label = labels[i] if labels is not None else f"Study {i + 1}"
        if i == 0:
            se = math.sqrt(v[0])
            z = z_critical()
            pooled = float(y[0])
            ci = Interval(pooled - z * se, pooled + z * se)
            i2 = 0.0
        else:
            ma = meta_analysis_random_effects(y[: i + 1], v[: i + 1])
            pooled, ci, i2 = ma.pooled, ma.ci, ma.i2
        results.append(CumulativeResult(n_studies=i + 1, label=label, pooled=pooled, ci=ci, i2=i2))
    return results


def subgroup_analysis(
    effects: ArrayLike,
    variances: ArrayLike,
    groups: Sequence[Hashable],
) -> SubgroupResult:
    """Pool each subgroup separately and test for subgroup differences.

    Overall Q is split into ``Q_within = sum Q_i`` and
    ``Q_between = Q_overall - Q_within`` on ``groups - 1`` df.

    Parameters
    ----------
    effects, variances : array_like
        Per-study estimates and variances.
    groups : sequence
        Subgroup label per study. Subgroups are reported in order of first
        appearance.

    Returns
    -------
    SubgroupResult
    """
    y, v = as_study_arrays(effects, variances)
    if len(groups) != y.size:
        raise ValueError("groups must have the same length as effects")

    labels = np.asarray(groups, dtype=object)
    subgroups = {}
    for g in dict.fromkeys(groups):
        mask = labels == g
        subgroups[g] = meta_analysis_random_effects(y[mask], v[mask])

    overall = meta_analysis_random_effects(y, v)
    q_within = sum(r.q for r in subgroups.values())
    q_between = overall.q - q_within
    df_between = len(subgroups) - 1
    return SubgroupResult(
        subgroups=subgroups,
        overall=overall,
        q_between=q_between,
        df_between=df_between,
        p_between=chi_squared_sf(q_between, df_between),
        q_within=q_within,
    )
