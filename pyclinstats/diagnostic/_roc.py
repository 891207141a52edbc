"""Trapezoidal AUC from a set of ROC operating points.

References
----------
Hanley & McNeil (1982). The meaning and use of the area under a receiver
operating characteristic (ROC) curve. *Radiology*, 143, 29-36.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from pyclinstats.diagnostic._common import AUCResult
from pyclinstats.distributions._continuous import z_critical
from pyclinstats.inference._common import Interval


def auc_trapezoidal(
    sensitivities: ArrayLike,
    specificities: ArrayLike,
    n_positive: int | None = None,
    n_negative: int | None = None,
) -> AUCResult:
    """Area under the ROC curve by the trapezoidal rule.

    Points are sorted by false positive rate ``1 - specificity`` and
    joined by straight lines; include ``(0, 0)`` and ``(1, 1)`` to cover
    the full curve.

    Parameters
    ----------
    sensitivities, specificities : array_like
        Operating points of the test.
    n_positive, n_negative : int or None
        Numbers of diseased and non-diseased subjects for the Hanley-McNeil
        standard error. Default to the number of operating points, which
        only gives a rough SE.

    Returns
    -------
    AUCResult
    """
    tpr = np.asarray(sensitivities, dtype=np.float64)
    fpr = 1.0 - np.asarray(specificities, dtype=np.float64)
    if tpr.ndim != 1 or tpr.shape != fpr.shape:
        raise ValueError("sensitivities and specificities must be 1-D of equal length")
    if tpr.size < 2:
        raise ValueError("Need at least 2 operating points")

    order = np.argsort(fpr, kind="stable")
    fpr, tpr = fpr[order], tpr[order]
    auc = float(np.sum(np.diff(fpr) * (tpr[1:] + tpr[:-1]) / 2.0))

    n1 = tpr.size if n_positive is None else n_positive
    n2 = tpr.size if n_negative is None else n_negative
    q1 = auc / (2.0 - auc)
    q2 = 2.0 * auc * auc / (1.0 + auc)
    var = (auc * (1.0 - auc) + (n1 - 1) * (q1 - auc * auc) + (n2 - 1) * (q2 - auc * auc)) / (n1 * n2)
    se = math.sqrt(max(0.0, var))

    z = z_critical()
    return AUCResult(auc=auc, se=se, ci=Interval(max(0.0, auc - z * se), min(1.0, auc + z * se)))
