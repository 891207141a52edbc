"""Sample size for an ordinal (shift) outcome under proportional odds.

Whitehead (1993) formula::

    N = 6 (z_a + z_b)^2 / (ln(OR)^2 (1 - sum p_i^3))

where ``p_i`` is the control-arm distribution over the ordered categories
(e.g. the modified Rankin Scale).

Validates against: R Hmisc::posamsize()
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from pyclinstats.power._common import (
    OrdinalShiftResult,
    _check_design_args,
    _z_alpha,
    _z_beta,
)


def sample_size_ordinal_shift(
    control_dist: Sequence[float],
    common_or: float,
    alpha: float = 0.05,
    power: float = 0.80,
) -> OrdinalShiftResult:
    """Per-group n for a proportional-odds shift analysis.

    Parameters
    ----------
    control_dist : sequence of float
        Category probabilities in the control arm (should sum to 1).
    common_or : float
        Common odds ratio across cut points (> 0, != 1).
    alpha, power : float
        Design parameters (defaults 0.05, 0.80).

    Returns
    -------
    OrdinalShiftResult
    """
    _check_design_args(alpha=alpha, power=power)
    p = np.asarray(control_dist, dtype=np.float64)
    if p.ndim != 1 or p.size < 2:
        raise ValueError("control_dist must have at least 2 categories")
    if np.any(p < 0):
        raise ValueError("control_dist must be non-negative")
    if common_or <= 0 or common_or == 1.0:
        raise ValueError(f"common_or must be > 0 and != 1, got {common_or}")

    za = _z_alpha(alpha)
    zb = _z_beta(power)
    ln_or = math.log(common_or)
    n_total = 6.0 * (za + zb) ** 2 / (ln_or * ln_or * (1.0 - float(np.sum(p ** 3))))
    n_per_group = math.ceil(n_total / 2.0)

    return OrdinalShiftResult(
        n_per_group=n_per_group,
        total=2 * n_per_group,
        common_or=common_or,
        ln_or=ln_or,
    )
