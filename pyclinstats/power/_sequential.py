"""Group-sequential designs: boundaries and sample size inflation.

Boundaries use a Lan-DeMets style alpha-spending approximation at equally
spaced information fractions ``t = k / K``. Inflation factors come from
published tables for 2-5 looks with a formula fallback beyond.

References
----------
Lan & DeMets (1983). Discrete sequential boundaries for clinical trials.
*Biometrika*, 70, 659-663.

Validates against: R gsDesign::gsDesign() (approximately)
"""

from __future__ import annotations

import logging
import math

from pyclinstats.distributions._continuous import normal_cdf, normal_quantile
from pyclinstats.power._common import Boundary, GroupSequentialResult

logger = logging.getLogger(__name__)

_SPENDING_TYPES = ("obf", "pocock")

_OBF_INFLATION = {2: 1.008, 3: 1.015, 4: 1.020, 5: 1.025}
_POCOCK_INFLATION = {2: 1.17, 3: 1.23, 4: 1.27, 5: 1.30}


def _check_looks(n_looks: int) -> None:
    if n_looks < 1:
        raise ValueError(f"n_looks must be >= 1, got {n_looks}")


def group_sequential_boundaries(
    n_looks: int,
    alpha: float = 0.05,
    spending_type: str = "obf",
) -> list[Boundary] | None:
    """Critical z-values at each interim look.

    Parameters
    ----------
    n_looks : int
        Number of analyses including the final one.
    alpha : float
        Overall two-sided significance level.
    spending_type : str
        ``'obf'`` (O'Brien-Fleming type spending,
        ``2(1 - Phi(z_{1-a/2} / sqrt(t)))``) or ``'pocock'`` (constant
        boundary at ``z_{1 - a/(2K)}``). Any other value returns ``None``.

    Returns
    -------
    list of Boundary or None
    """
    if spending_type not in _SPENDING_TYPES:
        logger.warning("unsupported spending type %r; expected one of %s",
                       spending_type, _SPENDING_TYPES)
        return None
    _check_looks(n_looks)
    if not (0.0 < alpha < 1.0):
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")

    boundaries = []
    if spending_type == "obf":
        z_final = normal_quantile(1.0 - alpha / 2.0)
        for k in range(1, n_looks + 1):
            t = k / n_looks
            spent = 2.0 * (1.0 - normal_cdf(z_final / math.sqrt(t)))
            boundaries.append(Boundary(
                look=k, fraction=t, z=normal_quantile(1.0 - spent / 2.0), nominal_alpha=spent,
            ))
    else:
        zp = normal_quantile(1.0 - alpha / (2.0 * n_looks))
        nominal = 2.0 * (1.0 - normal_cdf(zp))
        for k in range(1, n_looks + 1):
            boundaries.append(Boundary(look=k, fraction=k / n_looks, z=zp, nominal_alpha=nominal))
    return boundaries


def sample_size_group_sequential(
    n_fixed: float,
    n_looks: int,
    spending_type: str = "obf",
) -> GroupSequentialResult | None:
    """Inflate a fixed-design n for ``n_looks`` analyses.

    O'Brien-Fleming factors: 1.008, 1.015, 1.020, 1.025 for 2-5 looks,
    otherwise ``1 + 0.005 K``. Pocock factors: 1.17, 1.23, 1.27, 1.30,
    otherwise ``1 + 0.06 ln K + 0.05``.
    """
    if spending_type not in _SPENDING_TYPES:
        logger.warning("unsupported spending type %r; expected one of %s",
                       spending_type, _SPENDING_TYPES)
        return None
    _check_looks(n_looks)

    if spending_type == "obf":
        inflation = _OBF_INFLATION.get(n_looks, 1.0 + 0.005 * n_looks)
    else:
        inflation = _POCOCK_INFLATION.get(n_looks, 1.0 + 0.06 * math.log(n_looks) + 0.05)

    n_adjusted = math.ceil(n_fixed * inflation)
    return GroupSequentialResult(
        n_fixed=n_fixed,
        n_adjusted=n_adjusted,
        inflation_factor=inflation,
        n_looks=n_looks,
        spending_type=spending_type,
        max_n_per_look=math.ceil(n_adjusted / n_looks),
    )
