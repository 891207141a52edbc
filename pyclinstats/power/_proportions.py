"""Sample size, power and minimum detectable effect for two proportions.

Three sizing formulas: the normal approximation with pooled variance under
H0, the Fleiss continuity-corrected version, and the arcsine (Cohen's h)
transform.

References
----------
Fleiss, Levin & Paik (2003). *Statistical Methods for Rates and
Proportions*, 3rd ed., chapter 4.

Validates against: R ``pwr::pwr.2p.test()``, ``stats::power.prop.test()``
"""

from __future__ import annotations

import logging
import math

from pyclinstats.distributions._continuous import normal_cdf
from pyclinstats.power._common import (
    ProportionMDE,
    SampleSizeResult,
    _arms,
    _check_design_args,
    _check_proportion,
    _solve_parameter,
    _z_alpha,
    _z_beta,
)

logger = logging.getLogger(__name__)

_VALID_METHODS = ("normal", "fleiss", "arcsine")


# ---------------------------------------------------------------------------
# Internal per-method n1
# ---------------------------------------------------------------------------

def _n1_normal(p1: float, p2: float, za: float, zb: float, ratio: float) -> float:
    p_bar = (p1 + ratio * p2) / (1.0 + ratio)
    diff = abs(p1 - p2)
    return (
        za * math.sqrt((1.0 + 1.0 / ratio) * p_bar * (1.0 - p_bar))
        + zb * math.sqrt(p1 * (1.0 - p1) + p2 * (1.0 - p2) / ratio)
    ) ** 2 / (diff * diff)


def _n1_fleiss(p1: float, p2: float, za: float, zb: float, ratio: float) -> float:
    """Fleiss continuity correction applied to the normal-approximation n."""
    n_prime = _n1_normal(p1, p2, za, zb, ratio)
    diff = abs(p1 - p2)
    return n_prime / 4.0 * (1.0 + math.sqrt(1.0 + 2.0 * (1.0 + 1.0 / ratio) / (n_prime * diff))) ** 2


def _n1_arcsine(p1: float, p2: float, za: float, zb: float, ratio: float) -> float:
    h = 2.0 * math.asin(math.sqrt(p1)) - 2.0 * math.asin(math.sqrt(p2))
    return (za + zb) ** 2 * (1.0 + 1.0 / ratio) / (2.0 * h * h)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sample_size_two_proportions(
    p1: float,
    p2: float,
    alpha: float = 0.05,
    power: float = 0.80,
    ratio: float = 1.0,
    method: str = "normal",
) -> SampleSizeResult | None:
    """Sample size to compare two independent proportions (two-sided).

    Parameters
    ----------
    p1, p2 : float
        Event proportions in arm 1 and arm 2.
    alpha : float
        Two-sided significance level (default 0.05).
    power : float
        Desired power (default 0.80).
    ratio : float
        Allocation ratio ``n2 / n1`` (default 1).
    method : str
        ``'normal'``, ``'fleiss'`` or ``'arcsine'``. Any other selector
        returns ``None``.

    Returns
    -------
    SampleSizeResult or None

    Examples
    --------
    >>> sample_size_two_proportions(0.30, 0.15).n1
    121

    Validates against: R ``stats::power.prop.test()`` (normal method)
    """
    if method not in _VALID_METHODS:
        logger.warning("unsupported method %r; expected one of %s", method, _VALID_METHODS)
        return None
    _check_design_args(alpha=alpha, power=power, ratio=ratio)
    _check_proportion("p1", p1)
    _check_proportion("p2", p2)
    if p1 == p2:
        raise ValueError("Cannot solve for n when p1 == p2 (no effect)")

    za = _z_alpha(alpha)
    zb = _z_beta(power)
    n1_funcs = {
        "normal": _n1_normal,
        "fleiss": _n1_fleiss,
        "arcsine": _n1_arcsine,
    }
    n1, n2, total = _arms(n1_funcs[method](p1, p2, za, zb, ratio), ratio)

    method_labels = {
        "normal": "normal approximation",
        "fleiss": "Fleiss continuity correction",
        "arcsine": "arcsine transformation",
    }
    return SampleSizeResult(
        n1=n1,
        n2=n2,
        total=total,
        alpha=alpha,
        power=power,
        method=f"Two-proportion sample size ({method_labels[method]})",
        effect_size=p1 - p2,
        note=f"p1 = {p1}, p2 = {p2}, ratio = {ratio}",
    )


def power_two_proportions(
    p1: float,
    p2: float,
    n1: float,
    alpha: float = 0.05,
    ratio: float = 1.0,
) -> float:
    """Power of the two-sided two-proportion z-test for given group sizes.

    ``n2 = ceil(n1 * ratio)``. Only the tail in the direction of the true
    difference is counted.
    """
    n2 = math.ceil(n1 * ratio)
    za = _z_alpha(alpha)
    diff = abs(p1 - p2)
    p_bar = (p1 * n1 + p2 * n2) / (n1 + n2)

    se0 = math.sqrt(p_bar * (1.0 - p_bar) * (1.0 / n1 + 1.0 / n2))
    se1 = math.sqrt(p1 * (1.0 - p1) / n1 + p2 * (1.0 - p2) / n2)
    return normal_cdf((diff - za * se0) / se1)


def mde_proportions(
    p1: float,
    n_per_group: float,
    alpha: float = 0.05,
    power: float = 0.80,
) -> ProportionMDE:
    """Minimum detectable second-arm proportion for a fixed per-group n.

    Searches below ``p1`` first (a reduction in risk); if the target power
    is unreachable there, searches above ``p1``.

    Raises
    ------
    ValueError
        If the target power cannot be reached on either side.
    """
    _check_design_args(alpha=alpha, power=power)
    _check_proportion("p1", p1)

    def _power(p2: float) -> float:
        return power_two_proportions(p1, p2, n_per_group, alpha)

    edge = 1e-6
    if p1 - edge > edge and _power(edge) >= power:
        p2 = _solve_parameter(_power, power, bracket=(edge, p1 - edge))
    else:
        p2 = _solve_parameter(_power, power, bracket=(p1 + edge, 1.0 - edge))

    return ProportionMDE(p2=p2, arr=abs(p1 - p2), rr=p2 / p1)
