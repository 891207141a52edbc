"""Sample size, power and minimum detectable effect for two means.

Normal-approximation formulas with possibly unequal SDs and allocation.

Validates against: R ``pwr::pwr.t2n.test()`` (large-sample limit)
"""

from __future__ import annotations

import math

from pyclinstats.distributions._continuous import normal_cdf
from pyclinstats.power._common import (
    MeanMDE,
    SampleSizeResult,
    _arms,
    _check_design_args,
    _z_alpha,
    _z_beta,
)


def sample_size_two_means(
    delta: float,
    sd1: float,
    sd2: float | None = None,
    alpha: float = 0.05,
    power: float = 0.80,
    ratio: float = 1.0,
) -> SampleSizeResult:
    """Sample size to detect a difference ``delta`` between two means.

    ``n1 = (z_a + z_b)^2 (sd1^2 + sd2^2 / ratio) / delta^2``,
    ``n2 = ceil(n1 * ratio)``.

    Parameters
    ----------
    delta : float
        Difference in means to detect (non-zero).
    sd1 : float
        SD in arm 1.
    sd2 : float or None
        SD in arm 2 (default: ``sd1``).
    alpha, power, ratio : float
        Design parameters (defaults 0.05, 0.80, 1).

    Returns
    -------
    SampleSizeResult

    Examples
    --------
    >>> sample_size_two_means(delta=5, sd1=10).n1
    63
    """
    _check_design_args(alpha=alpha, power=power, ratio=ratio)
    sd2 = sd1 if sd2 is None else sd2
    if sd1 <= 0 or sd2 <= 0:
        raise ValueError(f"sd1 and sd2 must be > 0, got {sd1} and {sd2}")
    if delta == 0:
        raise ValueError("Cannot solve for n when delta = 0 (no effect)")

    za = _z_alpha(alpha)
    zb = _z_beta(power)
    raw = (za + zb) ** 2 * (sd1 ** 2 + sd2 ** 2 / ratio) / (delta * delta)
    n1, n2, total = _arms(raw, ratio)

    return SampleSizeResult(
        n1=n1,
        n2=n2,
        total=total,
        alpha=alpha,
        power=power,
        method="Two-sample comparison of means sample size",
        effect_size=delta / sd1,
        note=f"delta = {delta}, sd1 = {sd1}, sd2 = {sd2}, ratio = {ratio}",
    )


def power_two_means(
    delta: float,
    sd: float,
    n1: float,
    alpha: float = 0.05,
    ratio: float = 1.0,
) -> float:
    """Power to detect ``delta`` with common SD ``sd``; ``n2 = ceil(n1 * ratio)``."""
    n2 = math.ceil(n1 * ratio)
    za = _z_alpha(alpha)
    zb = abs(delta) / (sd * math.sqrt(1.0 / n1 + 1.0 / n2)) - za
    return normal_cdf(zb)


def mde_means(
    sd: float,
    n_per_group: float,
    alpha: float = 0.05,
    power: float = 0.80,
) -> MeanMDE:
    """Minimum detectable mean difference, ``(z_a + z_b) sd sqrt(2/n)``."""
    _check_design_args(alpha=alpha, power=power)
    delta = (_z_alpha(alpha) + _z_beta(power)) * sd * math.sqrt(2.0 / n_per_group)
    return MeanMDE(delta=delta, cohens_d=delta / sd)
