"""Sample size for crossover designs (within-subject comparison of means).

2x2 crossover: ``N = 2 (z_a + z_b)^2 sd_w^2 / delta^2``. Higher-order
designs with more periods are scaled by ``2 / periods``.

Validates against: R TrialSize::TwoSampleCrossOver.Equality()
"""

from __future__ import annotations

import math

from pyclinstats.power._common import (
    CrossoverResult,
    _check_design_args,
    _z_alpha,
    _z_beta,
)


def sample_size_crossover(
    delta: float,
    sd_within: float,
    alpha: float = 0.05,
    power: float = 0.80,
    n_periods: int = 2,
) -> CrossoverResult:
    """Total subjects for a crossover trial.

    Parameters
    ----------
    delta : float
        Treatment difference to detect (non-zero).
    sd_within : float
        Within-subject standard deviation (> 0).
    alpha, power : float
        Design parameters (defaults 0.05, 0.80).
    n_periods : int
        Number of periods (default 2).

    Returns
    -------
    CrossoverResult
    """
    _check_design_args(alpha=alpha, power=power)
    if sd_within <= 0:
        raise ValueError(f"sd_within must be > 0, got {sd_within}")
    if delta == 0:
        raise ValueError("Cannot solve for n when delta = 0 (no effect)")
    if n_periods < 2:
        raise ValueError(f"n_periods must be >= 2, got {n_periods}")

    za = _z_alpha(alpha)
    zb = _z_beta(power)
    n = 2.0 * (za + zb) ** 2 * sd_within ** 2 / (delta * delta)
    if n_periods > 2:
        n *= 2.0 / n_periods
    n = math.ceil(n)
    return CrossoverResult(n=n, total=n, n_periods=n_periods, sd_within=sd_within)
