"""Sample size for non-inferiority and equivalence trials (proportions).

One-sided z formulations with a pre-specified margin. ``alpha`` is the
one-sided level and defaults to 0.025.

Validates against: R TrialSize::TwoSampleProportion.NIS(),
TrialSize::TwoSampleProportion.Equivalence()
"""

from __future__ import annotations

from pyclinstats.power._common import (
    SampleSizeResult,
    _arms,
    _check_design_args,
    _check_proportion,
    _z_alpha,
    _z_beta,
)


def sample_size_noninferiority(
    p1: float,
    p2: float,
    margin: float,
    alpha: float = 0.025,
    power: float = 0.80,
    ratio: float = 1.0,
) -> SampleSizeResult:
    """Sample size for a non-inferiority comparison of two proportions.

    ``n1 = (z_a + z_b)^2 (p1(1-p1) + p2(1-p2)/r) / (p1 - p2 + margin)^2``
    with a one-sided ``z_a``.

    Parameters
    ----------
    p1 : float
        Expected proportion on the new treatment.
    p2 : float
        Expected proportion on the reference treatment.
    margin : float
        Non-inferiority margin (> 0, on the risk-difference scale).
    alpha : float
        One-sided significance level (default 0.025).
    power, ratio : float
        Design parameters (defaults 0.80, 1).

    Returns
    -------
    SampleSizeResult
    """
    _check_design_args(alpha=alpha, power=power, ratio=ratio)
    _check_proportion("p1", p1)
    _check_proportion("p2", p2)
    if margin <= 0:
        raise ValueError(f"margin must be > 0, got {margin}")
    delta = p1 - p2 + margin
    if delta == 0:
        raise ValueError("Cannot solve for n when p1 - p2 + margin == 0")

    za = _z_alpha(alpha, sides=1)
    zb = _z_beta(power)
    raw = (za + zb) ** 2 * (p1 * (1.0 - p1) + p2 * (1.0 - p2) / ratio) / (delta * delta)
    n1, n2, total = _arms(raw, ratio)

    return SampleSizeResult(
        n1=n1,
        n2=n2,
        total=total,
        alpha=alpha,
        power=power,
        method="Non-inferiority of two proportions sample size",
        effect_size=p1 - p2,
        note=f"margin = {margin}, one-sided alpha",
    )


def sample_size_equivalence(
    p1: float,
    margin: float,
    alpha: float = 0.025,
    power: float = 0.80,
) -> SampleSizeResult:
    """Per-arm n for equivalence when both arms share the proportion ``p1``.

    ``n = (z_a + z_b)^2 * 2 p1 (1 - p1) / margin^2`` with a one-sided ``z_a``.
    """
    _check_design_args(alpha=alpha, power=power)
    _check_proportion("p1", p1)
    if margin <= 0:
        raise ValueError(f"margin must be > 0, got {margin}")

    za = _z_alpha(alpha, sides=1)
    zb = _z_beta(power)
    raw = (za + zb) ** 2 * 2.0 * p1 * (1.0 - p1) / (margin * margin)
    n1, n2, total = _arms(raw, 1.0)

    return SampleSizeResult(
        n1=n1,
        n2=n2,
        total=total,
        alpha=alpha,
        power=power,
        method="Equivalence of two proportions sample size",
        effect_size=0.0,
        note=f"margin = {margin}, one-sided alpha",
    )
