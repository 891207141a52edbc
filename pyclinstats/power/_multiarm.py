"""Sample size for multi-arm trials comparing several arms with a control.

The two-arm per-group n is rescaled for a multiplicity-adjusted alpha.
"""

from __future__ import annotations

import logging
import math

from pyclinstats.power._common import (
    MultiArmResult,
    _check_design_args,
    _z_alpha,
    _z_beta,
)

logger = logging.getLogger(__name__)


def _adjusted_alpha(alpha: float, comparisons: int, correction: str) -> float:
    if correction == "bonferroni":
        return alpha / comparisons
    if correction == "dunnett":
        # Sidak bound, slightly less conservative than Bonferroni
        return 1.0 - (1.0 - alpha) ** (1.0 / comparisons)
    return alpha


def sample_size_multi_arm(
    n_per_group_two_arm: float,
    n_arms: int,
    correction: str = "bonferroni",
    alpha: float = 0.05,
    power: float = 0.80,
) -> MultiArmResult:
    """Per-arm n for ``n_arms - 1`` comparisons against a shared control.

    ``n = n_two_arm * ((z_adj + z_b) / (z_a + z_b))^2`` where ``z_adj`` is
    the two-sided critical value at the adjusted alpha.

    Parameters
    ----------
    n_per_group_two_arm : float
        Per-group n from a two-arm calculation at ``alpha`` and ``power``.
    n_arms : int
        Total number of arms including control (>= 2).
    correction : str
        ``'bonferroni'`` (``alpha / (arms - 1)``), ``'dunnett'``
        (Sidak approximation ``1 - (1 - alpha)^(1/(arms - 1))``) or
        ``'none'``. Other values leave alpha unadjusted.
    alpha, power : float
        Design parameters of the two-arm calculation.

    Returns
    -------
    MultiArmResult
    """
    _check_design_args(alpha=alpha, power=power)
    if n_arms < 2:
        raise ValueError(f"n_arms must be >= 2, got {n_arms}")
    if correction not in ("bonferroni", "dunnett", "none"):
        logger.warning("unknown correction %r; alpha left unadjusted", correction)

    adjusted = _adjusted_alpha(alpha, n_arms - 1, correction)
    zb = _z_beta(power)
    scale = ((_z_alpha(adjusted) + zb) / (_z_alpha(alpha) + zb)) ** 2
    n_per_arm = math.ceil(n_per_group_two_arm * scale)

    return MultiArmResult(
        n_per_arm=n_per_arm,
        total_n=n_per_arm * n_arms,
        adjusted_alpha=adjusted,
        correction=correction,
    )
