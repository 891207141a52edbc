"""Precision-based sample size for diagnostic accuracy studies.

Sizes the study so that the CI for sensitivity (or specificity) has a
target total width: ``n = 4 z^2 p (1 - p) / w^2`` (Buderer, 1996).
"""

from __future__ import annotations

import math

from pyclinstats.power._common import DiagnosticSampleSize, _check_proportion, _z_alpha


def sample_size_diagnostic_accuracy(
    expected_prop: float,
    ci_width: float,
    alpha: float = 0.05,
    prevalence: float | None = None,
) -> DiagnosticSampleSize:
    """Subjects needed to estimate sensitivity or specificity to a CI width.

    Parameters
    ----------
    expected_prop : float
        Anticipated sensitivity or specificity.
    ci_width : float
        Total width of the two-sided CI.
    alpha : float
        Two-sided level of the CI (default 0.05).
    prevalence : float or None
        Disease prevalence. When given, the totals needed so that
        ``n_metric`` subjects are diseased (``for_sensitivity``) or
        non-diseased (``for_specificity``) are also returned.

    Returns
    -------
    DiagnosticSampleSize

    Examples
    --------
    >>> sample_size_diagnostic_accuracy(0.9, 0.1).n_metric
    139
    """
    _check_proportion("expected_prop", expected_prop)
    if ci_width <= 0:
        raise ValueError(f"ci_width must be > 0, got {ci_width}")

    z = _z_alpha(alpha)
    n_metric = math.ceil(4.0 * z * z * expected_prop * (1.0 - expected_prop) / (ci_width * ci_width))

    for_sens = for_spec = None
    if prevalence is not None and prevalence > 0:
        for_sens = math.ceil(n_metric / prevalence)
        for_spec = math.ceil(n_metric / (1.0 - prevalence)) if prevalence < 1 else None

    return DiagnosticSampleSize(
        n_metric=n_metric,
        for_sensitivity=for_sens,
        for_specificity=for_spec,
        expected_prop=expected_prop,
        ci_width=ci_width,
    )
