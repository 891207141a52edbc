"""Sensitivity, specificity, predictive values, and likelihood ratios.

Computes the diagnostic accuracy metrics of a binary test from its 2x2
counts, with Wilson score CIs for the four proportions, and the Fagan
nomogram conversion of pre-test to post-test probability.

Validates against: R ``epiR::epi.tests()``.
"""

from __future__ import annotations

from pyclinstats import _numeric
from pyclinstats.diagnostic._common import DiagnosticAccuracyResult, FaganResult
from pyclinstats.inference._common import Estimate
from pyclinstats.inference._intervals import wilson_ci


def _proportion(k: int, n: int, z: float | None) -> Estimate:
    p = _numeric.ratio(k, n)
    return Estimate(p, wilson_ci(p, n, z))


def diagnostic_accuracy(
    tp: int,
    fp: int,
    fn: int,
    tn: int,
    *,
    z: float | None = None,
) -> DiagnosticAccuracyResult:
    """Compute diagnostic accuracy metrics from a 2x2 table.

    Parameters
    ----------
    tp, fp, fn, tn : int
        True positives, false positives, false negatives, true negatives.
    z : float or None
        Critical value for the Wilson CIs (default: two-sided 95%).

    Returns
    -------
    DiagnosticAccuracyResult

    Notes
    -----
    No continuity correction is applied. A test with perfect specificity
    has ``lr_positive = inf``; a DOR with ``fp * fn = 0`` is ``inf``.

    Examples
    --------
    >>> res = diagnostic_accuracy(90, 20, 10, 80)
    >>> res.sensitivity.value, res.specificity.value
    (0.9, 0.8)
    """
    cells = (tp, fp, fn, tn)
    if min(cells) < 0:
        raise ValueError(f"counts must be non-negative, got {cells}")
    n = tp + fp + fn + tn

    sens = _proportion(tp, tp + fn, z)
    spec = _proportion(tn, tn + fp, z)

    return DiagnosticAccuracyResult(
        sensitivity=sens,
        specificity=spec,
        ppv=_proportion(tp, tp + fp, z),
        npv=_proportion(tn, tn + fn, z),
        lr_positive=_numeric.ratio(sens.value, 1.0 - spec.value),
        lr_negative=_numeric.ratio(1.0 - sens.value, spec.value),
        dor=_numeric.ratio(tp * tn, fp * fn),
        accuracy=_numeric.ratio(tp + tn, n),
        prevalence=_numeric.ratio(tp + fn, n),
        youden_j=sens.value + spec.value - 1.0,
    )


def fagan_nomogram(pre_test_prob: float, plr: float, nlr: float) -> FaganResult:
    """Post-test probabilities after a positive and a negative result.

    ``post_odds = pre_odds * LR`` and ``prob = odds / (1 + odds)``.
    """
    if not (0.0 <= pre_test_prob <= 1.0):
        raise ValueError(f"pre_test_prob must be in [0, 1], got {pre_test_prob}")
    pre_odds = _numeric.ratio(pre_test_prob, 1.0 - pre_test_prob)
    odds_pos = pre_odds * plr
    odds_neg = pre_odds * nlr
    return FaganResult(
        pre_test_prob=pre_test_prob,
        pre_test_odds=pre_odds,
        post_test_odds_positive=odds_pos,
        post_test_odds_negative=odds_neg,
        post_test_prob_positive=_numeric.ratio(odds_pos, 1.0 + odds_pos),
        post_test_prob_negative=_numeric.ratio(odds_neg, 1.0 + odds_neg),
    )
