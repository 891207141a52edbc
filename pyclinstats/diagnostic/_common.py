"""Shared result types for diagnostic accuracy analysis."""

from __future__ import annotations

from dataclasses import dataclass

from pyclinstats.inference._common import Estimate, Interval


@dataclass(frozen=True)
class ClassificationCounts:
    """Cross-classification of a test against the reference standard."""

    tp: int
    fp: int
    fn: int
    tn: int
    cutoff: float
    direction: str  # '<' or '>'


@dataclass(frozen=True)
class DiagnosticAccuracyResult:
    """Diagnostic accuracy of a binary test from its 2x2 counts.

    ``sensitivity``, ``specificity``, ``ppv`` and ``npv`` carry Wilson
    score CIs. Ratios with a zero denominator are ``inf`` (or ``nan`` for
    ``0/0``) rather than errors.
    """

    sensitivity: Estimate
    specificity: Estimate
    ppv: Estimate
    npv: Estimate
    lr_positive: float
    lr_negative: float
    dor: float  # diagnostic odds ratio
    accuracy: float
    prevalence: float  # sample prevalence (tp + fn) / n
    youden_j: float

    def summary(self) -> str:
        """Human-readable summary."""

        def _row(label: str, est: Estimate) -> str:
            return (
                f"{label:<14}: {est.value:.4f}  "
                f"(95% CI: {est.ci.lower:.4f}-{est.ci.upper:.4f})"
            )

        lines = [
            "Diagnostic Accuracy",
            "=" * 40,
            _row("Sensitivity", self.sensitivity),
            _row("Specificity", self.specificity),
            _row("PPV", self.ppv),
            _row("NPV", self.npv),
            f"LR+           : {self.lr_positive:.4f}",
            f"LR-           : {self.lr_negative:.4f}",
            f"DOR           : {self.dor:.4f}",
            f"Accuracy      : {self.accuracy:.4f}",
            f"Prevalence    : {self.prevalence:.4f}",
            f"Youden's J    : {self.youden_j:.4f}",
        ]
        return "\n".join(lines)


@dataclass(frozen=True)
class FaganResult:
    """Pre- to post-test probability via likelihood ratios (Fagan nomogram)."""

    pre_test_prob: float
    pre_test_odds: float
    post_test_odds_positive: float
    post_test_odds_negative: float
    post_test_prob_positive: float
    post_test_prob_negative: float


@dataclass(frozen=True)
class AUCResult:
    """Trapezoidal area under an ROC curve from operating points."""

    auc: float
    se: float  # Hanley-McNeil
    ci: Interval  # clipped to [0, 1]
