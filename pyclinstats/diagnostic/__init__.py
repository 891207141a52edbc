"""
Diagnostic accuracy of binary and continuous tests.

Sensitivity, specificity, predictive values and likelihood ratios with
Wilson CIs, cutoff classification of a continuous marker, the Fagan
nomogram, and trapezoidal AUC with a Hanley-McNeil standard error.

Validates against: R packages epiR, pROC.
"""

from pyclinstats.diagnostic._common import (
    AUCResult,
    ClassificationCounts,
    DiagnosticAccuracyResult,
    FaganResult,
)
from pyclinstats.diagnostic._accuracy import diagnostic_accuracy, fagan_nomogram
from pyclinstats.diagnostic._cutoff import classify_at_cutoff
from pyclinstats.diagnostic._roc import auc_trapezoidal

__all__ = [
    "AUCResult",
    "ClassificationCounts",
    "DiagnosticAccuracyResult",
    "FaganResult",
    "diagnostic_accuracy",
    "classify_at_cutoff",
    "fagan_nomogram",
    "auc_trapezoidal",
]
