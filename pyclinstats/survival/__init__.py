"""
Survival analysis: Kaplan-Meier curves, restricted mean survival time and
the two-group log-rank test.

Validates against: R packages survival, survRM2.
"""

from pyclinstats.survival._common import KaplanMeierResult, RMSTResult, LogRankResult
from pyclinstats.survival._kaplan_meier import kaplan_meier, restricted_mean_survival_time
from pyclinstats.survival._logrank import log_rank_test

__all__ = [
    "KaplanMeierResult",
    "RMSTResult",
    "LogRankResult",
    "kaplan_meier",
    "restricted_mean_survival_time",
    "log_rank_test",
]
