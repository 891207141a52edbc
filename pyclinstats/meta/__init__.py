"""
Meta-analysis of study-level effect estimates.

Fixed-effect and DerSimonian-Laird random-effects pooling (optionally with
the HKSJ adjustment), pooling of raw 2x2 tables, small-study-effect tests,
trim-and-fill, and leave-one-out, cumulative and subgroup analyses.

Validates against: R packages meta, metafor.
"""

from pyclinstats.meta._common import (
    FixedEffectResult,
    RandomEffectsResult,
    TableMetaResult,
    EggerResult,
    BeggResult,
    LeaveOneOutResult,
    CumulativeResult,
    TrimAndFillResult,
    SubgroupResult,
)
from pyclinstats.meta._pooling import (
    meta_analysis_fixed_effect,
    meta_analysis_random_effects,
    meta_analysis_tables,
)
from pyclinstats.meta._bias import egger_test, begg_test, trim_and_fill
from pyclinstats.meta._sensitivity import (
    leave_one_out,
    cumulative_meta_analysis,
    subgroup_analysis,
)

__all__ = [
    "FixedEffectResult",
    "RandomEffectsResult",
    "TableMetaResult",
    "EggerResult",
    "BeggResult",
    "LeaveOneOutResult",
    "CumulativeResult",
    "TrimAndFillResult",
    "SubgroupResult",
    "meta_analysis_fixed_effect",
    "meta_analysis_random_effects",
    "meta_analysis_tables",
    "egger_test",
    "begg_test",
    "trim_and_fill",
    "leave_one_out",
    "cumulative_meta_analysis",
    "subgroup_analysis",
]
