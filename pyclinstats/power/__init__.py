"""
Sample size and power calculations for clinical trial planning.

Every clinical trial starts with "how many subjects do we need?" This module
provides closed-form sizing formulas for the common trial designs, the
reverse-direction power functions, and minimum-detectable-effect solvers.

Validates against: R packages pwr, TrialSize, gsDesign, clusterPower.
"""

from pyclinstats.power._common import (
    Boundary,
    ClusterDesign,
    CrossoverResult,
    DiagnosticSampleSize,
    EventsResult,
    GroupSequentialResult,
    MeanMDE,
    MultiArmResult,
    OrdinalShiftResult,
    ProportionMDE,
    SampleSizeResult,
    SteppedWedgeDesign,
    SurvivalMDE,
)
from pyclinstats.power._proportions import (
    mde_proportions,
    power_two_proportions,
    sample_size_two_proportions,
)
from pyclinstats.power._means import mde_means, power_two_means, sample_size_two_means
from pyclinstats.power._survival import (
    mde_survival,
    power_survival,
    sample_size_freedman,
    sample_size_schoenfeld,
)
from pyclinstats.power._noninferiority import (
    sample_size_equivalence,
    sample_size_noninferiority,
)
from pyclinstats.power._cluster import sample_size_cluster, sample_size_stepped_wedge
from pyclinstats.power._ordinal import sample_size_ordinal_shift
from pyclinstats.power._multiarm import sample_size_multi_arm
from pyclinstats.power._sequential import (
    group_sequential_boundaries,
    sample_size_group_sequential,
)
from pyclinstats.power._crossover import sample_size_crossover
from pyclinstats.power._diagnostic import sample_size_diagnostic_accuracy

__all__ = [
    "SampleSizeResult",
    "EventsResult",
    "ClusterDesign",
    "SteppedWedgeDesign",
    "OrdinalShiftResult",
    "MultiArmResult",
    "Boundary",
    "GroupSequentialResult",
    "CrossoverResult",
    "DiagnosticSampleSize",
    "ProportionMDE",
    "MeanMDE",
    "SurvivalMDE",
    "sample_size_two_proportions",
    "sample_size_two_means",
    "sample_size_schoenfeld",
    "sample_size_freedman",
    "sample_size_noninferiority",
    "sample_size_equivalence",
    "sample_size_cluster",
    "sample_size_stepped_wedge",
    "sample_size_ordinal_shift",
    "sample_size_multi_arm",
    "group_sequential_boundaries",
    "sample_size_group_sequential",
    "sample_size_crossover",
    "sample_size_diagnostic_accuracy",
    "power_two_proportions",
    "power_two_means",
    "power_survival",
    "mde_proportions",
    "mde_means",
    "mde_survival",
]
