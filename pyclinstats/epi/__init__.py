"""
Epidemiologic measures for cohort, case-control and trial data.

2x2 table summaries (RR, OR, RD, NNT, attributable fractions), the fragility
index, additive and multiplicative interaction, incidence rates, rate
ratios, SMRs, direct standardization, NNT extrapolation, and effect-size
conversions.

Validates against: R packages epiR, epitools, effectsize.
"""

from pyclinstats.epi._common import (
    NNTEstimate,
    TwoByTwoResult,
    FragilityResult,
    InteractionResult,
    RateResult,
    RateRatioResult,
    SMRResult,
    StandardizedRate,
    PEERResult,
    NNTTimepoint,
)
from pyclinstats.epi._two_by_two import two_by_two, fragility_index
from pyclinstats.epi._interaction import additive_interaction
from pyclinstats.epi._rates import (
    incidence_rate,
    rate_ratio,
    smr,
    direct_standardization,
)
from pyclinstats.epi._conversions import (
    LOGISTIC_SCALE,
    or_to_rr,
    rr_to_or,
    or_to_d,
    d_to_or,
    d_to_hedges_g,
    r_to_d,
    d_to_r,
)
from pyclinstats.epi._nnt import peer_adjusted_nnt, nnt_over_time

__all__ = [
    "NNTEstimate",
    "TwoByTwoResult",
    "FragilityResult",
    "InteractionResult",
    "RateResult",
    "RateRatioResult",
    "SMRResult",
    "StandardizedRate",
    "PEERResult",
    "NNTTimepoint",
    "LOGISTIC_SCALE",
    "two_by_two",
    "fragility_index",
    "additive_interaction",
    "incidence_rate",
    "rate_ratio",
    "smr",
    "direct_standardization",
    "or_to_rr",
    "rr_to_or",
    "or_to_d",
    "d_to_or",
    "d_to_hedges_g",
    "r_to_d",
    "d_to_r",
    "peer_adjusted_nnt",
    "nnt_over_time",
]
