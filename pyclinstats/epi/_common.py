"""Result types for epidemiologic measures."""

from __future__ import annotations

from dataclasses import dataclass

from pyclinstats.inference._common import (
    ChiSquaredResult,
    CountTable,
    DifferenceInterval,
    Estimate,
    FisherResult,
    Interval,
)


@dataclass(frozen=True)
class NNTEstimate:
    """Number needed to treat (or harm).

    ``value`` is positive for benefit (NNT) and negative for harm (NNH);
    ``inf`` when the risk difference is 0. The CI bounds are unsigned
    reciprocals of the risk-difference CI bounds.
    """

    value: float
    ci: Interval
    is_harm: bool


@dataclass(frozen=True)
class TwoByTwoResult:
    """Epidemiologic summary of a 2x2 exposure-by-outcome table.

    Ratio estimates carry the SE of their log; CIs are log-scale Wald.
    """

    p1: float  # risk among the exposed, a / (a + b)
    p2: float  # risk among the unexposed, c / (c + d)
    risk_ratio: Estimate
    odds_ratio: Estimate
    risk_difference: Estimate  # Wald CI
    rd_newcombe: DifferenceInterval
    nnt: NNTEstimate
    chi2: ChiSquaredResult
    chi2_yates: ChiSquaredResult
    fisher: FisherResult
    af_exposed: float  # (RR - 1) / RR
    paf: float  # population attributable fraction
    table: CountTable

    def summary(self) -> str:
        """Human-readable summary."""

        def _row(label: str, est: Estimate) -> str:
            return f"{label:<16}: {est.value:.4f}  [{est.ci.lower:.4f}, {est.ci.upper:.4f}]"

        label = "NNH" if self.nnt.is_harm else "NNT"
        lines = [
            "2x2 Table Analysis",
            "=" * 40,
            f"Risk (exposed)  : {self.p1:.4f}",
            f"Risk (unexposed): {self.p2:.4f}",
            _row("Risk ratio", self.risk_ratio),
            _row("Odds ratio", self.odds_ratio),
            _row("Risk difference", self.risk_difference),
            f"{label:<16}: {abs(self.nnt.value):.1f}",
            f"Chi-squared     : {self.chi2.chi2:.4f}, p = {self.chi2.p_value:.4g}",
            f"Fisher exact    : p = {self.fisher.p_value:.4g}",
            f"AF (exposed)    : {self.af_exposed:.4f}",
            f"PAF             : {self.paf:.4f}",
        ]
        return "\n".join(lines)


@dataclass(frozen=True)
class FragilityResult:
    """Fragility index of a significant 2x2 comparison."""

    index: int
    original_p: float
    modified_p: float
    modified_table: CountTable
    flipped: bool  # modified_p reached the significance level


@dataclass(frozen=True)
class InteractionResult:
    """Additive and multiplicative interaction from three relative risks."""

    reri: float  # relative excess risk due to interaction
    ap: float  # attributable proportion
    s: float  # synergy index
    expected_multiplicative: float  # RR10 * RR01
    multiplicative_ratio: float  # RR11 / (RR10 * RR01)


@dataclass(frozen=True)
class RateResult:
    """Incidence rate with exact Poisson CI."""

    rate: float
    ci: Interval
    events: float
    person_time: float


@dataclass(frozen=True)
class RateRatioResult:
    """Ratio of two incidence rates with log-scale CI."""

    ratio: float
    ci: Interval
    se_ln: float
    rate1: float
    rate2: float


@dataclass(frozen=True)
class SMRResult:
    """Standardized mortality (or morbidity) ratio with exact Poisson CI."""

    smr: float
    ci: Interval
    observed: float
    expected: float


@dataclass(frozen=True)
class StandardizedRate:
    """Directly standardized rate."""

    rate: float
    se: float
    ci: Interval


@dataclass(frozen=True)
class PEERResult:
    """NNT applied to a patient's expected event rate."""

    arr: float
    nnt: float  # ceiling; inf when arr == 0
    label: str  # 'NNT' or 'NNH'


@dataclass(frozen=True)
class NNTTimepoint:
    """Risks and signed NNT at one follow-up time."""

    time: float
    risk_control: float
    risk_treatment: float
    arr: float
    nnt: float  # > 0 benefit, < 0 harm, inf when arr == 0
