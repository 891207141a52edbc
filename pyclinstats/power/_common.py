"""Shared result types and helpers for sample size and power calculations."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from scipy.optimize import brentq

from pyclinstats.distributions._continuous import normal_quantile


@dataclass(frozen=True)
class SampleSizeResult:
    """Per-arm and total sample size for a two-group design.

    ``n1`` is the reference (control) arm and ``n2 = ceil(n1 * ratio)``.
    All counts are ceilinged.
    """

    n1: int
    n2: int
    total: int
    alpha: float
    power: float
    method: str
    effect_size: float | None = None
    note: str = ""

    def summary(self) -> str:
        """Human-readable summary, similar to R's print.power.htest."""
        lines = [self.method, ""]
        lines.append(f"             n1 = {self.n1}")
        lines.append(f"             n2 = {self.n2}")
        lines.append(f"          total = {self.total}")
        if self.effect_size is not None:
            lines.append(f"    effect size = {self.effect_size:.6f}")
        lines.append(f"          alpha = {self.alpha}")
        lines.append(f"          power = {self.power}")
        if self.note:
            lines.append("")
            lines.append(f"NOTE: {self.note}")
        return "\n".join(lines)


@dataclass(frozen=True)
class EventsResult:
    """Required number of events for a time-to-event comparison."""

    events: int
    total_n: int | None  # events / p_event, when p_event is supplied
    hr: float
    ln_hr: float
    alpha: float
    power: float
    method: str

    def summary(self) -> str:
        lines = [self.method, ""]
        lines.append(f"         events = {self.events}")
        if self.total_n is not None:
            lines.append(f"        total n = {self.total_n}")
        lines.append(f"             HR = {self.hr}")
        lines.append(f"          alpha = {self.alpha}")
        lines.append(f"          power = {self.power}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Shared validation
# ---------------------------------------------------------------------------

def _check_design_args(
    *,
    alpha: float,
    power: float | None = None,
    ratio: float | None = None,
) -> None:
    """Validate design inputs.

    Rules
    -----
    - *alpha* must be in (0, 1).
    - If provided, *power* must be in (0, 1).
    - If provided, *ratio* must be > 0.

    Raises
    ------
    ValueError
        On any validation failure.
    """
    if not (0.0 < alpha < 1.0):
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")
    if power is not None and not (0.0 < power < 1.0):
        raise ValueError(f"power must be in (0, 1), got {power}")
    if ratio is not None and not ratio > 0.0:
        raise ValueError(f"ratio must be > 0, got {ratio}")


def _check_proportion(name: str, p: float) -> None:
    if not (0.0 < p < 1.0):
        raise ValueError(f"{name} must be in (0, 1), got {p}")


def _z_alpha(alpha: float, sides: int = 2) -> float:
    """Critical z-value for the given alpha and sidedness."""
    return normal_quantile(1.0 - alpha / sides)


def _z_beta(power: float) -> float:
    return normal_quantile(power)


def _arms(n1: float, ratio: float) -> tuple[int, int, int]:
    """Ceiling per-arm counts ``(n1, n2, total)`` for allocation ``n2/n1 = ratio``."""
    if not math.isfinite(n1):
        raise ValueError("Cannot compute a finite sample size for these inputs")
    a = math.ceil(n1)
    b = math.ceil(n1 * ratio)
    return a, b, a + b


# ---------------------------------------------------------------------------
# Minimum-detectable-effect search
# ---------------------------------------------------------------------------

def _solve_parameter(
    power_of: Callable[[float], float],
    target: float,
    bracket: tuple[float, float],
    *,
    xtol: float = 1e-10,
) -> float:
    """Find the effect parameter at which ``power_of`` reaches ``target``.

    Brent's method on ``power_of(x) - target`` inside ``bracket``; the
    power curve is monotone on each side of the null value, so the bracket
    must lie entirely on one side of it.

    Raises
    ------
    ValueError
        If the target power is not attained anywhere inside ``bracket``.
    """
    lo, hi = bracket
    pw_lo, pw_hi = power_of(lo), power_of(hi)
    if (pw_lo - target) * (pw_hi - target) > 0:
        raise ValueError(
            f"Cannot solve: power {target:.4f} is not attainable for effect values "
            f"in [{lo:.6g}, {hi:.6g}] (power ranges {pw_lo:.4f} to {pw_hi:.4f})"
        )
    return brentq(lambda x: power_of(x) - target, lo, hi, xtol=xtol)


# ---------------------------------------------------------------------------
# Minimum detectable effect results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProportionMDE:
    """Smallest detectable second-arm proportion for a given n."""

    p2: float
    arr: float  # absolute risk difference |p1 - p2|
    rr: float  # p2 / p1


@dataclass(frozen=True)
class MeanMDE:
    """Smallest detectable mean difference for a given n."""

    delta: float
    cohens_d: float


@dataclass(frozen=True)
class SurvivalMDE:
    """Smallest detectable hazard ratio (both directions) for a given event count."""

    hr: float  # protective direction, < 1
    hr_upper: float  # harmful direction, 1 / hr
    ln_hr: float


# ---------------------------------------------------------------------------
# Design-specific results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClusterDesign:
    """Cluster-randomized inflation of an individually randomized n."""

    deff: float  # 1 + (m - 1) * ICC
    n_adjusted: int
    n_clusters: int
    total_n: int  # n_clusters * cluster_size

    def summary(self) -> str:
        lines = ["Cluster-randomized design", ""]
        lines.append(f"  design effect = {self.deff:.4f}")
        lines.append(f"     adjusted n = {self.n_adjusted}")
        lines.append(f"       clusters = {self.n_clusters}")
        lines.append(f"        total n = {self.total_n}")
        return "\n".join(lines)


@dataclass(frozen=True)
class SteppedWedgeDesign:
    """Stepped-wedge sizing relative to a parallel cluster trial."""

    total_clusters: int
    steps: int
    clusters_per_step: int
    correction_factor: float
    n_per_cluster: int
    total_n: int


@dataclass(frozen=True)
class OrdinalShiftResult:
    """Proportional-odds (ordinal shift) sample size."""

    n_per_group: int
    total: int
    common_or: float
    ln_or: float


@dataclass(frozen=True)
class MultiArmResult:
    """Per-arm n for a multi-arm trial with multiplicity-adjusted alpha."""

    n_per_arm: int
    total_n: int
    adjusted_alpha: float
    correction: str


@dataclass(frozen=True)
class Boundary:
    """One interim look of a group-sequential design."""

    look: int
    fraction: float  # information fraction k / K
    z: float
    nominal_alpha: float


@dataclass(frozen=True)
class GroupSequentialResult:
    """Fixed-design n inflated for repeated interim looks."""

    n_fixed: float
    n_adjusted: int
    inflation_factor: float
    n_looks: int
    spending_type: str
    max_n_per_look: int

    def summary(self) -> str:
        lines = [f"Group sequential design ({self.spending_type})", ""]
        lines.append(f"        fixed n = {self.n_fixed}")
        lines.append(f"      inflation = {self.inflation_factor:.4f}")
        lines.append(f"     adjusted n = {self.n_adjusted}")
        lines.append(f"          looks = {self.n_looks}")
        lines.append(f"   max n / look = {self.max_n_per_look}")
        return "\n".join(lines)


@dataclass(frozen=True)
class CrossoverResult:
    """Total subjects for a within-subject crossover comparison."""

    n: int
    total: int
    n_periods: int
    sd_within: float


@dataclass(frozen=True)
class DiagnosticSampleSize:
    """Precision-based sizing for sensitivity or specificity."""

    n_metric: int  # subjects with (or without) the condition
    for_sensitivity: int | None  # total n so that n_metric are diseased
    for_specificity: int | None  # total n so that n_metric are non-diseased
    expected_prop: float
    ci_width: float
