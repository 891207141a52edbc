"""Result types and input handling for meta-analysis."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyclinstats.inference._common import Interval, MantelHaenszelResult


def as_study_arrays(
    effects: ArrayLike, variances: ArrayLike, name: str = "variances",
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Coerce per-study effects and their variances (or SEs) to 1-D float arrays.

    Raises
    ------
    ValueError
        If the arrays are empty, not 1-D, or of different lengths.
    """
    y = np.asarray(effects, dtype=np.float64)
    v = np.asarray(variances, dtype=np.float64)
    if y.ndim != 1 or v.ndim != 1:
        raise ValueError(f"effects and {name} must be 1-D")
    if y.size == 0:
        raise ValueError("Need at least one study")
    if y.shape != v.shape:
        raise ValueError(
            f"effects and {name} must have the same length, "
            f"got {y.size} and {v.size}"
        )
    return y, v


@dataclass(frozen=True)
class FixedEffectResult:
    """Inverse-variance fixed-effect pooled estimate."""

    pooled: float
    se: float
    ci: Interval
    z: float
    p_value: float
    weights: NDArray[np.float64]  # raw 1 / v_i


@dataclass(frozen=True)
class RandomEffectsResult:
    """DerSimonian-Laird random-effects meta-analysis.

    Attributes
    ----------
    pooled, se, ci, z, p_value
        Random-effects pooled estimate and its inference (HKSJ-adjusted
        ``se`` when requested).
    q, df, p_heterogeneity
        Cochran's Q, ``k - 1`` and its chi-squared p-value.
    i2, h2, tau2
        Heterogeneity summaries (``i2`` as a fraction in [0, 1]).
    prediction_interval
        Range for the effect in a new study.
    weights
        Random-effects weights in percent (sum to 100).
    fixed
        The fixed-effect analysis of the same data.
    """

    pooled: float
    se: float
    ci: Interval
    z: float
    p_value: float
    q: float
    df: int
    p_heterogeneity: float
    i2: float
    h2: float
    tau2: float
    prediction_interval: Interval
    weights: NDArray[np.float64]
    fixed: FixedEffectResult
    hksj: bool = False

    @property
    def k(self) -> int:
        return self.df + 1

    def summary(self) -> str:
        method = "DerSimonian-Laird" + (" with HKSJ" if self.hksj else "")
        lines = [f"Random-effects meta-analysis ({method}), k = {self.k}", "=" * 50]
        lines.append(
            f"Pooled      : {self.pooled:.4f} "
            f"[{self.ci.lower:.4f}, {self.ci.upper:.4f}]  (SE {self.se:.4f})"
        )
        lines.append(f"z = {self.z:.3f}, p = {self.p_value:.4g}")
        lines.append(
            f"Prediction  : [{self.prediction_interval.lower:.4f}, "
            f"{self.prediction_interval.upper:.4f}]"
        )
        lines.append("")
        lines.append("Heterogeneity:")
        lines.append(f"  Q = {self.q:.3f} (df = {self.df}), p = {self.p_heterogeneity:.4g}")
        lines.append(f"  I^2 = {100 * self.i2:.1f}%, H^2 = {self.h2:.3f}, tau^2 = {self.tau2:.4f}")
        return "\n".join(lines)


@dataclass(frozen=True)
class TableMetaResult:
    """Pooling of raw 2x2 tables: inverse-variance and Mantel-Haenszel."""

    measure: str
    iv: RandomEffectsResult
    mh: MantelHaenszelResult | None  # None for the risk difference
    effects: NDArray[np.float64]  # per-study ln(OR), ln(RR) or RD
    variances: NDArray[np.float64]


@dataclass(frozen=True)
class EggerResult:
    """Egger's regression test for funnel-plot asymmetry."""

    intercept: float
    slope: float
    se: float  # SE of the intercept
    t: float
    p_value: float
    df: int


@dataclass(frozen=True)
class BeggResult:
    """Begg-Mazumdar rank correlation test."""

    tau: float
    z: float
    p_value: float
    concordant: int
    discordant: int


@dataclass(frozen=True)
class LeaveOneOutResult:
    """Random-effects pooling with one study excluded."""

    excluded: int  # 0-based index of the omitted study
    pooled: float
    ci: Interval
    i2: float
    tau2: float


@dataclass(frozen=True)
class CumulativeResult:
    """Random-effects pooling of the first ``n_studies`` studies."""

    n_studies: int
    label: str
    pooled: float
    ci: Interval
    i2: float


@dataclass(frozen=True)
class TrimAndFillResult:
    """Duval-Tweedie trim-and-fill adjustment."""

    k0: int  # estimated number of missing studies
    original: RandomEffectsResult
    adjusted: RandomEffectsResult
    imputed_effects: NDArray[np.float64]
    imputed_variances: NDArray[np.float64]


@dataclass(frozen=True)
class SubgroupResult:
    """Subgroup analysis with a between-subgroup Q test."""

    subgroups: dict[str, RandomEffectsResult]
    overall: RandomEffectsResult
    q_between: float
    df_between: int
    p_between: float
    q_within: float

    def summary(self) -> str:
        lines = ["Subgroup analysis", "=" * 50]
        for label, res in self.subgroups.items():
            lines.append(
                f"{label:<16}: {res.pooled:.4f} [{res.ci.lower:.4f}, {res.ci.upper:.4f}]"
                f"  k = {res.k}, I^2 = {100 * res.i2:.1f}%"
            )
        lines.append("")
        lines.append(
            f"Q between = {self.q_between:.3f} (df = {self.df_between}), "
            f"p = {self.p_between:.4g}"
        )
        lines.append(f"Q within  = {self.q_within:.3f}")
        return "\n".join(lines)
