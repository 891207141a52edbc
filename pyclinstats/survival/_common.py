"""Result types for survival analysis."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pyclinstats.inference._common import Interval


@dataclass(frozen=True)
class KaplanMeierResult:
    """Kaplan-Meier estimate for one group.

    The arrays hold one row per distinct observed time, preceded by a
    ``time = 0`` row with ``survival = 1``. ``n_risk`` is the number at
    risk just before each time.

    Attributes
    ----------
    median : float or None
        First time with ``survival <= 0.5``; ``None`` if not reached.
    median_ci : Interval or None
        Approximate CI for the median from the times where the survival
        curve crosses ``0.5 +/- z * se``. A bound that is never crossed is
        ``nan``. ``None`` when the median is not reached.
    """

    time: NDArray[np.float64]
    n_risk: NDArray[np.int64]
    events: NDArray[np.int64]
    censored: NDArray[np.int64]
    survival: NDArray[np.float64]
    se: NDArray[np.float64]
    ci_lower: NDArray[np.float64]
    ci_upper: NDArray[np.float64]
    median: float | None
    median_ci: Interval | None
    n: int

    def summary(self) -> str:
        """Life table in the layout of R's ``summary.survfit``."""
        lines = [
            f"Kaplan-Meier estimate, n = {self.n}, median = "
            + ("not reached" if self.median is None else f"{self.median:g}"),
            "",
            f"{'time':>8} {'n.risk':>7} {'n.event':>8} {'survival':>9} "
            f"{'std.err':>8} {'lower':>7} {'upper':>7}",
        ]
        for i in range(1, self.time.size):
            if self.events[i] == 0:
                continue
            lines.append(
                f"{self.time[i]:>8g} {self.n_risk[i]:>7d} {self.events[i]:>8d} "
                f"{self.survival[i]:>9.4f} {self.se[i]:>8.4f} "
                f"{self.ci_lower[i]:>7.4f} {self.ci_upper[i]:>7.4f}"
            )
        return "\n".join(lines)


@dataclass(frozen=True)
class RMSTResult:
    """Restricted mean survival time up to ``tau``."""

    rmst: float
    se: float
    ci: Interval
    tau: float


@dataclass(frozen=True)
class LogRankResult:
    """Two-group log-rank (Mantel-Cox) test.

    ``observed`` and ``expected`` refer to the first group (in order of
    appearance). The hazard ratio is the one-step ``exp((O - E) / V)``
    estimate of group 1 versus group 2.
    """

    chi2: float
    df: int
    p_value: float
    observed: float
    expected: float
    variance: float
    hr: float
    hr_ci: Interval
    se_ln_hr: float
    groups: tuple

    def summary(self) -> str:
        lines = ["Log-rank test", "=" * 40]
        lines.append(f"Groups      : {self.groups[0]!r} vs {self.groups[1]!r}")
        lines.append(f"O - E       : {self.observed - self.expected:.3f} (V = {self.variance:.3f})")
        lines.append(f"Chi-squared : {self.chi2:.4f} on {self.df} df, p = {self.p_value:.4g}")
        lines.append(
            f"HR          : {self.hr:.4f} [{self.hr_ci.lower:.4f}, {self.hr_ci.upper:.4f}]"
        )
        return "\n".join(lines)
