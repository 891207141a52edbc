"""Shared record types for intervals, tests and stratified tables."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class CountTable(NamedTuple):
    """2x2 exposure-by-outcome table.

    ::

                    event   no event
        exposed       a        b
        unexposed     c        d
    """

    a: float
    b: float
    c: float
    d: float

    @property
    def n(self) -> float:
        return self.a + self.b + self.c + self.d


def as_table(table: CountTable | Mapping[str, float] | Sequence[float]) -> CountTable:
    """Coerce ``{a, b, c, d}`` mappings or 4-sequences to :class:`CountTable`."""
    if isinstance(table, CountTable):
        return table
    if isinstance(table, Mapping):
        try:
            return CountTable(table["a"], table["b"], table["c"], table["d"])
        except KeyError as exc:
            raise ValueError(f"table mapping is missing cell {exc.args[0]!r}") from None
    cells = tuple(table)
    if len(cells) != 4:
        raise ValueError(f"a 2x2 table needs exactly 4 cells, got {len(cells)}")
    return CountTable(*cells)


def as_tables(tables: Iterable) -> list[CountTable]:
    """Coerce a stratified table set; raise on an empty set or negative cells."""
    out = [as_table(t) for t in tables]
    if not out:
        raise ValueError("Need at least one 2x2 table")
    for t in out:
        if min(t) < 0:
            raise ValueError(f"cell counts must be non-negative, got {tuple(t)}")
    return out


class Measure(str, enum.Enum):
    """Effect measure selector for stratified and pooled 2x2 analyses."""

    OR = "OR"
    RR = "RR"
    RD = "RD"


def parse_measure(measure: str | Measure, allowed: Iterable[Measure] = tuple(Measure)) -> Measure | None:
    """Return the :class:`Measure` or ``None`` for an unsupported selector."""
    try:
        m = Measure(measure)
    except ValueError:
        m = None
    if m is None or m not in tuple(allowed):
        logger.warning("unsupported measure %r; returning no result", measure)
        return None
    return m


# ---------------------------------------------------------------------------
# Intervals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Interval:
    """Two-sided interval ``{lower, upper}`` with an optional standard error."""

    lower: float
    upper: float
    se: float | None = None

    def __iter__(self):
        yield self.lower
        yield self.upper

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class DifferenceInterval:
    """Interval for a difference of two proportions."""

    diff: float
    lower: float
    upper: float


@dataclass(frozen=True)
class RateInterval:
    """Incidence rate with its standard error and interval."""

    rate: float
    se: float
    lower: float
    upper: float


@dataclass(frozen=True)
class Estimate:
    """Point estimate with interval; ``se`` is on the analysis scale (log for ratios)."""

    value: float
    ci: Interval
    se: float | None = None


# ---------------------------------------------------------------------------
# Test results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ZTestResult:
    """Two-proportion z-test."""

    p1: float
    p2: float
    diff: float
    se: float
    z: float
    p_value: float


@dataclass(frozen=True)
class ChiSquaredResult:
    """Pearson chi-squared test of a 2x2 table."""

    chi2: float
    df: int
    p_value: float
    yates: bool = False


@dataclass(frozen=True)
class FisherResult:
    """Fisher's exact test (two-sided)."""

    p_value: float
    p_obs: float


@dataclass(frozen=True)
class McNemarResult:
    """McNemar's test for paired binary data.

    ``chi2`` and ``df`` are ``None`` for the exact test. ``odds_ratio`` is
    the matched-pairs odds ratio ``b / c``.
    """

    chi2: float | None
    df: int | None
    p_value: float
    method: str  # 'asymptotic' or 'exact'
    odds_ratio: float

    def summary(self) -> str:
        lines = [f"McNemar's test ({self.method})", "=" * 40]
        if self.chi2 is not None:
            lines.append(f"Chi-squared : {self.chi2:.4f} (df = {self.df})")
        lines.append(f"p-value     : {self.p_value:.4g}")
        lines.append(f"Matched OR  : {self.odds_ratio:.4f}")
        return "\n".join(lines)


@dataclass(frozen=True)
class TrendResult:
    """Cochran-Armitage test for trend in proportions."""

    z: float
    p_value: float
    T: float
    var_t: float


@dataclass(frozen=True)
class BreslowDayResult:
    """Breslow-Day test of homogeneity of odds ratios across strata."""

    statistic: float
    df: int
    p_value: float
    converged: bool


@dataclass(frozen=True)
class MantelHaenszelResult:
    """Mantel-Haenszel pooled estimate across strata.

    Attributes
    ----------
    measure : str
        ``'OR'`` or ``'RR'``.
    estimate : float
        Pooled ratio.
    ln_estimate, se : float
        Log of the pooled ratio and its standard error (Robins-Breslow-
        Greenland for OR, Greenland-Robins for RR).
    ci : Interval
        Confidence interval on the ratio scale.
    breslow_day : BreslowDayResult or None
        Homogeneity test (OR only).
    stratum_estimates : array
        Crude per-stratum ratio.
    """

    measure: str
    estimate: float
    ln_estimate: float
    se: float
    ci: Interval
    breslow_day: BreslowDayResult | None
    stratum_estimates: NDArray[np.floating]

    def summary(self) -> str:
        lines = [
            f"Mantel-Haenszel pooled {self.measure}",
            "=" * 40,
            f"Strata      : {len(self.stratum_estimates)}",
            f"Estimate    : {self.estimate:.4f}",
            f"95% CI      : [{self.ci.lower:.4f}, {self.ci.upper:.4f}]",
            f"SE (log)    : {self.se:.4f}",
        ]
        if self.breslow_day is not None:
            bd = self.breslow_day
            lines.append(
                f"Breslow-Day : {bd.statistic:.4f} (df = {bd.df}, p = {bd.p_value:.4g})"
            )
        return "\n".join(lines)
