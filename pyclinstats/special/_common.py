"""Numerical constants and convergence reporting shared by the solvers."""

from __future__ import annotations

from dataclasses import dataclass

EPS = 1e-14
MAX_ITER = 300

# Lanczos approximation, g = 7, n = 9
LANCZOS_G = 7
LANCZOS_COEF = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)

T_QUANTILE_MAX_ITER = 50
CHI2_QUANTILE_MAX_ITER = 100
BRESLOW_DAY_MAX_ITER = 50
FRAGILITY_MAX_ITER = 1000


@dataclass(frozen=True)
class ConvergenceInfo:
    """Outcome of an iterative evaluation.

    Returned alongside the value when a solver is called with
    ``full_output=True``. A non-converged result still carries the best
    estimate available when the iteration cap was reached.
    """

    converged: bool
    iterations: int
    method: str

    def summary(self) -> str:
        status = "converged" if self.converged else "NOT converged"
        return f"{self.method}: {status} after {self.iterations} iterations"
