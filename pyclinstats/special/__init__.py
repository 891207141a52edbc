"""
Special functions underlying the distribution library.

Log-gamma/gamma (Lanczos), beta/log-beta, and the regularized incomplete
gamma and beta functions evaluated by series and Lentz continued fractions.

Validates against: scipy.special.
"""

from pyclinstats.special._common import ConvergenceInfo, EPS, MAX_ITER
from pyclinstats.special._gamma import (
    log_gamma,
    gamma_function,
    beta_function,
    log_beta,
    regularized_lower_incomplete_gamma,
    regularized_incomplete_beta,
)

__all__ = [
    "ConvergenceInfo",
    "EPS",
    "MAX_ITER",
    "log_gamma",
    "gamma_function",
    "beta_function",
    "log_beta",
    "regularized_lower_incomplete_gamma",
    "regularized_incomplete_beta",
]
