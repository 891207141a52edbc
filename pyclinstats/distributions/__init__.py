"""
Probability distributions built on the special-function core.

PDF/CDF/quantile for normal, Student-t, chi-squared and F; pmf/CDF for
binomial and Poisson (plus a Poisson quantile); hypergeometric pmf.

Validates against: scipy.stats.
"""

from pyclinstats.distributions._continuous import (
    normal_pdf,
    normal_cdf,
    normal_quantile,
    z_critical,
    t_pdf,
    t_cdf,
    t_quantile,
    chi_squared_pdf,
    chi_squared_cdf,
    chi_squared_sf,
    chi_squared_quantile,
    f_cdf,
    f_quantile,
)
from pyclinstats.distributions._discrete import (
    log_choose,
    binomial_pmf,
    binomial_cdf,
    poisson_pmf,
    poisson_cdf,
    poisson_quantile,
    hypergeometric_pmf,
)

__all__ = [
    "normal_pdf",
    "normal_cdf",
    "normal_quantile",
    "z_critical",
    "t_pdf",
    "t_cdf",
    "t_quantile",
    "chi_squared_pdf",
    "chi_squared_cdf",
    "chi_squared_sf",
    "chi_squared_quantile",
    "f_cdf",
    "f_quantile",
    "log_choose",
    "binomial_pmf",
    "binomial_cdf",
    "poisson_pmf",
    "poisson_cdf",
    "poisson_quantile",
    "hypergeometric_pmf",
]
