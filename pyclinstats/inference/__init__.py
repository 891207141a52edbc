"""
Confidence intervals and hypothesis tests for proportions and 2x2 tables.

Wald, Wilson, Clopper-Pearson, Agresti-Coull, Newcombe, Poisson-exact and
log-rate intervals; two-proportion z, chi-squared, Fisher exact, McNemar,
Cochran-Armitage and Mantel-Haenszel with Breslow-Day.

Validates against: R packages stats, binom, DescTools, epiR.
"""

from pyclinstats.inference._common import (
    CountTable,
    Measure,
    Interval,
    DifferenceInterval,
    RateInterval,
    Estimate,
    ZTestResult,
    ChiSquaredResult,
    FisherResult,
    McNemarResult,
    TrendResult,
    BreslowDayResult,
    MantelHaenszelResult,
)
from pyclinstats.inference._intervals import (
    wald_ci,
    wilson_ci,
    clopper_pearson_ci,
    agresti_coull_ci,
    newcombe_ci,
    poisson_exact_ci,
    log_rate_ci,
)
from pyclinstats.inference._tests import (
    two_proportion_z_test,
    chi_squared_test_2x2,
    fisher_exact,
    mcnemar_test,
    cochran_armitage_trend,
)
from pyclinstats.inference._mantel_haenszel import mantel_haenszel

__all__ = [
    "CountTable",
    "Measure",
    "Interval",
    "DifferenceInterval",
    "RateInterval",
    "Estimate",
    "ZTestResult",
    "ChiSquaredResult",
    "FisherResult",
    "McNemarResult",
    "TrendResult",
    "BreslowDayResult",
    "MantelHaenszelResult",
    "wald_ci",
    "wilson_ci",
    "clopper_pearson_ci",
    "agresti_coull_ci",
    "newcombe_ci",
    "poisson_exact_ci",
    "log_rate_ci",
    "two_proportion_z_test",
    "chi_squared_test_2x2",
    "fisher_exact",
    "mcnemar_test",
    "cochran_armitage_trend",
    "mantel_haenszel",
]
