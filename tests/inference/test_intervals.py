"""Tests for proportion and rate confidence intervals."""

import math

import pytest
from scipy import stats

from pyclinstats.inference import (
    agresti_coull_ci,
    clopper_pearson_ci,
    log_rate_ci,
    newcombe_ci,
    poisson_exact_ci,
    wald_ci,
    wilson_ci,
)


class TestWilson:
    """Tests for the Wilson score interval."""

    def test_known_value(self):
        """5/10 -> (0.2366, 0.7634), as binom::binom.confint(5, 10, methods='wilson')."""
        ci = wilson_ci(0.5, 10)
        assert ci.lower == pytest.approx(0.2366, abs=1e-4)
        assert ci.upper == pytest.approx(0.7634, abs=1e-4)

    @pytest.mark.parametrize("x,n", [(0, 10), (1, 10), (7, 25), (50, 50), (3, 1000)])
    def test_bounds_ordered(self, x, n):
        p = x / n
        ci = wilson_ci(p, n)
        assert 0.0 <= ci.lower <= p + 1e-12
        assert p - 1e-12 <= ci.upper <= 1.0

    def test_zero_n_gives_nan(self):
        ci = wilson_ci(0.0, 0)
        assert math.isnan(ci.lower) and math.isnan(ci.upper)

    def test_unpacks(self):
        lower, upper = wilson_ci(0.3, 40)
        assert lower < 0.3 < upper


class TestWald:
    """Tests for the Wald interval."""

    def test_symmetric_and_clipped(self):
        ci = wald_ci(0.5, 100)
        assert 0.5 - ci.lower == pytest.approx(ci.upper - 0.5)
        assert ci.se == pytest.approx(0.05)
        assert wald_ci(0.02, 10).lower == 0.0


class TestClopperPearson:
    """Tests for the exact binomial interval."""

    @pytest.mark.parametrize("x,n", [(1, 10), (5, 20), (17, 40), (9, 10)])
    def test_matches_beta_quantiles(self, x, n):
        ci = clopper_pearson_ci(x, n)
        assert ci.lower == pytest.approx(stats.beta.ppf(0.025, x, n - x + 1), rel=1e-6)
        assert ci.upper == pytest.approx(stats.beta.ppf(0.975, x + 1, n - x), rel=1e-6)

    def test_zero_successes(self):
        ci = clopper_pearson_ci(0, 15)
        assert ci.lower == 0.0
        assert ci.upper == pytest.approx(stats.beta.ppf(0.975, 1, 15), rel=1e-6)

    def test_all_successes(self):
        ci = clopper_pearson_ci(15, 15)
        assert ci.upper == 1.0
        assert ci.lower == pytest.approx(stats.beta.ppf(0.025, 15, 1), rel=1e-6)


class TestAgrestiCoull:
    """Tests for the Agresti-Coull interval."""

    def test_contains_estimate(self):
        ci = agresti_coull_ci(0.2, 50)
        assert ci.contains(0.2)
        assert ci.se is not None and ci.se > 0


class TestNewcombe:
    """Tests for the Newcombe hybrid score interval."""

    def test_newcombe_example(self):
        """56/70 vs 48/80 (Newcombe 1998, method 10): 0.0524 to 0.3339."""
        ci = newcombe_ci(56 / 70, 70, 48 / 80, 80)
        assert ci.diff == pytest.approx(0.2)
        assert ci.lower == pytest.approx(0.0524, abs=1e-3)
        assert ci.upper == pytest.approx(0.3339, abs=1e-3)

    def test_brackets_difference(self):
        ci = newcombe_ci(0.3, 100, 0.15, 100)
        assert ci.lower < ci.diff < ci.upper


class TestPoisson:
    """Tests for exact Poisson and log-rate intervals."""

    def test_exact_matches_chi2(self):
        ci = poisson_exact_ci(5)
        assert ci.lower == pytest.approx(stats.chi2.ppf(0.025, 10) / 2.0, rel=1e-6)
        assert ci.upper == pytest.approx(stats.chi2.ppf(0.975, 12) / 2.0, rel=1e-6)

    def test_exact_zero_count(self):
        ci = poisson_exact_ci(0)
        assert ci.lower == 0.0
        assert ci.upper == pytest.approx(stats.chi2.ppf(0.975, 2) / 2.0, rel=1e-6)

    def test_log_rate(self):
        r = log_rate_ci(10, 1000)
        assert r.rate == pytest.approx(0.01)
        assert r.se == pytest.approx(math.sqrt(10) / 1000)
        z = stats.norm.ppf(0.975)
        assert r.lower == pytest.approx(0.01 * math.exp(-z / math.sqrt(10)), rel=1e-5)
        assert r.upper == pytest.approx(0.01 * math.exp(z / math.sqrt(10)), rel=1e-5)

    def test_log_rate_zero_events(self):
        r = log_rate_ci(0, 500)
        assert r.rate == 0.0
        assert r.lower == 0.0
        assert math.isnan(r.upper)
