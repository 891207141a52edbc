"""Tests for the gamma/beta special functions."""

import logging
import math

import pytest
from scipy import special as sp

from pyclinstats.special import (
    MAX_ITER,
    ConvergenceInfo,
    beta_function,
    gamma_function,
    log_beta,
    log_gamma,
    regularized_incomplete_beta,
    regularized_lower_incomplete_gamma,
)


class TestLogGamma:
    """Tests for log_gamma and gamma_function."""

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 10, 15])
    def test_factorial(self, n):
        """exp(log_gamma(n + 1)) == n!"""
        assert math.exp(log_gamma(n + 1)) == pytest.approx(math.factorial(n), rel=1e-10)

    def test_five_factorial(self):
        assert abs(math.exp(log_gamma(6.0)) - 120.0) < 1e-6

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.5, 2.5, 7.3, 30.0, 171.5])
    def test_matches_scipy(self, x):
        assert log_gamma(x) == pytest.approx(sp.gammaln(x), rel=1e-10, abs=1e-12)

    def test_reflection_negative_argument(self):
        """ln|Gamma(-0.5)| via the reflection formula."""
        assert log_gamma(-0.5) == pytest.approx(sp.gammaln(-0.5), rel=1e-10)

    def test_gamma_half(self):
        assert gamma_function(0.5) == pytest.approx(math.sqrt(math.pi), rel=1e-10)

    def test_gamma_negative(self):
        """Gamma(-0.5) = -2 sqrt(pi), sign preserved."""
        assert gamma_function(-0.5) == pytest.approx(-2.0 * math.sqrt(math.pi), rel=1e-10)

    @pytest.mark.parametrize("x", [1.0, 4.0, 6.5])
    def test_gamma_matches_scipy(self, x):
        assert gamma_function(x) == pytest.approx(sp.gamma(x), rel=1e-10)


class TestBeta:
    """Tests for beta_function and log_beta."""

    @pytest.mark.parametrize("a,b", [(0.5, 0.5), (1.0, 1.0), (2.0, 3.0), (10.0, 0.5)])
    def test_matches_scipy(self, a, b):
        assert beta_function(a, b) == pytest.approx(sp.beta(a, b), rel=1e-10)
        assert log_beta(a, b) == pytest.approx(sp.betaln(a, b), rel=1e-10, abs=1e-12)

    def test_symmetry(self):
        assert beta_function(2.5, 4.0) == pytest.approx(beta_function(4.0, 2.5), rel=1e-14)


class TestIncompleteGamma:
    """Tests for the regularized lower incomplete gamma P(a, x)."""

    @pytest.mark.parametrize("a", [0.5, 1.0, 3.0, 10.0, 50.0])
    @pytest.mark.parametrize("x", [0.1, 1.0, 5.0, 20.0, 60.0])
    def test_matches_scipy(self, a, x):
        expected = sp.gammainc(a, x)
        assert regularized_lower_incomplete_gamma(a, x) == pytest.approx(
            expected, rel=1e-7, abs=1e-14,
        )

    def test_zero_and_negative_x(self):
        assert regularized_lower_incomplete_gamma(2.0, 0.0) == 0.0
        assert regularized_lower_incomplete_gamma(2.0, -1.0) == 0.0

    def test_exponential_cdf(self):
        """P(1, x) = 1 - exp(-x)."""
        assert regularized_lower_incomplete_gamma(1.0, 2.0) == pytest.approx(
            1.0 - math.exp(-2.0), rel=1e-12,
        )

    def test_full_output(self):
        value, info = regularized_lower_incomplete_gamma(3.0, 2.0, full_output=True)
        assert value == regularized_lower_incomplete_gamma(3.0, 2.0)
        assert isinstance(info, ConvergenceInfo)
        assert info.converged
        assert info.method == "series"

    def test_continued_fraction_branch(self):
        _, info = regularized_lower_incomplete_gamma(3.0, 10.0, full_output=True)
        assert info.method == "continued fraction"
        assert info.converged


class TestIncompleteBeta:
    """Tests for the regularized incomplete beta I_x(a, b)."""

    @pytest.mark.parametrize("a", [0.5, 2.0, 10.0])
    @pytest.mark.parametrize("b", [0.5, 2.0, 10.0])
    @pytest.mark.parametrize("x", [0.01, 0.3, 0.5, 0.9, 0.99])
    def test_matches_scipy(self, a, b, x):
        expected = sp.betainc(a, b, x)
        assert regularized_incomplete_beta(x, a, b) == pytest.approx(
            expected, rel=1e-7, abs=1e-12,
        )

    @pytest.mark.parametrize("x", [0.05, 0.2, 0.5, 0.77, 0.95])
    @pytest.mark.parametrize("a,b", [(0.5, 3.0), (2.0, 2.0), (7.0, 1.5)])
    def test_symmetry(self, x, a, b):
        """I_x(a, b) + I_{1-x}(b, a) == 1."""
        total = regularized_incomplete_beta(x, a, b) + regularized_incomplete_beta(1 - x, b, a)
        assert total == pytest.approx(1.0, abs=1e-10)

    def test_boundaries(self):
        assert regularized_incomplete_beta(0.0, 2.0, 3.0) == 0.0
        assert regularized_incomplete_beta(1.0, 2.0, 3.0) == 1.0

    def test_outside_unit_interval_is_nan(self):
        assert math.isnan(regularized_incomplete_beta(-0.1, 2.0, 3.0))
        assert math.isnan(regularized_incomplete_beta(1.1, 2.0, 3.0))

    def test_uniform(self):
        """I_x(1, 1) = x."""
        assert regularized_incomplete_beta(0.37, 1.0, 1.0) == pytest.approx(0.37, rel=1e-12)


class TestConvergence:
    """Iteration-cap reporting."""

    def test_non_convergence_flagged_and_logged(self, caplog):
        """Huge shape parameters exhaust the continued fraction."""
        caplog.set_level(logging.DEBUG, logger="pyclinstats")
        value, info = regularized_incomplete_beta(0.5, 1e8, 1e8, full_output=True)
        assert not info.converged
        assert info.iterations == MAX_ITER
        assert any("iteration cap" in r.getMessage() for r in caplog.records)

    def test_default_value_unchanged(self):
        """full_output does not change the numeric result."""
        value, _ = regularized_incomplete_beta(0.5, 1e8, 1e8, full_output=True)
        plain = regularized_incomplete_beta(0.5, 1e8, 1e8)
        assert value == plain or (math.isnan(value) and math.isnan(plain))

    def test_summary(self):
        _, info = regularized_incomplete_beta(0.3, 2.0, 3.0, full_output=True)
        text = info.summary()
        assert "continued fraction" in text
