"""Tests for incidence rates, rate ratios, SMRs and direct standardization."""

import math

import pytest
from scipy import stats

from pyclinstats.epi import direct_standardization, incidence_rate, rate_ratio, smr


class TestIncidenceRate:
    """Tests for incidence_rate."""

    def test_rate_and_exact_ci(self):
        res = incidence_rate(10, 1000)
        assert res.rate == pytest.approx(0.01)
        assert res.ci.lower == pytest.approx(stats.chi2.ppf(0.025, 20) / 2 / 1000, rel=1e-6)
        assert res.ci.upper == pytest.approx(stats.chi2.ppf(0.975, 22) / 2 / 1000, rel=1e-6)

    def test_zero_events(self):
        res = incidence_rate(0, 500)
        assert res.rate == 0.0
        assert res.ci.lower == 0.0
        assert res.ci.upper > 0.0

    def test_invalid_person_time(self):
        with pytest.raises(ValueError, match="person_time"):
            incidence_rate(5, 0)

    def test_negative_events(self):
        with pytest.raises(ValueError, match="events"):
            incidence_rate(-1, 100)


class TestRateRatio:
    """Tests for rate_ratio."""

    def test_known_value(self):
        res = rate_ratio(20, 1000, 10, 1000)
        assert res.ratio == pytest.approx(2.0)
        assert res.se_ln == pytest.approx(math.sqrt(1 / 20 + 1 / 10))
        z = stats.norm.ppf(0.975)
        assert res.ci.lower == pytest.approx(2.0 * math.exp(-z * res.se_ln), rel=1e-6)
        assert res.rate1 == pytest.approx(0.02)
        assert res.rate2 == pytest.approx(0.01)

    def test_zero_count(self):
        res = rate_ratio(0, 1000, 10, 1000)
        assert res.ratio == 0.0
        assert res.se_ln == math.inf
        assert res.ci.lower == 0.0
        assert res.ci.upper == math.inf

    def test_invalid_person_time(self):
        with pytest.raises(ValueError, match="person-time"):
            rate_ratio(5, 100, 5, 0)


class TestSMR:
    """Tests for smr."""

    def test_known_value(self):
        res = smr(30, 20.0)
        assert res.smr == pytest.approx(1.5)
        assert res.ci.lower == pytest.approx(stats.chi2.ppf(0.025, 60) / 2 / 20, rel=1e-6)
        assert res.ci.upper == pytest.approx(stats.chi2.ppf(0.975, 62) / 2 / 20, rel=1e-6)

    def test_invalid_expected(self):
        with pytest.raises(ValueError, match="expected"):
            smr(5, 0.0)


class TestDirectStandardization:
    """Tests for direct_standardization."""

    def test_from_counts(self):
        res = direct_standardization([1000, 2000], events=[10, 40], population=[1000, 2000])
        assert res.rate == pytest.approx(50 / 3000)
        assert res.se == pytest.approx(math.sqrt(50) / 3000)
        assert res.ci.lower < res.rate < res.ci.upper

    def test_from_rates(self):
        counts = direct_standardization([1000, 2000], events=[10, 40], population=[1000, 2000])
        rates = direct_standardization(
            [1000, 2000], rates=[0.01, 0.02], se=[math.sqrt(10) / 1000, math.sqrt(40) / 2000],
        )
        assert rates.rate == pytest.approx(counts.rate)
        assert rates.se == pytest.approx(counts.se)

    def test_standard_population_reweights(self):
        young = direct_standardization([9, 1], rates=[0.01, 0.10], se=[0.001, 0.01])
        old = direct_standardization([1, 9], rates=[0.01, 0.10], se=[0.001, 0.01])
        assert young.rate == pytest.approx(0.019)
        assert old.rate == pytest.approx(0.091)

    def test_missing_inputs(self):
        with pytest.raises(ValueError, match="Provide either"):
            direct_standardization([1, 2], events=[1, 2])

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="equal length"):
            direct_standardization([1, 2], rates=[0.1], se=[0.01])
