"""Tests for two-means sample size, power and MDE."""

import pytest

from pyclinstats.power import mde_means, power_two_means, sample_size_two_means


class TestSampleSizeTwoMeans:
    """Tests for sample_size_two_means."""

    def test_known_value(self):
        r = sample_size_two_means(delta=5, sd1=10)
        assert r.n1 == 63
        assert r.n2 == 63
        assert r.total == 126
        assert r.effect_size == pytest.approx(0.5)

    def test_unequal_allocation(self):
        r = sample_size_two_means(delta=5, sd1=10, ratio=2.0)
        assert r.n1 == 48
        assert r.n2 == 96

    def test_unequal_sd(self):
        equal = sample_size_two_means(delta=5, sd1=10)
        unequal = sample_size_two_means(delta=5, sd1=10, sd2=15)
        assert unequal.n1 > equal.n1

    def test_sign_of_delta_irrelevant(self):
        assert sample_size_two_means(delta=-5, sd1=10).n1 == 63

    def test_zero_delta_raises(self):
        with pytest.raises(ValueError, match="delta = 0"):
            sample_size_two_means(delta=0, sd1=10)

    def test_non_positive_sd_raises(self):
        with pytest.raises(ValueError, match="sd1 and sd2"):
            sample_size_two_means(delta=5, sd1=0)

    def test_invalid_power(self):
        with pytest.raises(ValueError, match="power"):
            sample_size_two_means(delta=5, sd1=10, power=1.0)


class TestPowerTwoMeans:
    """Tests for power_two_means."""

    def test_roundtrip(self):
        assert power_two_means(5, 10, 63) >= 0.80
        assert power_two_means(5, 10, 55) < 0.80


class TestMDEMeans:
    """Tests for mde_means."""

    def test_inverts_sample_size(self):
        mde = mde_means(sd=10, n_per_group=63)
        assert mde.delta == pytest.approx(4.99, abs=0.01)
        assert mde.cohens_d == pytest.approx(mde.delta / 10)
