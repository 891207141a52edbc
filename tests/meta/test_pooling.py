"""Tests for fixed-effect, random-effects and 2x2 table pooling."""

import logging
import math

import numpy as np
import pytest
from scipy import stats

from pyclinstats.meta import (
    meta_analysis_fixed_effect,
    meta_analysis_random_effects,
    meta_analysis_tables,
)

EFFECTS = np.array([0.10, 0.30, 0.35, 0.65, 0.45])
VARIANCES = np.array([0.010, 0.020, 0.015, 0.050, 0.030])


def _dersimonian_laird(y, v):
    """Reference moment estimator written out step by step."""
    w = 1.0 / v
    mu_fe = np.sum(w * y) / np.sum(w)
    q = np.sum(w * (y - mu_fe) ** 2)
    df = len(y) - 1
    c = np.sum(w) - np.sum(w ** 2) / np.sum(w)
    tau2 = max(0.0, (q - df) / c)
    w_re = 1.0 / (v + tau2)
    mu = np.sum(w_re * y) / np.sum(w_re)
    return mu, math.sqrt(1.0 / np.sum(w_re)), q, tau2, w_re


class TestFixedEffect:
    """Tests for meta_analysis_fixed_effect."""

    def test_inverse_variance(self):
        res = meta_analysis_fixed_effect(EFFECTS, VARIANCES)
        w = 1.0 / VARIANCES
        assert res.pooled == pytest.approx(np.sum(w * EFFECTS) / np.sum(w))
        assert res.se == pytest.approx(math.sqrt(1.0 / np.sum(w)))
        assert res.weights.tolist() == pytest.approx(w.tolist())

    def test_ci_and_p(self):
        res = meta_analysis_fixed_effect(EFFECTS, VARIANCES)
        z = stats.norm.ppf(0.975)
        assert res.ci.lower == pytest.approx(res.pooled - z * res.se, rel=1e-6)
        assert res.p_value == pytest.approx(2 * stats.norm.sf(abs(res.z)), abs=1e-6)

    def test_custom_weights(self):
        res = meta_analysis_fixed_effect([1.0, 3.0], [0.1, 0.1], weights=[3.0, 1.0])
        assert res.pooled == pytest.approx(1.5)

    def test_weight_length_mismatch(self):
        with pytest.raises(ValueError, match="weights"):
            meta_analysis_fixed_effect([1.0, 2.0], [0.1, 0.1], weights=[1.0])

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="at least one study"):
            meta_analysis_fixed_effect([], [])

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="same length"):
            meta_analysis_fixed_effect([0.1, 0.2], [0.01])


class TestRandomEffects:
    """Tests for meta_analysis_random_effects."""

    def test_matches_moment_estimator(self):
        res = meta_analysis_random_effects(EFFECTS, VARIANCES)
        mu, se, q, tau2, w_re = _dersimonian_laird(EFFECTS, VARIANCES)
        assert res.pooled == pytest.approx(mu, rel=1e-12)
        assert res.se == pytest.approx(se, rel=1e-12)
        assert res.q == pytest.approx(q, rel=1e-12)
        assert res.tau2 == pytest.approx(tau2, rel=1e-12)
        assert res.df == 4
        assert res.k == 5
        assert res.weights.sum() == pytest.approx(100.0)
        assert res.weights.tolist() == pytest.approx((100 * w_re / w_re.sum()).tolist())

    def test_heterogeneity_summaries(self):
        res = meta_analysis_random_effects(EFFECTS, VARIANCES)
        assert res.i2 == pytest.approx(max(0.0, (res.q - 4) / res.q))
        assert res.h2 == pytest.approx(res.q / 4)
        assert res.p_heterogeneity == pytest.approx(stats.chi2.sf(res.q, 4), rel=1e-6)

    def test_prediction_interval_uses_t(self):
        res = meta_analysis_random_effects(EFFECTS, VARIANCES)
        half = stats.t.ppf(0.975, 3) * math.sqrt(res.se ** 2 + res.tau2)
        assert res.prediction_interval.upper == pytest.approx(res.pooled + half, rel=1e-6)
        assert res.prediction_interval.lower < res.ci.lower

    def test_prediction_interval_normal_for_two_studies(self):
        res = meta_analysis_random_effects([0.2, 0.6], [0.02, 0.03])
        half = stats.norm.ppf(0.975) * math.sqrt(res.se ** 2 + res.tau2)
        assert res.prediction_interval.upper == pytest.approx(res.pooled + half, rel=1e-6)

    def test_homogeneous_equals_fixed(self):
        res = meta_analysis_random_effects([0.5, 0.5, 0.5], [0.04, 0.04, 0.04])
        assert res.q == pytest.approx(0.0, abs=1e-12)
        assert res.i2 == 0.0
        assert res.tau2 == 0.0
        assert res.pooled == pytest.approx(0.5)
        assert res.pooled == pytest.approx(res.fixed.pooled)
        assert res.se == pytest.approx(res.fixed.se)

    def test_single_study(self):
        res = meta_analysis_random_effects([0.3], [0.04])
        assert res.tau2 == 0.0
        assert res.pooled == pytest.approx(0.3)
        assert math.isnan(res.h2)
        assert math.isnan(res.p_heterogeneity)

    def test_hksj_inflates_se_only(self):
        res = meta_analysis_random_effects(EFFECTS, VARIANCES, hksj=True)
        mu, se, _, _, w_re = _dersimonian_laird(EFFECTS, VARIANCES)
        scale = np.sum(w_re * (EFFECTS - mu) ** 2) / 4
        assert res.hksj
        assert res.se == pytest.approx(se * math.sqrt(scale), rel=1e-10)
        half = stats.norm.ppf(0.975) * res.se
        assert res.ci.upper == pytest.approx(res.pooled + half, rel=1e-6)
        assert res.p_value == pytest.approx(2 * stats.norm.sf(abs(res.z)), rel=1e-5)

    def test_hksj_known_interval(self):
        res = meta_analysis_random_effects(
            [0.1, 0.4, 0.6, 0.2], [0.04, 0.02, 0.05, 0.03], hksj=True,
        )
        assert res.ci.lower == pytest.approx(0.1258, abs=1e-3)
        assert res.ci.upper == pytest.approx(0.5134, abs=1e-3)

    def test_hksj_t_variant(self):
        y, v = [0.1, 0.4, 0.6, 0.2], [0.04, 0.02, 0.05, 0.03]
        res = meta_analysis_random_effects(y, v, hksj=True, hksj_t=True)
        assert res.se == pytest.approx(meta_analysis_random_effects(y, v, hksj=True).se)
        half = stats.t.ppf(0.975, 3) * res.se
        assert res.ci.upper == pytest.approx(res.pooled + half, rel=1e-6)
        assert res.ci.lower == pytest.approx(0.0049, abs=1e-3)
        assert res.p_value == pytest.approx(2 * stats.t.sf(abs(res.z), 3), rel=1e-5)

    def test_hksj_t_needs_hksj(self):
        plain = meta_analysis_random_effects(EFFECTS, VARIANCES)
        res = meta_analysis_random_effects(EFFECTS, VARIANCES, hksj_t=True)
        assert res.ci.upper == pytest.approx(plain.ci.upper)
        assert not res.hksj

    def test_hksj_ignored_for_single_study(self):
        assert not meta_analysis_random_effects([0.3], [0.04], hksj=True).hksj

    def test_summary(self):
        text = meta_analysis_random_effects(EFFECTS, VARIANCES, hksj=True).summary()
        assert "DerSimonian-Laird with HKSJ" in text
        assert "k = 5" in text


class TestTables:
    """Tests for meta_analysis_tables."""

    TABLES = [(10, 20, 5, 25), (20, 10, 10, 20), (15, 15, 8, 22)]

    def test_odds_ratio(self):
        res = meta_analysis_tables(self.TABLES)
        assert res.measure == "OR"
        assert res.effects[0] == pytest.approx(math.log(2.5))
        assert res.variances[0] == pytest.approx(1 / 10 + 1 / 20 + 1 / 5 + 1 / 25)
        assert res.mh is not None
        assert res.mh.measure == "OR"
        assert res.iv.k == 3

    def test_risk_ratio(self):
        res = meta_analysis_tables(self.TABLES, measure="RR")
        assert res.effects[0] == pytest.approx(math.log(2.0))
        assert res.mh.measure == "RR"

    def test_risk_difference_has_no_mh(self):
        res = meta_analysis_tables(self.TABLES, measure="RD")
        assert res.mh is None
        assert res.effects[0] == pytest.approx(10 / 30 - 5 / 30)
        assert res.variances[0] == pytest.approx(10 * 20 / 30 ** 3 + 5 * 25 / 30 ** 3)

    def test_unknown_measure(self, caplog):
        caplog.set_level(logging.WARNING, logger="pyclinstats")
        assert meta_analysis_tables(self.TABLES, measure="HR") is None
        assert "unsupported measure" in caplog.text

    def test_zero_cell_propagates_nan(self):
        res = meta_analysis_tables([(0, 20, 5, 25), (20, 10, 10, 20)])
        assert not math.isfinite(res.effects[0])
        assert math.isnan(res.iv.pooled)
