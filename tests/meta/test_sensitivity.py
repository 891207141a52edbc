"""Tests for leave-one-out, cumulative and subgroup analyses."""

import math

import numpy as np
import pytest

from pyclinstats.meta import (
    cumulative_meta_analysis,
    leave_one_out,
    meta_analysis_random_effects,
    subgroup_analysis,
)

EFFECTS = np.array([0.10, 0.30, 0.35, 0.65, 0.45])
VARIANCES = np.array([0.010, 0.020, 0.015, 0.050, 0.030])


class TestLeaveOneOut:
    """Tests for leave_one_out."""

    def test_one_result_per_study(self):
        res = leave_one_out(EFFECTS, VARIANCES)
        assert [r.excluded for r in res] == [0, 1, 2, 3, 4]

    def test_matches_reduced_pooling(self):
        res = leave_one_out(EFFECTS, VARIANCES)
        expected = meta_analysis_random_effects(EFFECTS[1:], VARIANCES[1:])
        assert res[0].pooled == pytest.approx(expected.pooled)
        assert res[0].tau2 == pytest.approx(expected.tau2)
        assert res[0].i2 == pytest.approx(expected.i2)

    def test_dropping_outlier_moves_estimate(self):
        res = leave_one_out(EFFECTS, VARIANCES)
        full = meta_analysis_random_effects(EFFECTS, VARIANCES).pooled
        assert res[0].pooled > full

    def test_needs_two_studies(self):
        with pytest.raises(ValueError, match="at least 2"):
            leave_one_out([0.1], [0.01])


class TestCumulative:
    """Tests for cumulative_meta_analysis."""

    def test_first_step_is_single_study(self):
        res = cumulative_meta_analysis(EFFECTS, VARIANCES)
        first = res[0]
        assert first.n_studies == 1
        assert first.pooled == pytest.approx(0.10)
        assert first.i2 == 0.0
        assert first.ci.upper - first.ci.lower == pytest.approx(2 * 1.959964 * 0.1, rel=1e-6)

    def test_last_step_is_full_analysis(self):
        res = cumulative_meta_analysis(EFFECTS, VARIANCES)
        full = meta_analysis_random_effects(EFFECTS, VARIANCES)
        assert res[-1].n_studies == 5
        assert res[-1].pooled == pytest.approx(full.pooled)

    def test_default_labels(self):
        res = cumulative_meta_analysis(EFFECTS, VARIANCES)
        assert [r.label for r in res] == [f"Study {i}" for i in range(1, 6)]

    def test_custom_labels(self):
        labels = ["2001", "2004", "2008", "2012", "2019"]
        res = cumulative_meta_analysis(EFFECTS, VARIANCES, labels=labels)
        assert [r.label for r in res] == labels

    def test_label_length_mismatch(self):
        with pytest.raises(ValueError, match="labels"):
            cumulative_meta_analysis(EFFECTS, VARIANCES, labels=["a"])


class TestSubgroup:
    """Tests for subgroup_analysis."""

    def test_partition_of_q(self):
        groups = ["low", "low", "high", "high", "low"]
        res = subgroup_analysis(EFFECTS, VARIANCES, groups)
        assert list(res.subgroups) == ["low", "high"]
        assert res.q_within + res.q_between == pytest.approx(res.overall.q)
        assert res.df_between == 1

    def test_homogeneous_subgroups(self):
        """Identical effects within each subgroup leave all Q between."""
        y = [0.2, 0.2, 0.8, 0.8]
        v = [0.02, 0.02, 0.02, 0.02]
        res = subgroup_analysis(y, v, ["a", "a", "b", "b"])
        assert res.q_within == pytest.approx(0.0, abs=1e-12)
        assert res.q_between == pytest.approx(res.overall.q)
        assert res.subgroups["a"].pooled == pytest.approx(0.2)
        assert res.subgroups["b"].pooled == pytest.approx(0.8)
        assert 0.0 <= res.p_between < 0.05

    def test_single_subgroup(self):
        res = subgroup_analysis(EFFECTS, VARIANCES, ["x"] * 5)
        assert res.df_between == 0
        assert res.q_between == pytest.approx(0.0, abs=1e-12)
        assert math.isnan(res.p_between)

    def test_group_length_mismatch(self):
        with pytest.raises(ValueError, match="groups"):
            subgroup_analysis(EFFECTS, VARIANCES, ["a", "b"])

    def test_summary(self):
        res = subgroup_analysis(EFFECTS, VARIANCES, ["a", "a", "b", "b", "a"])
        assert "Q between" in res.summary()
