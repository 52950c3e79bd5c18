"""
Tests for NullTestSolution accessors, renderer helpers and summary.
"""

import numpy as np
import pandas as pd
import pytest

from pyinfer import ValidationError, run_test


@pytest.fixture
def mean_result(weights_sample):
    return run_test(weights_sample, null_value=205, stat_kind="mean",
                    replicate_count=2000, rng_seed=21)


@pytest.fixture
def prop_result(outcome_labels):
    return run_test(outcome_labels, null_value=0.10, stat_kind="prop",
                    success_label="died", direction="less",
                    replicate_count=1000, rng_seed=21)


class TestAccessors:

    def test_payload_fields(self, mean_result):
        assert mean_result.stat == "mean"
        assert mean_result.null_value == 205.0
        assert mean_result.mode == "bootstrap_recentered"
        assert mean_result.n == 30
        assert mean_result.seed == 21
        assert mean_result.backend_name == "cpu_null"
        assert mean_result.timing['total_seconds'] >= 0.0

    def test_info(self, prop_result):
        assert prop_result.info['mode'] == "null_model_draw"
        assert prop_result.info['n'] == 62
        assert prop_result.info['entropy'] == 21


class TestMonteCarloError:

    def test_mc_se(self, prop_result):
        p = prop_result.p_value
        assert prop_result.mc_se == pytest.approx(np.sqrt(p * (1 - p) / 1000))

    def test_interval_contains_p_value(self, mean_result, prop_result):
        for result in (mean_result, prop_result):
            lo, hi = result.p_value_interval()
            assert 0.0 <= lo <= result.p_value <= hi <= 1.0

    def test_wider_at_higher_confidence(self, prop_result):
        lo95, hi95 = prop_result.p_value_interval(0.95)
        lo99, hi99 = prop_result.p_value_interval(0.99)
        assert lo99 <= lo95 and hi99 >= hi95

    def test_bad_conf_level(self, prop_result):
        with pytest.raises(ValidationError, match="conf_level"):
            prop_result.p_value_interval(1.5)


class TestRendererHelpers:

    def test_to_dataframe(self, mean_result):
        df = mean_result.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["replicate", "stat"]
        assert len(df) == 2000
        assert df["replicate"].iloc[0] == 1
        assert df["replicate"].iloc[-1] == 2000
        np.testing.assert_array_equal(df["stat"].to_numpy(), mean_result.null_dist)

    def test_extreme_mask_one_sided(self, prop_result):
        mask = prop_result.extreme_mask()
        assert mask.dtype == bool
        assert mask.shape == (1000,)
        assert mask.mean() == pytest.approx(prop_result.p_value)

    def test_extreme_mask_two_sided_mirrors_tail(self):
        dist_source = np.arange(1.0, 41.0)
        result = run_test(dist_source, null_value=19.0, stat_kind="mean",
                          replicate_count=3000, rng_seed=3)
        mask = result.extreme_mask()
        dist = result.null_dist
        # observed 20.5 lies above the null center of 19
        upper = dist >= result.observed_stat
        assert mask[upper].all()
        assert mask[~upper].sum() == upper.sum()
        assert mask.mean() == pytest.approx(result.p_value)

    def test_extreme_mask_two_sided_matches_p_value(self, outcome_labels):
        result = run_test(outcome_labels, null_value=0.10, stat_kind="prop",
                          success_label="died", replicate_count=10000,
                          rng_seed=8)
        mask = result.extreme_mask()
        assert mask[result.null_dist <= result.observed_stat].all()
        assert mask.mean() == pytest.approx(result.p_value)


class TestDisplay:

    def test_summary_mentions_key_values(self, mean_result):
        text = mean_result.summary()
        assert "SIMULATION-BASED TEST (bootstrap_recentered)" in text
        assert "observed mean" in text
        assert "two-sided" in text
        assert "R = 2000" in text

    def test_summary_shows_success_label(self, prop_result):
        assert "success: 'died'" in prop_result.summary()

    def test_repr(self, mean_result):
        text = repr(mean_result)
        assert text.startswith("NullTestSolution(R=2000")
        assert "stat='mean'" in text
