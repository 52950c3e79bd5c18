"""
Tests for the GPU backend.

Built-in statistics run on device; user callables fall back to the CPU
backend. GPU replicates come from torch's generator, so they are checked
for shape, reproducibility and agreement in distribution with the CPU
backend rather than for exact equality.

Skipped if no GPU (CUDA or MPS) is available.
"""

import numpy as np
import pytest

from pyinfer import run_test


@pytest.fixture
def gpu_available():
    """Skip if no GPU is available."""
    try:
        import torch
        has_cuda = torch.cuda.is_available()
        has_mps = hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()
        if not (has_cuda or has_mps):
            pytest.skip("No GPU available")
        return 'cuda' if has_cuda else 'mps'
    except ImportError:
        pytest.skip("PyTorch not installed")


class TestGPUBootstrap:

    def test_mean_shape_and_name(self, gpu_available, weights_sample):
        result = run_test(weights_sample, null_value=200, stat_kind="mean",
                          replicate_count=500, rng_seed=42, backend='gpu')
        assert result.null_dist.shape == (500,)
        assert result.null_dist.dtype == np.float64
        assert result.observed_stat == pytest.approx(209.0)
        assert 'gpu' in result.backend_name
        assert result.info['device'] == gpu_available

    def test_reproducible(self, gpu_available, weights_sample):
        kwargs = dict(null_value=200, stat_kind="median", replicate_count=300,
                      rng_seed=7, backend='gpu')
        r1 = run_test(weights_sample, **kwargs)
        r2 = run_test(weights_sample, **kwargs)
        np.testing.assert_array_equal(r1.null_dist, r2.null_dist)

    def test_centered_on_null(self, gpu_available, weights_sample):
        result = run_test(weights_sample, null_value=200, stat_kind="mean",
                          replicate_count=2000, rng_seed=1, backend='gpu')
        assert np.mean(result.null_dist) == pytest.approx(200.0, abs=1.0)

    def test_p_value_close_to_cpu(self, gpu_available, weights_sample):
        kwargs = dict(null_value=200, stat_kind="mean", replicate_count=4000,
                      rng_seed=3)
        gpu = run_test(weights_sample, backend='gpu', **kwargs)
        cpu = run_test(weights_sample, **kwargs)
        assert abs(gpu.p_value - cpu.p_value) < 0.02


class TestGPUDraw:

    def test_prop_values_exact_fractions(self, gpu_available, outcome_labels):
        result = run_test(outcome_labels, null_value=0.10, stat_kind="prop",
                          success_label="died", direction="greater",
                          replicate_count=2000, rng_seed=5, backend='gpu')
        counts = np.round(result.null_dist * 62)
        np.testing.assert_array_equal(result.null_dist, counts / 62)
        # replicates with exactly 3 successes tie with the observed value
        expected = np.mean(result.null_dist >= 3 / 62)
        assert result.p_value == expected

    def test_prop_values_on_grid(self, gpu_available, outcome_labels):
        result = run_test(outcome_labels, null_value=0.10, stat_kind="prop",
                          success_label="died", direction="less",
                          replicate_count=500, rng_seed=42, backend='gpu')
        counts = result.null_dist * 62
        np.testing.assert_allclose(counts, np.round(counts), atol=1e-4)
        assert 0.0 <= result.p_value <= 1.0


class TestGPUFallback:

    def test_callable_falls_back_to_cpu(self, gpu_available, weights_sample):
        midrange = lambda v: (np.min(v) + np.max(v)) / 2
        kwargs = dict(null_value=200, stat_kind=midrange, replicate_count=200,
                      rng_seed=42)
        gpu = run_test(weights_sample, backend='gpu', **kwargs)
        cpu = run_test(weights_sample, **kwargs)
        assert gpu.backend_name.endswith("(cpu_fallback)")
        np.testing.assert_array_equal(gpu.null_dist, cpu.null_dist)
