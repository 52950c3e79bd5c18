"""
PyInfer simulation-based hypothesis tests.

Generates a null distribution by resampling under a point null and
evaluates the observed statistic's p-value against it.

Usage:
    from pyinfer.resample import run_test, get_p_value, NullTest

    # Mean: bootstrap from the sample recentered on the null value
    result = run_test(x, null_value=200, stat_kind="mean",
                      replicate_count=10000, rng_seed=42)

    # Proportion: draw from Bernoulli(p0)
    result = run_test(labels, null_value=0.10, stat_kind="prop",
                      success_label="died", direction="less", rng_seed=42)

    result.null_dist, result.observed_stat, result.p_value
"""

from pyinfer.resample.solvers import run_test, get_p_value
from pyinfer.resample.design import NullTestDesign
from pyinfer.resample.solution import NullTestSolution
from pyinfer.resample.workflow import NullTest
from pyinfer.resample._common import NullParams

__all__ = [
    "run_test",
    "get_p_value",
    "NullTest",
    "NullTestDesign",
    "NullTestSolution",
    "NullParams",
]
