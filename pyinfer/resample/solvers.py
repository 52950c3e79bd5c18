"""
Solver dispatch for simulation-based tests.

Provides run_test(), the single entry point that validates a full test
configuration, generates the null distribution and evaluates the
p-value. Also re-exports get_p_value() for distributions produced
elsewhere.
"""

from __future__ import annotations

import warnings
from typing import Any, Literal

from numpy.typing import ArrayLike

from pyinfer.core.compute.device import detect_gpu
from pyinfer.core.exceptions import ValidationError
from pyinfer.core.validation import check_positive_int
from pyinfer.resample._common import StatFunction
from pyinfer.resample._pvalue import get_p_value  # re-export
from pyinfer.resample.backends.cpu import CPUNullBackend
from pyinfer.resample.design import NullTestDesign
from pyinfer.resample.solution import NullTestSolution


BackendChoice = Literal['cpu', 'gpu', 'auto']


def _get_backend(backend: str = 'cpu', n_jobs: int = 1):
    """
    Select backend for null distribution generation.

    'auto' uses a GPU when one is detected and the CPU otherwise.
    """
    if backend == 'cpu':
        return CPUNullBackend(n_jobs=n_jobs)
    if backend == 'auto':
        if detect_gpu() is None:
            return CPUNullBackend(n_jobs=n_jobs)
        backend = 'gpu'
    if backend == 'gpu':
        from pyinfer.resample.backends.gpu import GPUNullBackend
        return GPUNullBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu', 'gpu' or 'auto'.",
        "backend",
    )


def run_test(
    sample: ArrayLike | NullTestDesign | Any,
    *,
    null_value: float | None = None,
    stat_kind: str | StatFunction | None = None,
    response_kind: str | None = None,
    success_label: Any = None,
    direction: str = "two-sided",
    replicate_count: int = 1000,
    resample_mode: str | None = None,
    rng_seed: int | None = None,
    response: str | None = None,
    n_jobs: int = 1,
    backend: BackendChoice = 'cpu',
) -> NullTestSolution:
    """
    Simulation-based test of a single mean, median or proportion.

    Parameters
    ----------
    sample : array-like, DataSource, DataFrame or NullTestDesign
        Observations. Numeric for mean/median, labels for prop.
        Tables require `response`. A pre-built NullTestDesign skips
        validation; the other test arguments must then be left at their
        defaults.
    null_value : float
        Hypothesized population mean, median or proportion. A
        proportion must lie strictly inside (0, 1).
    stat_kind : str or callable
        "mean", "median", "prop", or a callable on a 1D numeric array.
    response_kind : str or None
        "numeric" or "categorical". Inferred from the sample if None.
    success_label : any
        Category counted as a success. Required for prop.
    direction : str
        "less", "greater" or "two-sided" (default).
    replicate_count : int
        Number of simulated resamples. Default 1000.
    resample_mode : str or None
        "bootstrap_recentered" (mean/median) or "null_model_draw"
        (prop). Defaults to the mode the statistic calls for.
    rng_seed : int or None
        Seed. The whole run is reproducible for a fixed seed.
    response : str or None
        Column to test when `sample` is a table.
    n_jobs : int
        CPU worker threads. Does not change the result.
    backend : str
        'cpu' (default), 'gpu', or 'auto'.

    Returns
    -------
    NullTestSolution
        null_dist, observed_stat, p_value and diagnostics.

    Raises
    ------
    ValidationError
        If any argument is invalid. Raised before any simulation.
    """
    if isinstance(sample, NullTestDesign):
        given = {
            name: value
            for name, value, default in (
                ("null_value", null_value, None),
                ("stat_kind", stat_kind, None),
                ("response_kind", response_kind, None),
                ("success_label", success_label, None),
                ("direction", direction, "two-sided"),
                ("replicate_count", replicate_count, 1000),
                ("resample_mode", resample_mode, None),
                ("rng_seed", rng_seed, None),
                ("response", response, None),
            )
            if value is not default and value != default
        }
        if given:
            names = sorted(given)
            raise ValidationError(
                f"{names[0]}: a NullTestDesign already fixes the test "
                f"settings; do not also pass {names}",
                names[0],
            )
        design = sample
    else:
        if null_value is None:
            raise ValidationError("null_value: required", "null_value")
        if stat_kind is None:
            raise ValidationError("stat_kind: required", "stat_kind")
        design = NullTestDesign.for_test(
            sample,
            null_value=null_value,
            stat_kind=stat_kind,
            response_kind=response_kind,
            success_label=success_label,
            direction=direction,
            replicate_count=replicate_count,
            resample_mode=resample_mode,
            rng_seed=rng_seed,
            response=response,
        )

    n_jobs = check_positive_int(n_jobs, "n_jobs")
    be = _get_backend(backend, n_jobs=n_jobs)
    result = be.solve(design)

    for message in result.warnings:
        warnings.warn(message, UserWarning, stacklevel=2)

    return NullTestSolution(_result=result, _design=design)


__all__ = ["run_test", "get_p_value"]
