"""
Design class for simulation-based tests.

NullTestDesign encapsulates every input a backend needs to generate a
null distribution and evaluate a p-value. Immutable, validated once at
construction; no backend re-checks its inputs.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyinfer.core.datasource import DataSource
from pyinfer.core.exceptions import ValidationError
from pyinfer.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_finite,
    check_finite_scalar,
    check_min_samples,
    check_nonnegative_int,
    check_open_unit_interval,
    check_positive_int,
    missing_mask,
)
from pyinfer.resample._common import (
    BOOTSTRAP,
    CATEGORICAL,
    CATEGORICAL_STATS,
    DRAW,
    NUMERIC,
    VALID_DIRECTIONS,
    VALID_MODES,
    VALID_RESPONSE_KINDS,
    VALID_STATS,
    StatFunction,
    canonical_direction,
    canonical_mode,
    compute_stat,
    default_mode,
    stat_label,
)


def _extract_sample(sample: Any, response: str | None) -> tuple[NDArray, str]:
    """Pull the response column out of a table, or take the sample as is."""
    import pandas as pd

    if isinstance(sample, pd.DataFrame):
        sample = DataSource.from_dataframe(sample)

    if isinstance(sample, DataSource):
        if response is None:
            raise ValidationError(
                f"response: a column name is required when sampling from a "
                f"table; available: {sorted(sample.keys())}",
                "response",
            )
        if response not in sample:
            raise ValidationError(
                f"response: no column {response!r}; available: "
                f"{sorted(sample.keys())}",
                "response",
            )
        return sample[response], response

    if response is not None:
        raise ValidationError(
            "response: only valid when the sample is a DataSource or DataFrame",
            "response",
        )

    if isinstance(sample, pd.Series):
        name = str(sample.name) if sample.name is not None else "x"
        if pd.api.types.is_numeric_dtype(sample) and not pd.api.types.is_bool_dtype(sample):
            return sample.to_numpy(dtype=np.float64, na_value=np.nan), name
        return sample.to_numpy(dtype=object), name

    if isinstance(sample, (str, bytes)):
        raise ValidationError(
            "sample: expected a collection of observations, got a string",
            "sample",
        )
    if isinstance(sample, np.ndarray):
        return sample, "x"
    try:
        items = list(sample)
        values = np.asarray(items)
        if values.dtype.kind in "US":
            # keep mixed labels such as ["a", 1] as given, not as strings
            values = np.asarray(items, dtype=object)
        return values, "x"
    except (ValueError, TypeError) as e:
        raise ValidationError(f"sample: cannot convert to array: {e}", "sample") from e


def _infer_kind(values: NDArray) -> str:
    if values.dtype == object:
        is_number = (
            isinstance(v, numbers.Real) and not isinstance(v, (bool, np.bool_))
            for v in values
        )
        return NUMERIC if all(is_number) else CATEGORICAL
    if values.dtype != np.bool_ and np.issubdtype(values.dtype, np.number):
        return NUMERIC
    return CATEGORICAL


@dataclass(frozen=True)
class NullTestDesign:
    """
    Frozen design for a one-sample simulation-based test.

    Attributes:
        data: Values resampled by the backend, shape (n,). The numeric
            sample for mean/median tests; the 0/1 success indicator for
            proportion tests.
        response_kind: "numeric" or "categorical".
        success_label: Category counted as a success (categorical only).
        null_value: Hypothesized population parameter.
        stat: "mean", "median", "prop", or a callable on a 1D array.
        direction: "less", "greater", or "two-sided".
        R: Number of replicates.
        mode: "bootstrap_recentered" or "null_model_draw".
        seed: Random seed, or None for fresh entropy.
        n_missing: Observations dropped as missing before the test.
        data_name: Name of the response, for display.
    """
    data: NDArray[np.floating[Any]]
    response_kind: str
    success_label: Any
    null_value: float
    stat: str | StatFunction
    direction: str
    R: int
    mode: str
    seed: int | None
    n_missing: int
    data_name: str

    @property
    def n(self) -> int:
        return int(self.data.shape[0])

    @property
    def stat_name(self) -> str:
        return stat_label(self.stat)

    @property
    def shifted_data(self) -> NDArray[np.floating[Any]]:
        """
        Sample moved so that its statistic equals the null value.

        Each observation is shifted by null_value - stat(data). Only
        meaningful for bootstrap_recentered designs.
        """
        return self.data + (self.null_value - compute_stat(self.stat, self.data))

    @classmethod
    def for_test(
        cls,
        sample,
        *,
        null_value: float,
        stat_kind: str | StatFunction,
        response_kind: str | None = None,
        success_label: Any = None,
        direction: str = "two-sided",
        replicate_count: int = 1000,
        resample_mode: str | None = None,
        rng_seed: int | None = None,
        response: str | None = None,
    ) -> NullTestDesign:
        """
        Create a validated design.

        Args:
            sample: 1D array-like of observations, or a DataSource /
                pandas DataFrame together with `response`.
            null_value: Hypothesized mean, median or proportion.
            stat_kind: "mean", "median", "prop", or a callable mapping a
                1D numeric array to a scalar.
            response_kind: "numeric" or "categorical". Inferred from the
                sample's dtype when None.
            success_label: Category counted as a success. Required for
                proportion tests.
            direction: "less", "greater" or "two-sided".
            replicate_count: Number of simulated resamples. Must be >= 1.
            resample_mode: "bootstrap_recentered" or "null_model_draw".
                Defaults to the mode the statistic calls for.
            rng_seed: Integer seed. None draws fresh entropy.
            response: Column name when `sample` is a table.

        Returns:
            Validated NullTestDesign.

        Raises:
            ValidationError: If any input is invalid.
        """
        R = check_positive_int(replicate_count, "replicate_count")

        canon_direction = canonical_direction(direction)
        if canon_direction is None:
            raise ValidationError(
                f"direction: must be one of {VALID_DIRECTIONS}, got {direction!r}",
                "direction",
            )

        if not callable(stat_kind):
            check_choice(stat_kind, VALID_STATS, "stat_kind")
        stat_is_categorical = stat_kind in CATEGORICAL_STATS

        if resample_mode is None:
            mode = default_mode(stat_kind)
        else:
            mode = canonical_mode(resample_mode)
            if mode is None:
                raise ValidationError(
                    f"resample_mode: must be one of {VALID_MODES}, "
                    f"got {resample_mode!r}",
                    "resample_mode",
                )
        if stat_is_categorical and mode != DRAW:
            raise ValidationError(
                f"resample_mode: a proportion test simulates from the null "
                f"model ({DRAW!r}); {mode!r} cannot enforce a null proportion",
                "resample_mode",
            )
        if not stat_is_categorical and mode != BOOTSTRAP:
            raise ValidationError(
                f"resample_mode: stat_kind {stat_label(stat_kind)!r} requires "
                f"{BOOTSTRAP!r}, got {mode!r}",
                "resample_mode",
            )

        if rng_seed is not None:
            rng_seed = check_nonnegative_int(rng_seed, "rng_seed")

        values, data_name = _extract_sample(sample, response)
        check_1d(values, "sample")

        missing = missing_mask(values)
        n_missing = int(missing.sum())
        if n_missing:
            values = values[~missing]
        check_min_samples(values, 1, "sample")

        if response_kind is None:
            kind = _infer_kind(values)
        else:
            kind = check_choice(response_kind, VALID_RESPONSE_KINDS, "response_kind")

        if stat_is_categorical and kind != CATEGORICAL:
            raise ValidationError(
                "stat_kind: 'prop' requires a categorical response, got a "
                "numeric one (pass response_kind='categorical' to treat the "
                "values as labels)",
                "stat_kind",
            )
        if not stat_is_categorical and kind != NUMERIC:
            raise ValidationError(
                f"stat_kind: {stat_label(stat_kind)!r} requires a numeric "
                f"response, got a categorical one",
                "stat_kind",
            )

        if kind == NUMERIC:
            if success_label is not None:
                raise ValidationError(
                    "success_label: only valid for a categorical response",
                    "success_label",
                )
            if values.dtype == object and _infer_kind(values) == NUMERIC:
                values = values.astype(np.float64)
            data = check_array(values, "sample").astype(np.float64, copy=True)
            check_finite(data, "sample")
            null = check_finite_scalar(null_value, "null_value")
            if callable(stat_kind):
                try:
                    check_finite_scalar(compute_stat(stat_kind, data), "stat_kind")
                except ValidationError as e:
                    raise ValidationError(
                        f"stat_kind: callable must return a finite scalar on "
                        f"the sample ({e})",
                        "stat_kind",
                    ) from e
        else:
            if success_label is None:
                raise ValidationError(
                    "success_label: required for a categorical response",
                    "success_label",
                )
            indicator = np.fromiter(
                (v == success_label for v in values),
                dtype=bool,
                count=values.shape[0],
            )
            if not indicator.any():
                observed = sorted({str(v) for v in values})
                raise ValidationError(
                    f"success_label: {success_label!r} is not an observed "
                    f"category; observed: {observed}",
                    "success_label",
                )
            data = indicator.astype(np.float64)
            null = check_open_unit_interval(
                check_finite_scalar(null_value, "null_value"), "null_value",
            )

        data.setflags(write=False)

        return cls(
            data=data,
            response_kind=kind,
            success_label=success_label,
            null_value=null,
            stat=stat_kind,
            direction=canon_direction,
            R=R,
            mode=mode,
            seed=rng_seed,
            n_missing=n_missing,
            data_name=data_name,
        )
