"""
Input validation utilities for PyInfer.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any, Iterable

from pyinfer.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a numeric numpy array.

    Accepts any array-like and converts to float64. Rejects inputs that
    result in object, string or other non-numeric dtypes.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}", name) from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or "
            f"non-numeric data",
            name,
        )

    if not np.issubdtype(result.dtype, np.number) and result.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data",
            name,
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)",
            name,
        )


def check_1d(array: NDArray, name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}",
            name,
        )


def check_min_samples(array: NDArray, min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} observations, got {n}",
            name,
        )


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1 and return it as int.

    Booleans are rejected even though they subclass int.

    Raises:
        ValidationError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: must be a positive integer, got {value!r}", name
        )
    if value < 1:
        raise ValidationError(f"{name}: must be >= 1, got {value}", name)
    return int(value)


def check_nonnegative_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 0 and return it as int.

    Raises:
        ValidationError: If value is not a non-negative integer
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: must be a non-negative integer, got {value!r}", name
        )
    if value < 0:
        raise ValidationError(f"{name}: must be >= 0, got {value}", name)
    return int(value)


def check_finite_scalar(value: Any, name: str) -> float:
    """
    Verify value is a finite real number and return it as float.

    Raises:
        ValidationError: If value is not real or not finite
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(
            f"{name}: must be a real number, got {value!r}", name
        )
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name}: must be finite, got {value}", name)
    return value


def check_open_unit_interval(value: float, name: str) -> float:
    """
    Verify 0 < value < 1.

    The endpoints are excluded: a null proportion of 0 or 1 collapses the
    simulated null distribution to a point mass.

    Raises:
        ValidationError: If value is outside (0, 1)
    """
    if not (0.0 < value < 1.0):
        raise ValidationError(
            f"{name}: must lie strictly between 0 and 1, got {value}", name
        )
    return value


def check_choice(value: Any, choices: Iterable[str], name: str) -> str:
    """
    Verify value is one of the allowed strings.

    Raises:
        ValidationError: If value is not among `choices`
    """
    choices = tuple(choices)
    if value not in choices:
        raise ValidationError(
            f"{name}: must be one of {choices}, got {value!r}", name
        )
    return value


def missing_mask(array: NDArray) -> NDArray[np.bool_]:
    """
    Boolean mask of missing entries.

    Numeric arrays treat NaN as missing. Object arrays defer to
    pandas.isna, which recognises None, NaN, NaT and pd.NA.
    """
    if array.dtype != object and np.issubdtype(array.dtype, np.floating):
        return np.isnan(array)
    if array.dtype != object:
        return np.zeros(array.shape, dtype=bool)
    import pandas as pd
    return np.asarray(pd.isna(array), dtype=bool)
