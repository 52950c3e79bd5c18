"""
P-value evaluation against a simulated null distribution.

The p-value is the plain tail fraction of the null distribution:

    less:      #{t <= obs} / R
    greater:   #{t >= obs} / R
    two-sided: min(1, 2 * min(#{t <= obs}, #{t >= obs}) / R)

No +1 correction is applied, so a p-value of exactly 0 is possible and
means "smaller than 1/R".
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pyinfer.core.exceptions import ValidationError
from pyinfer.resample._common import (
    LESS, GREATER, VALID_DIRECTIONS, canonical_direction,
)


def tail_counts(
    null_dist: NDArray[np.floating[Any]], observed: float,
) -> tuple[int, int]:
    """Number of null values <= observed and >= observed."""
    n_le = int(np.count_nonzero(null_dist <= observed))
    n_ge = int(np.count_nonzero(null_dist >= observed))
    return n_le, n_ge


def tail_count(n_le: int, n_ge: int, direction: str) -> int:
    """Count in the tail that determines the p-value."""
    if direction == LESS:
        return n_le
    if direction == GREATER:
        return n_ge
    return min(n_le, n_ge)


def p_value_from_counts(n_le: int, n_ge: int, R: int, direction: str) -> float:
    """P-value from tail counts."""
    if direction == LESS:
        return n_le / R
    if direction == GREATER:
        return n_ge / R
    return min(1.0, 2.0 * min(n_le, n_ge) / R)


def get_p_value(
    null_dist: Iterable[float],
    observed_stat: float,
    direction: str = "two-sided",
) -> float:
    """
    P-value of an observed statistic against any null distribution.

    Parameters
    ----------
    null_dist : iterable of float
        Simulated statistics.
    observed_stat : float
        Statistic computed on the real sample.
    direction : str
        "less", "greater" or "two-sided" (aliases "left", "right",
        "two.sided", "both" are accepted).

    Returns
    -------
    float
        Tail fraction in [0, 1].

    Raises
    ------
    ValidationError
        If the distribution is empty or contains non-finite values,
        or the direction is unknown.
    """
    canon = canonical_direction(direction)
    if canon is None:
        raise ValidationError(
            f"direction: must be one of {VALID_DIRECTIONS}, got {direction!r}",
            "direction",
        )

    if not isinstance(null_dist, np.ndarray):
        null_dist = list(null_dist)
    dist = np.asarray(null_dist, dtype=np.float64).ravel()
    if dist.size == 0:
        raise ValidationError(
            "null_dist: requires at least 1 value, got 0", "null_dist"
        )
    if not np.all(np.isfinite(dist)):
        raise ValidationError(
            "null_dist: contains non-finite values", "null_dist"
        )

    n_le, n_ge = tail_counts(dist, float(observed_stat))
    return p_value_from_counts(n_le, n_ge, dist.size, canon)


def mc_standard_error(p_value: float, R: int) -> float:
    """Monte Carlo standard error of a simulated p-value, sqrt(p(1-p)/R)."""
    return float(np.sqrt(p_value * (1.0 - p_value) / R))


def clopper_pearson(k: int, R: int, conf_level: float) -> tuple[float, float]:
    """
    Exact binomial interval for a tail probability estimated as k / R.

    Uses the beta-quantile form of the Clopper-Pearson interval.
    """
    alpha = 1.0 - conf_level
    lower = 0.0 if k == 0 else float(sp_stats.beta.ppf(alpha / 2, k, R - k + 1))
    upper = 1.0 if k == R else float(sp_stats.beta.ppf(1 - alpha / 2, k + 1, R - k))
    return lower, upper
