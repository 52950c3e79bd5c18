"""
Common types and vocabulary for simulation-based tests.

NullParams is the parameter payload wrapped by Result[P] and exposed
through NullTestSolution. The name tables below map every accepted
spelling of a direction or resampling mode onto its canonical form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray


LESS = "less"
GREATER = "greater"
TWO_SIDED = "two-sided"
VALID_DIRECTIONS = (LESS, GREATER, TWO_SIDED)

_DIRECTION_ALIASES = {
    "less": LESS,
    "left": LESS,
    "greater": GREATER,
    "right": GREATER,
    "two-sided": TWO_SIDED,
    "two.sided": TWO_SIDED,
    "two_sided": TWO_SIDED,
    "both": TWO_SIDED,
}

BOOTSTRAP = "bootstrap_recentered"
DRAW = "null_model_draw"
VALID_MODES = (BOOTSTRAP, DRAW)

_MODE_ALIASES = {
    "bootstrap_recentered": BOOTSTRAP,
    "bootstrap": BOOTSTRAP,
    "null_model_draw": DRAW,
    "draw": DRAW,
    "simulate": DRAW,
}

NUMERIC = "numeric"
CATEGORICAL = "categorical"
VALID_RESPONSE_KINDS = (NUMERIC, CATEGORICAL)

NUMERIC_STATS = ("mean", "median")
CATEGORICAL_STATS = ("prop",)
VALID_STATS = NUMERIC_STATS + CATEGORICAL_STATS

StatFunction = Callable[[NDArray[np.floating[Any]]], float]


def canonical_direction(direction: str) -> str | None:
    """Canonical direction name, or None if unrecognised."""
    if not isinstance(direction, str):
        return None
    return _DIRECTION_ALIASES.get(direction.lower())


def canonical_mode(mode: str) -> str | None:
    """Canonical resampling mode name, or None if unrecognised."""
    if not isinstance(mode, str):
        return None
    return _MODE_ALIASES.get(mode.lower())


def default_mode(stat: str | StatFunction) -> str:
    """Resampling mode implied by the statistic."""
    return DRAW if stat == "prop" else BOOTSTRAP


def compute_stat(stat: str | StatFunction, values: NDArray) -> NDArray | float:
    """
    Apply a statistic along the last axis.

    A 1D input gives a float; a 2D input of shape (R, n) gives one value
    per row. `prop` expects a 0/1 success indicator.
    """
    if stat in ("mean", "prop"):
        out = np.mean(values, axis=-1)
    elif stat == "median":
        out = np.median(values, axis=-1)
    elif values.ndim == 1:
        return float(stat(values))
    else:
        out = np.fromiter(
            (stat(row) for row in values),
            dtype=np.float64,
            count=values.shape[0],
        )
    return float(out) if values.ndim == 1 else out


def stat_label(stat: str | StatFunction) -> str:
    """Display name of a statistic."""
    if isinstance(stat, str):
        return stat
    return getattr(stat, "__name__", "custom")


@dataclass(frozen=True)
class NullParams:
    """
    Parameter payload for a simulation-based test.

    - null_dist: statistic of each simulated resample, in replicate order
    - observed_stat: statistic on the unmodified sample
    - p_value: tail fraction of null_dist under the test direction
    - tail_count: number of null values in the tail that set the p-value
      (the smaller tail for two-sided tests)
    """
    null_dist: NDArray[np.floating[Any]]       # shape (R,)
    observed_stat: float
    p_value: float
    R: int
    direction: str                              # "less" | "greater" | "two-sided"
    stat: str
    null_value: float
    mode: str                                   # "bootstrap_recentered" | "null_model_draw"
    n: int
    tail_count: int
