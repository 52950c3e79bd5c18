"""
Solution wrapper for simulation-based test results.

NullTestSolution wraps Result[NullParams] and provides convenient
accessors, Monte Carlo error estimates, a tidy table of replicates,
and a text summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pyinfer.core.exceptions import ValidationError
from pyinfer.core.result import Result
from pyinfer.resample._common import GREATER, LESS, NullParams
from pyinfer.resample._pvalue import (
    clopper_pearson, mc_standard_error, tail_counts,
)

if TYPE_CHECKING:
    import pandas as pd
    from pyinfer.resample.design import NullTestDesign


@dataclass
class NullTestSolution:
    """
    User-facing results of a simulation-based test.

    Exposes the null distribution, the observed statistic and the
    p-value, plus the design that produced them.
    """
    _result: Result[NullParams]
    _design: 'NullTestDesign'

    # --- Core fields ---

    @property
    def null_dist(self) -> NDArray[np.floating[Any]]:
        """Simulated null distribution, shape (R,)."""
        return self._result.params.null_dist

    @property
    def observed_stat(self) -> float:
        """Statistic on the unmodified sample."""
        return self._result.params.observed_stat

    @property
    def p_value(self) -> float:
        """Tail fraction of the null distribution."""
        return self._result.params.p_value

    @property
    def R(self) -> int:
        """Number of replicates."""
        return self._result.params.R

    @property
    def direction(self) -> str:
        return self._result.params.direction

    @property
    def stat(self) -> str:
        return self._result.params.stat

    @property
    def null_value(self) -> float:
        return self._result.params.null_value

    @property
    def mode(self) -> str:
        return self._result.params.mode

    @property
    def n(self) -> int:
        """Sample size after removing missing values."""
        return self._result.params.n

    def as_tuple(self) -> tuple[NDArray[np.floating[Any]], float, float]:
        """(null_dist, observed_stat, p_value)."""
        return self.null_dist, self.observed_stat, self.p_value

    # --- Monte Carlo error ---

    @property
    def mc_se(self) -> float:
        """Monte Carlo standard error of the p-value, sqrt(p(1-p)/R)."""
        return mc_standard_error(min(self.p_value, 1.0), self.R)

    def p_value_interval(self, conf_level: float = 0.95) -> tuple[float, float]:
        """
        Exact (Clopper-Pearson) interval for the p-value.

        Two-sided intervals double the bounds for the smaller tail and
        clip them to [0, 1].
        """
        if not (0.0 < conf_level < 1.0):
            raise ValidationError(
                f"conf_level: must be in (0, 1), got {conf_level}", "conf_level"
            )
        lower, upper = clopper_pearson(
            self._result.params.tail_count, self.R, conf_level,
        )
        if self.direction not in (LESS, GREATER):
            lower, upper = min(1.0, 2 * lower), min(1.0, 2 * upper)
        return lower, upper

    # --- Renderer support ---

    def extreme_mask(self) -> NDArray[np.bool_]:
        """
        Flag null values at least as extreme as the observed statistic.

        For two-sided tests the smaller tail is flagged together with the
        same number of replicates from the opposite end, so the flagged
        fraction equals the reported p-value.
        """
        dist = self.null_dist
        obs = self.observed_stat
        if self.direction == LESS:
            return dist <= obs
        if self.direction == GREATER:
            return dist >= obs
        n_le, n_ge = tail_counts(dist, obs)
        order = np.argsort(dist, kind='stable')
        if n_le <= n_ge:
            mask = dist <= obs
            k = n_le
            mirrored = order[len(dist) - k:]
        else:
            mask = dist >= obs
            k = n_ge
            mirrored = order[:k]
        mask[mirrored] = True
        return mask

    def to_dataframe(self) -> 'pd.DataFrame':
        """Null distribution as a table with `replicate` and `stat` columns."""
        import pandas as pd
        return pd.DataFrame({
            'replicate': np.arange(1, self.R + 1),
            'stat': self.null_dist,
        })

    # --- Metadata ---

    @property
    def design(self) -> 'NullTestDesign':
        return self._design

    @property
    def seed(self) -> int | None:
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """
        Text summary.

        Produces:
            SIMULATION-BASED TEST (bootstrap_recentered)

            data:  x (n = 30)
            observed mean = 209, null value = 200
            p-value (two-sided) = 0.0032 (MC s.e. 0.00056, R = 10000)
        """
        lo, hi = self.p_value_interval()
        lines = [
            f"\nSIMULATION-BASED TEST ({self.mode})",
            "",
            f"data:  {self._design.data_name} (n = {self.n})",
            f"observed {self.stat} = {self.observed_stat:.6g}, "
            f"null value = {self.null_value:.6g}",
            f"p-value ({self.direction}) = {self.p_value:.4g} "
            f"(MC s.e. {self.mc_se:.2g}, R = {self.R})",
            f"95% interval for p-value: ({lo:.4g}, {hi:.4g})",
        ]
        if self._design.success_label is not None:
            lines.insert(3, f"success: {self._design.success_label!r}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"NullTestSolution(R={self.R}, stat={self.stat!r}, "
            f"observed={self.observed_stat:.4g}, p_value={self.p_value:.4g})"
        )
