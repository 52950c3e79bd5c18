"""
Step-by-step construction of a simulation-based test.

NullTest mirrors the specify / hypothesize / generate / calculate
workflow of teaching material, but each step only records settings.
Nothing is validated until run(), which hands everything to
NullTestDesign.for_test in one piece.

Usage:
    from pyinfer import NullTest

    result = (
        NullTest(gss)
        .specify(response="hours")
        .hypothesize(mu=40)
        .generate(reps=10000, mode="bootstrap")
        .calculate("mean")
        .run(direction="two-sided", seed=1)
    )
    result.p_value
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from pyinfer.core.exceptions import ValidationError
from pyinfer.resample._common import StatFunction
from pyinfer.resample.design import NullTestDesign
from pyinfer.resample.solution import NullTestSolution
from pyinfer.resample.solvers import run_test


@dataclass(frozen=True)
class NullTest:
    """Immutable accumulator of test settings. Each step returns a copy."""
    sample: Any
    response: str | None = None
    success_label: Any = None
    response_kind: str | None = None
    null_value: float | None = None
    replicate_count: int = 1000
    resample_mode: str | None = None
    stat_kind: str | StatFunction | None = None

    def specify(
        self,
        response: str | None = None,
        *,
        success: Any = None,
        kind: str | None = None,
    ) -> NullTest:
        """Choose the response column and, for labels, the success category."""
        return replace(
            self, response=response, success_label=success, response_kind=kind,
        )

    def hypothesize(
        self,
        null_value: float | None = None,
        *,
        mu: float | None = None,
        med: float | None = None,
        p: float | None = None,
    ) -> NullTest:
        """
        Record the point null.

        The value may be given positionally or as exactly one of mu
        (mean), med (median) or p (proportion). The keyword also fixes
        the statistic unless calculate() chooses another.
        """
        given = {
            name: value
            for name, value in (("null_value", null_value), ("mu", mu),
                                ("med", med), ("p", p))
            if value is not None
        }
        if len(given) != 1:
            raise ValidationError(
                f"hypothesize: give exactly one of null_value, mu, med, p; "
                f"got {sorted(given) or 'none'}",
                "null_value",
            )
        (name, value), = given.items()
        implied = {"mu": "mean", "med": "median", "p": "prop"}.get(name)
        stat = self.stat_kind if self.stat_kind is not None else implied
        return replace(self, null_value=value, stat_kind=stat)

    def generate(self, reps: int = 1000, *, mode: str | None = None) -> NullTest:
        """Record the replicate count and resampling mode."""
        return replace(self, replicate_count=reps, resample_mode=mode)

    def calculate(self, stat: str | StatFunction) -> NullTest:
        """Record the statistic."""
        return replace(self, stat_kind=stat)

    def design(
        self,
        direction: str = "two-sided",
        seed: int | None = None,
    ) -> NullTestDesign:
        """Validate all recorded settings at once."""
        if self.null_value is None:
            raise ValidationError(
                "null_value: call hypothesize() before running", "null_value"
            )
        if self.stat_kind is None:
            raise ValidationError(
                "stat_kind: call calculate() before running", "stat_kind"
            )
        return NullTestDesign.for_test(
            self.sample,
            null_value=self.null_value,
            stat_kind=self.stat_kind,
            response_kind=self.response_kind,
            success_label=self.success_label,
            direction=direction,
            replicate_count=self.replicate_count,
            resample_mode=self.resample_mode,
            rng_seed=seed,
            response=self.response,
        )

    def run(
        self,
        direction: str = "two-sided",
        seed: int | None = None,
        *,
        n_jobs: int = 1,
        backend: str = 'cpu',
    ) -> NullTestSolution:
        """Validate, simulate and evaluate the p-value."""
        return run_test(
            self.design(direction=direction, seed=seed),
            n_jobs=n_jobs,
            backend=backend,
        )
