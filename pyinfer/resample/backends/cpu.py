"""
CPU backend for simulation-based tests.

Replicates are generated in fixed-size chunks. Chunk k draws from its own
generator, spawned as child k of SeedSequence(seed), so the null
distribution is positionally identical whatever the number of workers.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
from numpy.typing import NDArray

from pyinfer.core.result import Result
from pyinfer.core.compute.timing import Timer
from pyinfer.resample._common import BOOTSTRAP, NullParams, compute_stat
from pyinfer.resample._pvalue import (
    p_value_from_counts, tail_count, tail_counts,
)
from pyinfer.resample.design import NullTestDesign


# Replicates per chunk, before capping by sample size.
CHUNK_SIZE = 1000

# Upper bound on chunk_rows * n, the size of one resample matrix.
MAX_CHUNK_CELLS = 1 << 22

SMALL_R = 100


def chunk_sizes(R: int, n: int) -> list[int]:
    """Row counts of each chunk; depends only on R and n."""
    rows = max(1, min(CHUNK_SIZE, MAX_CHUNK_CELLS // max(n, 1)))
    full, rest = divmod(R, rows)
    return [rows] * full + ([rest] if rest else [])


def null_warnings(
    design: NullTestDesign, null_dist: NDArray, p_value: float,
) -> list[str]:
    """Non-fatal diagnostics shared by all backends."""
    R = design.R
    warnings_list: list[str] = []
    if design.n_missing:
        warnings_list.append(
            f"Removed {design.n_missing} observations with missing values "
            f"from {design.data_name!r}"
        )
    if R < SMALL_R:
        warnings_list.append(
            f"Only {R} replicates; the simulated p-value has large Monte "
            f"Carlo error"
        )
    if null_dist.size > 1 and np.ptp(null_dist) == 0.0:
        warnings_list.append(
            "Null distribution has zero spread; every replicate gave "
            f"{null_dist[0]:.6g}"
        )
    if p_value == 0.0:
        warnings_list.append(
            f"p-value of 0 is an approximation based on {R} replicates; "
            f"the true p-value is below {1.0 / R:.3g}"
        )
    return warnings_list


class CPUNullBackend:
    """
    CPU backend for null distribution generation.

    Args:
        n_jobs: Number of worker threads. 1 runs chunks inline.
    """

    def __init__(self, n_jobs: int = 1):
        self._n_jobs = n_jobs

    @property
    def name(self) -> str:
        return 'cpu_null'

    def solve(self, design: NullTestDesign) -> Result[NullParams]:
        """Generate the null distribution and return Result[NullParams]."""
        timer = Timer()
        timer.start()

        R = design.R
        n = design.n
        seed_seq = np.random.SeedSequence(design.seed)

        with timer.section('observed_stat'):
            observed = float(compute_stat(design.stat, design.data))

        sizes = chunk_sizes(R, n)
        offsets = np.concatenate([[0], np.cumsum(sizes)])
        children = seed_seq.spawn(len(sizes))
        null_dist = np.empty(R, dtype=np.float64)

        if design.mode == BOOTSTRAP:
            source = np.ascontiguousarray(design.shifted_data)
        else:
            source = None

        def run_chunk(k: int) -> None:
            rng = np.random.default_rng(children[k])
            null_dist[offsets[k]:offsets[k + 1]] = self._chunk(
                design, source, sizes[k], rng,
            )

        with timer.section('null_distribution'):
            if self._n_jobs > 1 and len(sizes) > 1:
                with ThreadPoolExecutor(max_workers=self._n_jobs) as pool:
                    # list() re-raises any worker exception here
                    list(pool.map(run_chunk, range(len(sizes))))
            else:
                for k in range(len(sizes)):
                    run_chunk(k)

        with timer.section('p_value'):
            n_le, n_ge = tail_counts(null_dist, observed)
            p_value = p_value_from_counts(n_le, n_ge, R, design.direction)

        timer.stop()

        params = NullParams(
            null_dist=null_dist,
            observed_stat=observed,
            p_value=p_value,
            R=R,
            direction=design.direction,
            stat=design.stat_name,
            null_value=design.null_value,
            mode=design.mode,
            n=n,
            tail_count=tail_count(n_le, n_ge, design.direction),
        )

        return Result(
            params=params,
            info={
                'mode': design.mode,
                'n': n,
                'n_missing': design.n_missing,
                'n_chunks': len(sizes),
                'n_jobs': self._n_jobs,
                'entropy': seed_seq.entropy,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(null_warnings(design, null_dist, p_value)),
        )

    def _chunk(
        self,
        design: NullTestDesign,
        source: NDArray | None,
        size: int,
        rng: np.random.Generator,
    ) -> NDArray:
        """Statistics of `size` replicates."""
        n = design.n
        if design.mode == BOOTSTRAP:
            indices = rng.integers(0, n, size=(size, n))
            return compute_stat(design.stat, source[indices])

        # Null-model draw: n Bernoulli(p0) outcomes per replicate,
        # summarised by their success count.
        successes = rng.binomial(n, design.null_value, size=size)
        return successes / n
