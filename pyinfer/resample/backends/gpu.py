"""
GPU backend for simulation-based tests.

Resampling is embarrassingly parallel: each chunk of replicates becomes a
single (rows, n) tensor operation. Built-in statistics (mean, median,
prop) run on device; user callables cannot, so those designs fall back
to the CPU backend.

Replicates come from torch's generator, not numpy's, so a GPU run is
reproducible for a fixed seed on the same device but does not reproduce
the CPU stream.
"""

from __future__ import annotations

import numpy as np

from pyinfer.core.result import Result
from pyinfer.core.compute.timing import Timer
from pyinfer.resample._common import BOOTSTRAP, NullParams, compute_stat
from pyinfer.resample._pvalue import (
    p_value_from_counts, tail_count, tail_counts,
)
from pyinfer.resample.backends.cpu import chunk_sizes, null_warnings
from pyinfer.resample.design import NullTestDesign


class GPUNullBackend:
    """
    GPU backend for null distribution generation.

    Args:
        device: 'cuda', 'mps', or 'auto'
    """

    def __init__(self, device: str = 'auto'):
        import torch

        self._torch = torch

        if device == 'auto':
            if torch.cuda.is_available():
                self._device = 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                self._device = 'mps'
            else:
                raise RuntimeError("No GPU available (need CUDA or MPS)")
        else:
            self._device = device

        # MPS has no float64
        self._dtype = torch.float32 if self._device == 'mps' else torch.float64

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_null'

    def solve(self, design: NullTestDesign) -> Result[NullParams]:
        """Generate the null distribution on device."""
        if callable(design.stat):
            from pyinfer.resample.backends.cpu import CPUNullBackend
            result = CPUNullBackend().solve(design)
            return Result(
                params=result.params,
                info=result.info,
                timing=result.timing,
                backend_name=self.name + " (cpu_fallback)",
                warnings=result.warnings,
            )

        torch = self._torch
        timer = Timer(sync_cuda=self._device == 'cuda')
        timer.start()

        R = design.R
        n = design.n
        seed_seq = np.random.SeedSequence(design.seed)
        gen = torch.Generator(device=self._device)
        gen.manual_seed(int(seed_seq.generate_state(1, dtype=np.uint64)[0] >> 1))

        with timer.section('observed_stat'):
            observed = float(compute_stat(design.stat, design.data))

        sizes = chunk_sizes(R, n)
        parts = []

        with timer.section('null_distribution'):
            if design.mode == BOOTSTRAP:
                source = torch.as_tensor(
                    design.shifted_data, dtype=self._dtype, device=self._device,
                )
                for size in sizes:
                    idx = torch.randint(
                        0, n, (size, n), generator=gen, device=self._device,
                    )
                    resamples = source[idx]
                    if design.stat == "median":
                        # quantile interpolates like numpy's median
                        parts.append(torch.quantile(resamples, 0.5, dim=1))
                    else:
                        parts.append(resamples.mean(dim=1))
            else:
                for size in sizes:
                    u = torch.rand(
                        (size, n), generator=gen, device=self._device,
                        dtype=self._dtype,
                    )
                    successes = (u < design.null_value).sum(dim=1)
                    parts.append(successes)

            if design.mode == BOOTSTRAP:
                null_dist = torch.cat(parts).cpu().numpy().astype(np.float64)
            else:
                # integer counts, divided on the host as the CPU backend does
                null_dist = torch.cat(parts).cpu().numpy() / n

        with timer.section('p_value'):
            cutoff = observed
            if design.mode == BOOTSTRAP and self._dtype == torch.float32:
                # replicates equal to the observed value carry float32 rounding
                cutoff = float(np.float32(observed))
            n_le, n_ge = tail_counts(null_dist, cutoff)
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
                'device': self._device,
                'entropy': seed_seq.entropy,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(null_warnings(design, null_dist, p_value)),
        )
