"""
Generic result container for all PyInfer computations.

The Result class provides a standardized envelope for backend output.
Domain-specific payloads ride in `params`; timing, diagnostics and
warnings ride alongside so shared tooling can inspect any result.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (mode, n, chunking)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for resampling computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (null distribution, p-value, ...)
        info: Structured metadata (mode, sample size, chunk layout)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=NullParams(...),
        ...     info={'mode': 'bootstrap_recentered', 'n': 30},
        ...     timing={'total_seconds': 0.02},
        ...     backend_name='cpu_null'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
