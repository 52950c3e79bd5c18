"""
Core protocols for PyInfer.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that a pandas-backed table, a DataSource, or a user container can all be
passed where the engine needs columns.
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

from pyinfer.core.result import Result

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class ColumnSource(Protocol):
    """
    Minimal protocol for a table of named columns.

    Anything that can hand back a 1D column by name and report its
    number of rows satisfies this protocol.
    """

    @property
    def n_observations(self) -> int:
        """Number of records (rows)."""
        ...

    @property
    def metadata(self) -> dict[str, Any]:
        """Source-specific metadata."""
        ...

    def keys(self) -> frozenset[str]:
        """Names of the available columns."""
        ...

    def __getitem__(self, key: str) -> Any:
        """Return the named column."""
        ...

    def supports(self, capability: str) -> bool:
        """
        Check if this source supports a given capability.

        Note:
            Unknown capabilities MUST return False, never raise.
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated design and produces a Result. Backends
    are stateless apart from construction-time options such as the
    device or worker count.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_null', 'gpu_cuda_null'.
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """Run the computation described by `design`."""
        ...
