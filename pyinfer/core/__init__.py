"""
Core infrastructure for PyInfer.

Shared abstractions used by the resampling engine.

Key components:
    protocols: ColumnSource, Backend protocols
    datasource: DataSource column container
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Device detection, timing
"""

from pyinfer.core.protocols import ColumnSource, Backend
from pyinfer.core.datasource import DataSource
from pyinfer.core.result import Result
from pyinfer.core.exceptions import (
    PyInferError,
    ValidationError,
    InvalidInput,
    DimensionError,
)

__all__ = [
    # Protocols
    "ColumnSource",
    "Backend",
    # Data
    "DataSource",
    # Result
    "Result",
    # Exceptions
    "PyInferError",
    "ValidationError",
    "InvalidInput",
    "DimensionError",
]
