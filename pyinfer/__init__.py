"""
PyInfer: simulation-based hypothesis testing for Python.

Tests a single population mean, median or proportion by resampling
under the null hypothesis and reading the p-value off the simulated
null distribution.

Submodules:
    core: DataSource, Result, exceptions, validation, timing
    resample: run_test, get_p_value, NullTest
"""

__version__ = "0.1.0"

from pyinfer.core import DataSource, PyInferError, ValidationError, InvalidInput
from pyinfer.resample import (
    run_test,
    get_p_value,
    NullTest,
    NullTestDesign,
    NullTestSolution,
)

__all__ = [
    "__version__",
    "DataSource",
    "PyInferError",
    "ValidationError",
    "InvalidInput",
    "run_test",
    "get_p_value",
    "NullTest",
    "NullTestDesign",
    "NullTestSolution",
]
