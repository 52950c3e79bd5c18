"""
Exception hierarchy for PyInfer.

All exceptions inherit from PyInferError to allow catching any
library-specific error.

Design principles:
    - Configuration errors are raised before any simulation starts
    - Error messages name the parameter, the constraint and the actual value
    - Never catch and re-raise with less information
"""


class PyInferError(Exception):
    """Base exception for all PyInfer errors."""
    pass


class ValidationError(PyInferError):
    """
    Input validation failed.

    Raised when a sample, null value, statistic, direction, replicate
    count or resampling mode fails validation. A misconfigured test must
    never produce a p-value, so this is always surfaced to the caller.

    Attributes:
        parameter: Name of the offending parameter, if known
    """

    def __init__(self, message: str, parameter: str | None = None):
        super().__init__(message)
        self.parameter = parameter


# The engine's single error kind.
InvalidInput = ValidationError


class DimensionError(ValidationError):
    """
    Sample has the wrong shape.

    Raised when a sample is not one-dimensional.
    """
    pass
