"""
Tests for the PyInfer exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyInferError)
    - The `parameter` attribute on ValidationError
    - InvalidInput is the same class as ValidationError
"""

import pytest

from pyinfer.core.exceptions import (
    DimensionError,
    InvalidInput,
    PyInferError,
    ValidationError,
)


class TestInheritance:
    """Every exception is catchable via PyInferError."""

    def test_validation_error_is_pyinfer_error(self):
        with pytest.raises(PyInferError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_invalid_input_alias(self):
        assert InvalidInput is ValidationError
        with pytest.raises(InvalidInput):
            raise DimensionError("wrong shape")

    def test_not_caught_as_value_error(self):
        assert not issubclass(PyInferError, ValueError)


class TestAttributes:

    def test_parameter_recorded(self):
        err = ValidationError("null_value: must be finite", "null_value")
        assert err.parameter == "null_value"
        assert str(err) == "null_value: must be finite"

    def test_parameter_defaults_to_none(self):
        assert ValidationError("oops").parameter is None
        assert DimensionError("oops").parameter is None
