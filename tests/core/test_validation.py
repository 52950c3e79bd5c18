"""
Tests for input validation utilities.

Each validator raises ValidationError naming the parameter, or returns
the normalized value.
"""

import numpy as np
import pytest

from pyinfer.core.exceptions import DimensionError, ValidationError
from pyinfer.core.validation import (
    check_1d,
    check_array,
    check_choice,
    check_finite,
    check_finite_scalar,
    check_min_samples,
    check_nonnegative_int,
    check_open_unit_interval,
    check_positive_int,
    missing_mask,
)


class TestCheckArray:

    def test_integers_promoted(self):
        result = check_array([1, 2, 3], "x")
        assert result.dtype == np.float64

    def test_float32_kept(self):
        result = check_array(np.ones(3, dtype=np.float32), "x")
        assert result.dtype == np.float32

    def test_bool_accepted(self):
        np.testing.assert_array_equal(check_array([True, False], "x"), [1.0, 0.0])

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="x: non-numeric"):
            check_array(["a", "b"], "x")

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array(np.array([1, "a"], dtype=object), "x")


class TestShapeAndValues:

    def test_finite(self):
        check_finite(np.array([1.0, 2.0]), "x")
        with pytest.raises(ValidationError, match=r"1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "x")

    def test_1d(self):
        check_1d(np.ones(3), "x")
        with pytest.raises(DimensionError) as exc_info:
            check_1d(np.ones((2, 2)), "x")
        assert exc_info.value.parameter == "x"

    def test_min_samples(self):
        check_min_samples(np.ones(1), 1, "x")
        with pytest.raises(ValidationError, match="at least 1"):
            check_min_samples(np.ones(0), 1, "x")


class TestScalars:

    def test_positive_int(self):
        assert check_positive_int(np.int32(5), "R") == 5
        for bad in (0, -1, 1.0, True, "3", None):
            with pytest.raises(ValidationError):
                check_positive_int(bad, "R")

    def test_nonnegative_int(self):
        assert check_nonnegative_int(0, "seed") == 0
        for bad in (-1, 2.5, False):
            with pytest.raises(ValidationError):
                check_nonnegative_int(bad, "seed")

    def test_finite_scalar(self):
        assert check_finite_scalar(np.float32(1.5), "mu") == 1.5
        assert isinstance(check_finite_scalar(3, "mu"), float)
        for bad in (np.nan, -np.inf, "1", None, True):
            with pytest.raises(ValidationError):
                check_finite_scalar(bad, "mu")

    def test_open_unit_interval(self):
        assert check_open_unit_interval(0.5, "p") == 0.5
        for bad in (0.0, 1.0, -0.1, 2.0):
            with pytest.raises(ValidationError, match="strictly between"):
                check_open_unit_interval(bad, "p")

    def test_choice(self):
        assert check_choice("less", ("less", "greater"), "direction") == "less"
        with pytest.raises(ValidationError, match="direction"):
            check_choice("up", ("less", "greater"), "direction")


class TestMissingMask:

    def test_float(self):
        np.testing.assert_array_equal(
            missing_mask(np.array([1.0, np.nan])), [False, True],
        )

    def test_integer_never_missing(self):
        assert not missing_mask(np.array([1, 2])).any()

    def test_object(self):
        arr = np.array(["a", None, np.nan, "b"], dtype=object)
        np.testing.assert_array_equal(missing_mask(arr), [False, True, True, False])
