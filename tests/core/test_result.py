"""
Tests for the generic Result envelope.
"""

import dataclasses

import pytest

from pyinfer.core.result import Result


def _result(**overrides):
    kwargs = dict(
        params={'p_value': 0.03},
        info={'mode': 'bootstrap_recentered', 'n': 30},
        timing={'total_seconds': 0.01},
        backend_name='cpu_null',
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestResult:

    def test_fields(self):
        result = _result()
        assert result.params['p_value'] == 0.03
        assert result.info['n'] == 30
        assert result.backend_name == 'cpu_null'

    def test_warnings_default_empty(self):
        assert _result().warnings == ()

    def test_timing_optional(self):
        assert _result(timing=None).timing is None

    def test_frozen(self):
        result = _result()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.backend_name = 'other'

    def test_has_warning(self):
        result = _result(warnings=("Only 50 replicates", "p-value is 0"))
        assert result.has_warning("replicates")
        assert result.has_warning("p-value")
        assert not result.has_warning("missing")
