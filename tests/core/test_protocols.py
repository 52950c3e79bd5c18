"""
Structural checks: concrete classes satisfy the core protocols.
"""

from pyinfer.core import Backend, ColumnSource, DataSource
from pyinfer.resample.backends import CPUNullBackend


def test_datasource_is_column_source():
    assert isinstance(DataSource.from_arrays(x=[1.0, 2.0]), ColumnSource)


def test_cpu_backend_is_backend():
    backend = CPUNullBackend()
    assert isinstance(backend, Backend)
    assert backend.name == 'cpu_null'
