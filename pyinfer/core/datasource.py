"""
Universal DataSource for PyInfer.

DataSource is the "I have data" abstraction. It doesn't know or care
which test consumes it. It just provides named columns, numeric or
categorical.

Usage:
    from pyinfer import DataSource

    ds = DataSource.from_arrays(age=ages, outcome=labels)
    ds = DataSource.from_records([{'age': 41, 'outcome': 'died'}, ...])
    ds = DataSource.from_file("gss.csv")
    ds = DataSource.from_dataframe(df)

    ds.keys()        # frozenset({'age', 'outcome'})
    ds['outcome']    # object array of labels
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinfer.core.exceptions import ValidationError
from pyinfer.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
    CAPABILITY_CATEGORICAL,
)

if TYPE_CHECKING:
    import pandas as pd


def _as_column(values: ArrayLike) -> NDArray:
    """
    Store a column as float64 if it is numeric, else as an object array.

    Booleans are kept as labels so that True/False can name a success
    category.
    """
    arr = np.asarray(values)
    if arr.dtype != np.bool_ and np.issubdtype(arr.dtype, np.number):
        return arr.astype(np.float64)
    return arr.astype(object)


def _is_categorical(column: NDArray) -> bool:
    return column.dtype == object


@dataclass
class DataSource:
    """
    Universal column container. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, NDArray]
    _capabilities: frozenset[str]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available columns.

        Example:
            >>> ds = DataSource.from_arrays(age=[41, 52], outcome=['died', 'survived'])
            >>> ds.keys()
            frozenset({'age', 'outcome'})
        """
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> NDArray:
        """
        Access a named column.

        Raises:
            KeyError: If key not found, with a message listing available keys
        """
        if key not in self._data:
            available = sorted(self.keys())
            raise KeyError(
                f"DataSource has no column '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def is_categorical(self, key: str) -> bool:
        """True if the named column holds labels rather than numbers."""
        return _is_categorical(self[key])

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of records (rows)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    def supports(self, capability: str) -> bool:
        """
        Check if this DataSource supports a capability.

        Unknown capabilities return False, never raise.
        """
        return capability in self._capabilities

    # === Factory Methods ===

    @classmethod
    def _from_columns(
        cls,
        columns: dict[str, NDArray],
        metadata: dict[str, Any],
    ) -> DataSource:
        lengths = {name: col.shape[0] for name, col in columns.items()}
        if len(set(lengths.values())) > 1:
            details = ", ".join(f"{k}={v}" for k, v in lengths.items())
            raise ValidationError(f"Inconsistent column lengths: {details}")

        for name, col in columns.items():
            if col.ndim != 1:
                raise ValidationError(
                    f"column '{name}': expected 1D, got shape {col.shape}"
                )

        capabilities = {CAPABILITY_MATERIALIZED, CAPABILITY_REPEATABLE}
        if any(_is_categorical(c) for c in columns.values()):
            capabilities.add(CAPABILITY_CATEGORICAL)

        metadata = dict(metadata)
        metadata['n_observations'] = next(iter(lengths.values()), 0)
        metadata['columns'] = list(columns)
        return cls(
            _data=columns,
            _capabilities=frozenset(capabilities),
            _metadata=metadata,
        )

    @classmethod
    def from_arrays(cls, **named_arrays: ArrayLike) -> DataSource:
        """Construct from named 1D array-likes."""
        columns = {name: _as_column(arr) for name, arr in named_arrays.items()}
        return cls._from_columns(columns, {'source': 'arrays'})

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        *,
        columns: list[str] | None = None,
    ) -> DataSource:
        """
        Construct from a sequence of mappings (one mapping per record).

        Args:
            records: Iterable of dict-like rows
            columns: Columns to keep. Defaults to the keys of the first record.

        Raises:
            ValidationError: If there are no records, or a record lacks a column
        """
        rows = list(records)
        if not rows:
            raise ValidationError("records: requires at least 1 record")

        names = list(columns) if columns is not None else list(rows[0].keys())
        data: dict[str, NDArray] = {}
        for name in names:
            try:
                values = [row[name] for row in rows]
            except KeyError as e:
                raise ValidationError(
                    f"records: a record is missing column '{name}'"
                ) from e
            data[name] = _as_column(values)

        return cls._from_columns(data, {'source': 'records'})

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        source_path: str | None = None,
    ) -> DataSource:
        """Construct from a pandas DataFrame."""
        from pandas.api.types import is_bool_dtype, is_numeric_dtype

        data: dict[str, NDArray] = {}
        for col in df.columns:
            series = df[col]
            if is_numeric_dtype(series) and not is_bool_dtype(series):
                data[str(col)] = series.to_numpy(dtype=np.float64, na_value=np.nan)
            else:
                data[str(col)] = series.to_numpy(dtype=object)

        metadata: dict[str, Any] = {'source': 'dataframe'}
        if source_path:
            metadata['source_path'] = source_path
        return cls._from_columns(data, metadata)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        columns: list[str] | None = None,
    ) -> DataSource:
        """Construct from a local file (CSV, TSV, NPY)."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, sep=sep, usecols=columns)
            return cls.from_dataframe(df, source_path=str(path))
        elif suffix == '.npy':
            data = np.load(path, allow_pickle=False)
            if data.ndim == 1:
                name = columns[0] if columns else 'x'
                return cls.from_arrays(**{name: data})
            names = columns or [f"x{i}" for i in range(data.shape[1])]
            if len(names) != data.shape[1]:
                raise ValidationError(
                    f"columns: got {len(names)} names for {data.shape[1]} columns"
                )
            return cls.from_arrays(**{n: data[:, i] for i, n in enumerate(names)})
        else:
            raise ValidationError(f"Unknown file format: {suffix}")
