"""
Universal DataSource for lmstep.

DataSource is the "I have data" abstraction: an ordered set of named
numeric columns of equal length, plus optional row labels. It doesn't
know or care whether it will be split, fit or predicted on.

Usage:
    from lmstep import DataSource

    ds = DataSource.from_arrays(mpg=mpg, wt=wt)
    ds = DataSource.from_records([{'mpg': 21.0, 'wt': 2.62}, ...])
    ds = DataSource.from_dataframe(df)
    ds = DataSource.from_file("cars.csv", index_col=0)

    ds.columns        # ('mpg', 'wt')
    ds['wt']          # ndarray
    ds.take([3, 0])   # new DataSource with rows 3 and 0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from lmstep.core.exceptions import ValidationError, UnknownFieldError
from lmstep.core.validation import check_array, check_1d, check_consistent_length

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class DataSource:
    """
    Universal data container. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _row_names: tuple[str, ...] | None = None
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names in their original order."""
        return tuple(self._data.keys())

    def keys(self) -> frozenset[str]:
        """Return the names of all available columns."""
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            UnknownFieldError: If key not found, listing available columns

        Example:
            >>> ds = DataSource.from_arrays(x=[1, 2], y=[3, 4])
            >>> ds['z']  # UnknownFieldError: "DataSource has no column 'z'. ..."
        """
        if key not in self._data:
            raise UnknownFieldError(
                f"DataSource has no column {key!r}. Available: {list(self.columns)}",
                field=key,
                available=self.columns,
            )
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return self.n_observations

    def require(self, names: Iterable[str], role: str = 'column') -> None:
        """
        Verify every name is a column of this DataSource.

        Args:
            names: Column names to check
            role: What the names are used as, for the error message

        Raises:
            UnknownFieldError: On the first missing name
        """
        for name in names:
            if name not in self._data:
                raise UnknownFieldError(
                    f"{role} {name!r} is not a column of the data. "
                    f"Available: {list(self.columns)}",
                    field=name,
                    available=self.columns,
                )

    def matrix(self, names: Sequence[str]) -> NDArray[np.floating[Any]]:
        """Stack the named columns into an (n x len(names)) matrix."""
        self.require(names)
        if not names:
            return np.empty((self.n_observations, 0), dtype=np.float64)
        return np.column_stack([self._data[name] for name in names])

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of statistical units (rows)."""
        return self._metadata.get('n_observations', 0)

    @property
    def row_names(self) -> tuple[str, ...]:
        """Row labels; the row position as a string when none were given."""
        if self._row_names is not None:
            return self._row_names
        return tuple(str(i) for i in range(self.n_observations))

    @property
    def has_row_names(self) -> bool:
        return self._row_names is not None

    @property
    def metadata(self) -> dict[str, Any]:
        """Domain-agnostic metadata."""
        return self._metadata.copy()

    # === Row Selection ===

    def take(self, indices: ArrayLike) -> DataSource:
        """
        Select rows by position.

        Args:
            indices: Row positions, in the order the new rows should appear

        Returns:
            New DataSource with the selected rows. Row labels are carried
            over; rows without labels are labelled by their position in
            this DataSource, so a subset still identifies its records.
        """
        idx = np.asarray(indices, dtype=np.intp)
        if idx.ndim != 1:
            raise ValidationError(f"indices: expected 1D, got {idx.ndim}D")
        n = self.n_observations
        if idx.size and (idx.min() < -n or idx.max() >= n):
            raise ValidationError(
                f"indices: out of range for {n} observations "
                f"(min={int(idx.min())}, max={int(idx.max())})"
            )
        data = {name: col[idx].copy() for name, col in self._data.items()}
        # Unlabelled rows keep their position in this source as the label
        labels = self.row_names
        row_names = tuple(labels[i] for i in idx)
        metadata = {**self._metadata, 'n_observations': int(idx.size)}
        return DataSource(_data=data, _row_names=row_names, _metadata=metadata)

    # === Factory Methods ===

    @classmethod
    def from_arrays(
        cls,
        *,
        row_names: Sequence[Any] | None = None,
        **columns: ArrayLike,
    ) -> DataSource:
        """Construct from named 1D arrays of equal length."""
        if not columns:
            raise ValidationError("DataSource requires at least one column")

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for name, values in columns.items():
            arr = check_array(values, name)
            check_1d(arr, name)
            storage[name] = arr.astype(np.float64, copy=True)

        arrays = tuple(storage.values())
        check_consistent_length(*arrays, names=tuple(storage))
        n_obs = arrays[0].shape[0]

        return cls(
            _data=storage,
            _row_names=_normalize_row_names(row_names, n_obs),
            _metadata={'n_observations': n_obs, 'source': 'arrays'},
        )

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        *,
        row_names: Sequence[Any] | None = None,
    ) -> DataSource:
        """
        Construct from a sequence of records (one mapping per row).

        Every record must have the same field set as the first one.
        """
        if len(records) == 0:
            raise ValidationError("records: need at least one record")

        fields = tuple(records[0].keys())
        for i, record in enumerate(records):
            if set(record.keys()) != set(fields):
                missing = sorted(set(fields) - set(record.keys()))
                extra = sorted(set(record.keys()) - set(fields))
                raise ValidationError(
                    f"records[{i}]: fields differ from records[0] "
                    f"(missing={missing}, extra={extra})"
                )

        columns = {name: [record[name] for record in records] for name in fields}
        ds = cls.from_arrays(row_names=row_names, **columns)
        return cls(
            _data=ds._data,
            _row_names=ds._row_names,
            _metadata={**ds._metadata, 'source': 'records'},
        )

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        source_path: str | None = None,
    ) -> DataSource:
        """
        Construct from pandas DataFrame.

        A non-default index (anything but a plain RangeIndex) becomes the
        row labels.
        """
        import pandas as pd

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for col in df.columns:
            arr = check_array(df[col].to_numpy(), str(col))
            storage[str(col)] = arr.astype(np.float64, copy=True)

        row_names = None
        if not isinstance(df.index, pd.RangeIndex):
            row_names = tuple(str(v) for v in df.index)

        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls(_data=storage, _row_names=row_names, _metadata=metadata)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        columns: list[str] | None = None,
        index_col: int | str | None = None,
    ) -> DataSource:
        """Construct from a CSV/TSV file (read with pandas)."""
        import pandas as pd

        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == '.csv':
            df = pd.read_csv(path, index_col=index_col)
        elif suffix == '.tsv':
            df = pd.read_csv(path, sep='\t', index_col=index_col)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")

        if columns is not None:
            missing = [c for c in columns if c not in df.columns]
            if missing:
                raise UnknownFieldError(
                    f"{path.name}: columns {missing} not found. "
                    f"Available: {list(df.columns)}",
                    field=missing[0],
                    available=tuple(str(c) for c in df.columns),
                )
            df = df[columns]
        return cls.from_dataframe(df, source_path=str(path))

    def to_dataframe(self) -> 'pd.DataFrame':
        """Materialize as a pandas DataFrame indexed by row labels."""
        import pandas as pd

        index = list(self._row_names) if self._row_names is not None else None
        return pd.DataFrame({name: col.copy() for name, col in self._data.items()}, index=index)


def as_datasource(data: Any) -> DataSource:
    """
    Coerce common tabular inputs to a DataSource.

    Accepts a DataSource (returned as-is), a pandas DataFrame, a mapping
    of column name to values, or a sequence of record mappings.
    """
    if isinstance(data, DataSource):
        return data
    if hasattr(data, 'columns') and hasattr(data, 'index') and hasattr(data, 'to_numpy'):
        return DataSource.from_dataframe(data)
    if isinstance(data, Mapping):
        return DataSource.from_arrays(**{str(k): v for k, v in data.items()})
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        if len(data) > 0 and all(isinstance(r, Mapping) for r in data):
            return DataSource.from_records(data)
    raise ValidationError(
        f"data: cannot interpret {type(data).__name__} as tabular data "
        f"(expected DataSource, DataFrame, mapping of columns or list of records)"
    )


def _normalize_row_names(
    row_names: Sequence[Any] | None,
    n_obs: int,
) -> tuple[str, ...] | None:
    if row_names is None:
        return None
    names = tuple(str(v) for v in row_names)
    if len(names) != n_obs:
        raise ValidationError(
            f"row_names: length {len(names)} doesn't match {n_obs} observations"
        )
    return names
