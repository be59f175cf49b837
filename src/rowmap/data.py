"""
Row materialization and extraction.

Converts instances to column/value rows and retrieved rows back to
instances through the catalog accessor and mutator. Classes that are
key-value containers bypass the catalog and carry their own keys.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd
from rowmap.adapters.numeric import expects_int32, expects_int64
from rowmap.cache import get_catalog
from rowmap.catalog import Catalog, is_dynamic_type
from rowmap.exceptions import MaterializationError, UnknownPropertyError
from rowmap.options import MappingOptions, resolve_options
from rowmap.row import RowAdapter

from libb import attrdict

logger = logging.getLogger(__name__)

__all__ = [
    'to_row',
    'to_rows',
    'from_row',
    'from_rows',
    'to_dataframe',
    'from_dataframe',
]


def to_row(instance: Any, columns: Iterable[str] | None = None,
           options: MappingOptions | dict[str, Any] | None = None) -> attrdict:
    """Extract the storable values of an instance.

    Args:
        instance: Mapped instance, or a key-value row
        columns: Columns to extract, by default every catalog column
        options: Mapping options

    Returns
        attrdict of column name to storable value

    Raises
        UnknownPropertyError: a requested column is not mapped, or is missing
            from a key-value row
    """
    if isinstance(instance, Mapping):
        keys = list(instance) if columns is None else list(columns)
        missing = [key for key in keys if key not in instance]
        if missing:
            raise UnknownPropertyError(
                f'No such key: {", ".join(missing)} on {type(instance).__qualname__}')
        return attrdict({key: instance[key] for key in keys})
    catalog = get_catalog(type(instance), options)
    names = catalog.column_names if columns is None else list(columns)
    return attrdict({name: catalog.get_value(instance, name) for name in names})


def to_rows(instances: Iterable[Any],
            options: MappingOptions | dict[str, Any] | None = None) -> list[attrdict]:
    """Extract the storable values of several instances."""
    return [to_row(instance, options=options) for instance in instances]


def _construct(cls: type, values: dict[str, Any]) -> Any:
    try:
        if is_dynamic_type(cls):
            return cls(values)
        return cls()
    except Exception as exc:
        raise MaterializationError(
            f'Could not construct {cls.__qualname__} for row materialization') from exc


def from_row(cls: type, row: Any,
             options: MappingOptions | dict[str, Any] | None = None,
             ignore_unknown: bool | None = None) -> Any:
    """Build an instance of ``cls`` from a retrieved row.

    The instance is created with ``cls()`` and populated column by column
    through the mutator. Key-value container classes are built with
    ``cls(row)`` instead.

    Args:
        cls: Mapped class
        row: dict, sqlite3.Row or namedtuple of column values
        options: Mapping options
        ignore_unknown: Skip columns with no mapped property, by default
            ``options.ignore_unknown_columns``

    Raises
        MaterializationError: ``cls`` cannot be constructed without arguments
        UnknownPropertyError: a column is unmapped and unknown columns are not ignored
    """
    options = resolve_options(options)
    values = RowAdapter(row).to_dict()
    instance = _construct(cls, values)
    if is_dynamic_type(cls):
        return instance

    if ignore_unknown is None:
        ignore_unknown = options.ignore_unknown_columns
    catalog = get_catalog(cls, options)
    for name, value in values.items():
        if ignore_unknown and name not in catalog:
            logger.debug(f'Skipping column {name}: not mapped on {cls.__qualname__}')
            continue
        catalog.put_value(instance, name, value)
    return instance


def from_rows(cls: type, rows: Iterable[Any],
              options: MappingOptions | dict[str, Any] | None = None) -> list[Any]:
    """Build one instance of ``cls`` per retrieved row."""
    return [from_row(cls, row, options) for row in rows]


def to_dataframe(instances: Iterable[Any], cls: type | None = None,
                 options: MappingOptions | dict[str, Any] | None = None) -> pd.DataFrame:
    """Tabulate instances into a DataFrame of storable values.

    Always returns a DataFrame, with the catalog columns preserved when
    ``instances`` is empty and ``cls`` is given. The table name is stored in
    ``DataFrame.attrs['table']``.
    """
    instances = list(instances)
    if cls is None and instances:
        cls = type(instances[0])
    if cls is None:
        return pd.DataFrame()

    catalog = get_catalog(cls, options)
    rows = to_rows(instances, options)
    if catalog.is_dynamic:
        df = pd.DataFrame.from_records(rows)
    else:
        df = pd.DataFrame.from_records(rows, columns=catalog.column_names)
    df.attrs['table'] = catalog.table
    return df


def _null_to_none(value: Any) -> Any:
    if value is None:
        return None
    try:
        return None if pd.isna(value) else value
    except (TypeError, ValueError):
        return value


def _restore_integer(catalog: Catalog, column: str, value: Any) -> Any:
    # integer columns holding nulls come back from pandas as float64
    if not isinstance(value, float) or not value.is_integer():
        return value
    prop = catalog.properties.get(column)
    if prop is not None and (expects_int32(prop.data_type) or expects_int64(prop.data_type)):
        return int(value)
    return value


def from_dataframe(cls: type, df: pd.DataFrame,
                   options: MappingOptions | dict[str, Any] | None = None) -> list[Any]:
    """Build one instance of ``cls`` per DataFrame row.

    Missing values (NaN, NA, NaT) are written as None. Whole floats in
    columns of integer-width members are written as integers, so they are
    range checked like any other stored integer.
    """
    catalog = get_catalog(cls, options)
    rows = [
        {column: _restore_integer(catalog, column, _null_to_none(value))
         for column, value in record.items()}
        for record in df.to_dict(orient='records')
    ]
    return from_rows(cls, rows, options)
