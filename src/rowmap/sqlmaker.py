"""
Statement text for mapped classes.

Builds INSERT, UPDATE, SELECT and DELETE statements from a catalog's table
name, column names, primary key and generated column. Statements are returned
with the column order their arguments must follow; nothing is executed here.
"""
from collections.abc import Iterable
from typing import Any

import numpy as np
from rowmap.catalog import Catalog
from rowmap.exceptions import MappingError

__all__ = [
    'quote_identifier',
    'placeholder',
    'build_insert',
    'build_update',
    'build_select',
    'build_delete',
    'row_args',
    'to_db_param',
]

_PLACEHOLDERS = {'postgresql': '%s', 'sqlite': '?'}


def quote_identifier(identifier: str, dialect: str = 'postgresql') -> str:
    """Safely quote database identifiers.

    Parameters
        identifier: Table or column name
        dialect: Database dialect

    Returns
        Quoted identifier

    Raises
        ValueError: If dialect is unsupported
    """
    if dialect in _PLACEHOLDERS:
        return '"' + identifier.replace('"', '""') + '"'

    raise ValueError(f'Unknown dialect: {dialect}')


def placeholder(dialect: str) -> str:
    """Positional parameter marker for a dialect."""
    try:
        return _PLACEHOLDERS[dialect]
    except KeyError:
        raise ValueError(f'Unknown dialect: {dialect}') from None


def insert_columns(catalog: Catalog) -> list[str]:
    """Columns supplied by the caller on insert."""
    return [
        prop.name for prop in catalog
        if prop.name != catalog.generated_column_name and prop.insertable()
    ]


def update_columns(catalog: Catalog) -> list[str]:
    """Non-key columns written on update."""
    return [
        prop.name for prop in catalog
        if prop.name != catalog.primary_key_name and prop.updatable()
    ]


def build_insert(catalog: Catalog, dialect: str, returning: bool = False,
                 columns: Iterable[str] | None = None) -> tuple[str, list[str]]:
    """Generate an INSERT statement.

    Args:
        catalog: Catalog of the inserted class
        dialect: Database dialect ('postgresql', 'sqlite')
        returning: Append ``RETURNING`` for the generated column
        columns: Explicit column list, required for key-value row classes

    Returns
        SQL string with placeholders and the column order of its arguments
    """
    columns = insert_columns(catalog) if columns is None else list(columns)
    if not columns:
        raise MappingError(f'No insertable columns for table {catalog.table}')

    quoted_table = quote_identifier(catalog.table, dialect)
    quoted_columns = ', '.join(quote_identifier(col, dialect) for col in columns)
    placeholders = ', '.join([placeholder(dialect)] * len(columns))
    sql = f'INSERT INTO {quoted_table} ({quoted_columns}) VALUES ({placeholders})'

    if returning and catalog.generated_column_name is not None:
        sql += f' RETURNING {quote_identifier(catalog.generated_column_name, dialect)}'
    return sql, columns


def _require_primary_key(catalog: Catalog) -> str:
    if catalog.primary_key_name is None:
        raise MappingError(f'{catalog.mapped_type.__qualname__} declares no primary key')
    return catalog.primary_key_name


def build_update(catalog: Catalog, dialect: str) -> tuple[str, list[str]]:
    """Generate an UPDATE statement keyed by the primary key.

    The primary key is the last argument.
    """
    key = _require_primary_key(catalog)
    columns = update_columns(catalog)
    if not columns:
        raise MappingError(f'No updatable columns for table {catalog.table}')

    marker = placeholder(dialect)
    assignments = ', '.join(f'{quote_identifier(col, dialect)} = {marker}' for col in columns)
    sql = (f'UPDATE {quote_identifier(catalog.table, dialect)} SET {assignments} '
           f'WHERE {quote_identifier(key, dialect)} = {marker}')
    return sql, [*columns, key]


def build_select(catalog: Catalog, dialect: str, where: str | None = None) -> str:
    """Generate a SELECT of every mapped column.

    Args:
        where: WHERE clause (without 'WHERE' keyword)
    """
    quoted_table = quote_identifier(catalog.table, dialect)
    if catalog.column_names:
        select_clause = ', '.join(quote_identifier(col, dialect) for col in catalog.column_names)
    else:
        select_clause = '*'
    sql = f'SELECT {select_clause} FROM {quoted_table}'
    if where:
        sql += f' WHERE {where}'
    return sql


def build_delete(catalog: Catalog, dialect: str) -> tuple[str, list[str]]:
    """Generate a DELETE statement keyed by the primary key."""
    key = _require_primary_key(catalog)
    sql = (f'DELETE FROM {quote_identifier(catalog.table, dialect)} '
           f'WHERE {quote_identifier(key, dialect)} = {placeholder(dialect)}')
    return sql, [key]


def to_db_param(value: Any) -> Any:
    """Convert NumPy scalars to the Python types DB-API drivers accept."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def row_args(catalog: Catalog, instance: Any, columns: Iterable[str]) -> list[Any]:
    """Storable values of ``instance`` in statement argument order.

    Key-value rows are read by key.
    """
    if catalog.is_dynamic:
        return [to_db_param(instance[col]) for col in columns]
    return [to_db_param(catalog.get_value(instance, col)) for col in columns]
