"""
Object/row mapping for relational storage.

Discovers the persisted members of a class once (its catalog) and translates
values between instances and storable column values on every read and write.

Operations can be called either as:
- Module functions: rowmap.get_value(row, 'status')
- Catalog methods: rowmap.get_catalog(Account).get_value(row, 'status')

The module functions look up the shared catalog of the instance's class.
"""
__version__ = '0.1.0'

from typing import Any

from rowmap.cache import Cache, get_catalog
from rowmap.catalog import Catalog, build_catalog
from rowmap.data import from_dataframe, from_row, from_rows, to_dataframe
from rowmap.data import to_row, to_rows
from rowmap.descriptor import AccessorBacked, FieldBacked, PropertyDescriptor
from rowmap.exceptions import AccessErrors, CoercionError, CoercionErrors
from rowmap.exceptions import DiscoveryError, EnumValueError, GeneratedKeyError
from rowmap.exceptions import InvalidOrdinalError, MappingError
from rowmap.exceptions import MaterializationError, NumericOverflowError
from rowmap.exceptions import NumericUnderflowError, ReadFailureError
from rowmap.exceptions import ReadOnlyPropertyError, UnknownPropertyError
from rowmap.exceptions import WriteFailureError
from rowmap.metadata import Column, DbSerializable, DbSerializer, Enumerated
from rowmap.metadata import EnumType, GeneratedValue, Id, Transient, table
from rowmap.options import MappingOptions


def get_value(instance: Any, name: str) -> Any:
    """Read a property from an instance in its storable form.
    """
    return get_catalog(type(instance)).get_value(instance, name)


def put_value(instance: Any, name: str, value: Any) -> None:
    """Write a stored value into a property of an instance.
    """
    get_catalog(type(instance)).put_value(instance, name, value)


def populate_generated_key(source: Any, instance: Any) -> None:
    """Write the key generated by an insert back into the inserted instance.
    """
    get_catalog(type(instance)).populate_generated_key(source, instance)


__all__ = [
    'get_catalog',
    'build_catalog',
    'Catalog',
    'Cache',
    'MappingOptions',
    'PropertyDescriptor',
    'FieldBacked',
    'AccessorBacked',
    'get_value',
    'put_value',
    'populate_generated_key',
    'to_row',
    'to_rows',
    'from_row',
    'from_rows',
    'to_dataframe',
    'from_dataframe',
    'Column',
    'Id',
    'GeneratedValue',
    'Transient',
    'Enumerated',
    'EnumType',
    'DbSerializer',
    'DbSerializable',
    'table',
    'MappingError',
    'DiscoveryError',
    'UnknownPropertyError',
    'ReadOnlyPropertyError',
    'ReadFailureError',
    'WriteFailureError',
    'CoercionError',
    'NumericOverflowError',
    'NumericUnderflowError',
    'InvalidOrdinalError',
    'EnumValueError',
    'GeneratedKeyError',
    'MaterializationError',
    'CoercionErrors',
    'AccessErrors',
]
