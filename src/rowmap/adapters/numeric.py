"""
Integer width coercion between storage values and mapped members.

Python integers are unbounded, so member widths are declared with NumPy
scalar types: a member annotated ``numpy.int32`` holds a 32-bit integer and a
member annotated ``numpy.int64`` a 64-bit one. Values arriving from a driver
as plain ``int`` are treated as 64-bit, which is how drivers report BIGINT and
how pandas reports integer columns.
"""
from typing import Any

import numpy as np
from rowmap.exceptions import NumericOverflowError, NumericUnderflowError

__all__ = [
    'INT32_MIN',
    'INT32_MAX',
    'is_int32_value',
    'is_int64_value',
    'expects_int32',
    'expects_int64',
    'widen',
    'narrow',
    'coerce_integer',
    'coerce_generated_key',
]

INT32_MIN = int(np.iinfo(np.int32).min)
INT32_MAX = int(np.iinfo(np.int32).max)


def is_int32_value(value: Any) -> bool:
    return isinstance(value, np.int32)


def is_int64_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int | np.int64)


def _is_subtype(data_type: Any, target: type) -> bool:
    return isinstance(data_type, type) and issubclass(data_type, target)


def expects_int32(data_type: Any) -> bool:
    """Check if a member's static type is a 32-bit integer."""
    return _is_subtype(data_type, np.int32)


def expects_int64(data_type: Any) -> bool:
    """Check if a member's static type is a 64-bit integer."""
    return _is_subtype(data_type, np.int64)


def widen(value: Any) -> np.int64:
    """Losslessly widen a 32-bit integer to 64 bits."""
    return np.int64(value)


def narrow(value: Any, label: str = 'value') -> np.int32:
    """Narrow a 64-bit integer to 32 bits with range checking.

    Args:
        value: Integer to narrow
        label: Description of the target, used in error messages

    Raises
        NumericOverflowError: value is above the 32-bit maximum
        NumericUnderflowError: value is below the 32-bit minimum
    """
    as_int = int(value)
    if as_int > INT32_MAX:
        raise NumericOverflowError(f'Provided value: {value} for {label} has overflown.')
    if as_int < INT32_MIN:
        raise NumericUnderflowError(f'Provided value: {value} for {label} has underflown.')
    return np.int32(as_int)


def coerce_integer(value: Any, data_type: Any, label: str = 'value') -> Any:
    """Apply width coercion when the value and member widths differ.

    Values that need no coercion are returned unchanged.
    """
    if is_int32_value(value) and expects_int64(data_type):
        return widen(value)
    if is_int64_value(value) and expects_int32(data_type):
        return narrow(value, label)
    return value


def coerce_generated_key(raw: Any, data_type: Any) -> Any:
    """Convert a storage-generated key to the width of the member receiving it.

    32-bit members receive the key as a 64-bit value so the mutator range
    checks it; 64-bit members receive ``numpy.int64``; anything else a
    Python ``int``.
    """
    key = int(raw)
    if expects_int64(data_type):
        return np.int64(key)
    return key
