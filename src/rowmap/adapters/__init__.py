"""
Value adapters used by the accessor and mutator.

- enum_codec: enum member <-> ordinal / name
- numeric: 32-bit <-> 64-bit integer coercion with range checks
"""
from rowmap.adapters.enum_codec import decode_enum, encode_enum, is_enum_type
from rowmap.adapters.numeric import INT32_MAX, INT32_MIN, coerce_generated_key
from rowmap.adapters.numeric import coerce_integer, narrow, widen

__all__ = [
    'decode_enum',
    'encode_enum',
    'is_enum_type',
    'coerce_integer',
    'coerce_generated_key',
    'narrow',
    'widen',
    'INT32_MAX',
    'INT32_MIN',
]
