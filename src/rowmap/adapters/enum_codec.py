"""
Enum encoding and decoding for mapped members.

Enums are stored either as their ordinal (position in declaration order) or
as their canonical string form, the member name.
"""
import enum
from numbers import Integral
from typing import Any

from rowmap.exceptions import EnumValueError, InvalidOrdinalError
from rowmap.metadata import EnumType

__all__ = ['is_enum_type', 'encode_enum', 'decode_enum', 'ordinal_of']


def is_enum_type(data_type: Any) -> bool:
    """Check if a static type is an enum class."""
    return isinstance(data_type, type) and issubclass(data_type, enum.Enum)


def ordinal_of(member: enum.Enum) -> int:
    """Position of a member in its enum's declaration order (aliases excluded).
    """
    for index, candidate in enumerate(type(member)):
        if candidate is member:
            return index
    raise InvalidOrdinalError(f'{member!r} is not a member of {type(member).__qualname__}')


def encode_enum(member: enum.Enum, enum_type: EnumType) -> int | str:
    """Convert an enum member to its storage form.
    """
    if enum_type is EnumType.ORDINAL:
        return ordinal_of(member)
    return member.name


def decode_enum(enum_cls: type[enum.Enum], enum_type: EnumType, value: Any) -> enum.Enum:
    """Convert a stored value back to a member of ``enum_cls``.

    Args:
        enum_cls: Target enum class
        enum_type: Storage encoding of the value
        value: Stored ordinal or member name

    Returns
        The matching enum member

    Raises
        InvalidOrdinalError: ordinal is not an integer or out of range
        EnumValueError: no member has the given name
    """
    if isinstance(value, enum_cls):
        return value
    members = list(enum_cls)
    if enum_type is EnumType.ORDINAL:
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise InvalidOrdinalError(
                f'Invalid ordinal {value!r} for enum class {enum_cls.__qualname__}')
        ordinal = int(value)
        if ordinal < 0 or ordinal >= len(members):
            raise InvalidOrdinalError(
                f'Invalid ordinal number {ordinal} for enum class {enum_cls.__qualname__}')
        return members[ordinal]

    text = str(value)
    for member in members:
        if member.name == text:
            return member
    raise EnumValueError(f'Enum value does not exist. value: {text}')
