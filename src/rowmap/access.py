"""
Value accessor and mutator.

Reading applies one outbound transform (serializer, enum encoding, or none)
to the raw member value. Writing applies one inbound transform (serializer,
enum decoding, integer width coercion, or none) before storing the value.
``None`` is never transformed.
"""
from typing import TYPE_CHECKING, Any

from rowmap.adapters.enum_codec import decode_enum, encode_enum
from rowmap.adapters.numeric import coerce_integer
from rowmap.descriptor import AccessorBacked, PropertyDescriptor
from rowmap.exceptions import ReadFailureError, ReadOnlyPropertyError
from rowmap.exceptions import WriteFailureError

if TYPE_CHECKING:
    from rowmap.catalog import Catalog

__all__ = ['read_value', 'write_value', 'to_storage', 'from_storage']


def to_storage(prop: PropertyDescriptor, value: Any) -> Any:
    """Outbound transform of a raw member value."""
    if value is None:
        return None
    if prop.serializer is not None:
        return prop.serializer.serialize(value)
    if prop.is_enum:
        return encode_enum(value, prop.enum_type)
    return value


def from_storage(prop: PropertyDescriptor, value: Any, owner: str = '') -> Any:
    """Inbound transform of a stored value."""
    if value is None:
        return None
    if prop.serializer is not None:
        return prop.serializer.deserialize(value, prop.data_type)
    if prop.is_enum:
        return decode_enum(prop.data_type, prop.enum_type, value)
    return coerce_integer(value, prop.data_type, label=f'property {owner}{prop.name}')


def read_value(catalog: 'Catalog', instance: Any, name: str) -> Any:
    """Read the named property from ``instance`` in its storable form.

    Raises
        UnknownPropertyError: name is not in the catalog
        ReadFailureError: the getter or attribute access failed

    Unassigned field-backed members read as None.
    """
    prop = catalog.get_property(name)
    storage = prop.storage
    try:
        if isinstance(storage, AccessorBacked):
            value = storage.getter(instance)
        else:
            value = getattr(instance, storage.attribute, None)
    except Exception as exc:
        raise ReadFailureError(
            f'Could not read property: {name} from {type(instance).__qualname__}') from exc
    return to_storage(prop, value)


def write_value(catalog: 'Catalog', instance: Any, name: str, value: Any) -> None:
    """Write a stored value into the named property of ``instance``.

    Raises
        UnknownPropertyError: name is not in the catalog
        ReadOnlyPropertyError: the property has a getter but no setter
        CoercionError: the value cannot be converted to the member's type
        WriteFailureError: the setter or attribute assignment failed
    """
    prop = catalog.get_property(name)
    if prop.is_read_only:
        raise ReadOnlyPropertyError(
            f'Property: {name} of {catalog.mapped_type.__qualname__} has no setter')

    value = from_storage(prop, value, owner=f'{catalog.mapped_type.__qualname__}.')

    storage = prop.storage
    try:
        if isinstance(storage, AccessorBacked):
            storage.setter(instance, value)
        else:
            setattr(instance, storage.attribute, value)
    except Exception as exc:
        raise WriteFailureError(
            f'Could not write value into {type(instance).__qualname__}. Property: {name} '
            f'of type: {type(value).__qualname__} value: {value!r}') from exc
