"""
Declarative column metadata recognized during catalog discovery.

Markers are attached with ``typing.Annotated``, either on a class annotation
(field-backed members) or on the return annotation of a property getter
(accessor-backed members):

    @table('accounts')
    class Account:
        id: Annotated[int, Id, GeneratedValue]
        status: Annotated[Status, Enumerated(EnumType.ORDINAL)]
        cache: Annotated[dict, Transient]

        @property
        def display(self) -> Annotated[str, Column(name='display_name')]:
            ...

A marker may be given as an instance (``Id()``) or as the bare class (``Id``).
"""
import enum
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

__all__ = [
    'Column',
    'Id',
    'GeneratedValue',
    'Transient',
    'EnumType',
    'Enumerated',
    'DbSerializable',
    'DbSerializer',
    'table',
    'get_table_override',
    'find_marker',
]

TABLE_ATTRIBUTE = '__rowmap_table__'


class EnumType(enum.Enum):
    """Storage encoding for enum-typed members.
    """
    ORDINAL = 'ordinal'
    STRING = 'string'


@dataclass(frozen=True)
class Column:
    """Column metadata for a mapped member.

    Only ``name`` is interpreted by the mapping core. The remaining attributes
    are carried on the descriptor for statement generation.
    """
    name: str = ''
    insertable: bool = True
    updatable: bool = True
    nullable: bool = True
    length: int | None = None
    precision: int | None = None
    scale: int | None = None
    column_definition: str | None = None


@dataclass(frozen=True)
class Id:
    """Marks the primary-key member."""


@dataclass(frozen=True)
class GeneratedValue:
    """Marks the member whose value the storage layer assigns on insert."""


@dataclass(frozen=True)
class Transient:
    """Excludes a member from mapping."""


@dataclass(frozen=True)
class Enumerated:
    """Overrides the storage encoding of an enum-typed member."""
    value: EnumType = EnumType.STRING


@runtime_checkable
class DbSerializable(Protocol):
    """Custom conversion between a member value and its stored form.
    """

    def serialize(self, value: Any) -> Any:
        ...

    def deserialize(self, value: Any, data_type: type) -> Any:
        ...


@dataclass(frozen=True)
class DbSerializer:
    """References the ``DbSerializable`` class used for a member.

    The class is instantiated once, without arguments, during discovery.
    """
    value: type


def table(name: str):
    """Class decorator overriding the storage table name.

    Usage:
        @table('accounts')
        class Account:
            ...
    """
    def decorator(cls: type) -> type:
        setattr(cls, TABLE_ATTRIBUTE, name)
        return cls
    return decorator


def get_table_override(cls: type) -> str | None:
    """Return the trimmed table override declared on ``cls`` itself, if any.
    """
    name = vars(cls).get(TABLE_ATTRIBUTE)
    if name is None:
        return None
    name = str(name).strip()
    return name or None


def find_marker(metadata: tuple, marker_cls: type) -> Any | None:
    """Find a marker in ``Annotated`` metadata.

    Returns the marker instance, a default instance when the bare class was
    used, or None when absent. The last occurrence wins.
    """
    found = None
    for item in metadata:
        if item is marker_cls:
            found = marker_cls() if marker_cls is not DbSerializer else None
        elif isinstance(item, marker_cls):
            found = item
    return found
