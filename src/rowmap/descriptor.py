"""
Property descriptors: immutable metadata for one mapped member.
"""
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rowmap.metadata import Column, DbSerializable, EnumType

__all__ = ['FieldBacked', 'AccessorBacked', 'PropertyDescriptor']


@dataclass(frozen=True)
class FieldBacked:
    """Member stored directly as an instance attribute."""
    attribute: str


@dataclass(frozen=True)
class AccessorBacked:
    """Member exposed through a property getter and optional setter."""
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None] | None = None


@dataclass(frozen=True)
class PropertyDescriptor:
    """Metadata describing one mapped member of a class.

    Built once during catalog discovery and never mutated afterwards.
    """
    name: str
    storage: FieldBacked | AccessorBacked
    data_type: Any = object
    is_primary_key: bool = False
    is_generated: bool = False
    is_enum: bool = False
    enum_type: EnumType | None = None
    serializer: DbSerializable | None = None
    column: Column | None = None

    @property
    def is_field_backed(self) -> bool:
        return isinstance(self.storage, FieldBacked)

    @property
    def is_read_only(self) -> bool:
        return isinstance(self.storage, AccessorBacked) and self.storage.setter is None

    @property
    def member_name(self) -> str:
        """Name of the underlying attribute or property on the class."""
        if isinstance(self.storage, FieldBacked):
            return self.storage.attribute
        return self.storage.getter.__name__

    def insertable(self) -> bool:
        return self.column is None or self.column.insertable

    def updatable(self) -> bool:
        return self.column is None or self.column.updatable
