"""
Property catalog: per-class discovery of mapped members.

A catalog is built once per class. Discovery runs in two passes:

1. Annotated public attributes become field-backed descriptors.
2. Public properties become accessor-backed descriptors, replacing any
   field-backed descriptor registered under the same name.

The resulting name-indexed table, together with the table name, primary-key
name and generated-column name, is immutable. Per-row work (reading and
writing values) is delegated to ``rowmap.access`` and ``rowmap.keys``.
"""
import inspect
import logging
import types
from collections.abc import Iterator, Mapping
from typing import Annotated, Any, ClassVar, Final, Union, get_args, get_origin
from typing import get_type_hints

from rowmap.access import read_value, write_value
from rowmap.adapters.enum_codec import is_enum_type
from rowmap.descriptor import AccessorBacked, FieldBacked, PropertyDescriptor
from rowmap.exceptions import DiscoveryError, UnknownPropertyError
from rowmap.keys import populate_generated_key
from rowmap.metadata import Column, DbSerializer, Enumerated, EnumType
from rowmap.metadata import GeneratedValue, Id, Transient, find_marker
from rowmap.metadata import get_table_override
from rowmap.options import MappingOptions, resolve_options

logger = logging.getLogger(__name__)

__all__ = ['Catalog', 'build_catalog', 'is_dynamic_type']

_CLASS_LEVEL = (ClassVar, Final)


def is_dynamic_type(cls: type) -> bool:
    """Check if instances of ``cls`` are generic key-value containers."""
    return isinstance(cls, type) and issubclass(cls, Mapping)


def _strip_annotated(annotation: Any) -> tuple[Any, tuple]:
    if get_origin(annotation) is Annotated:
        return annotation.__origin__, tuple(annotation.__metadata__)
    return annotation, ()


def split_annotation(annotation: Any) -> tuple[Any, tuple]:
    """Split a type hint into its static type and its ``Annotated`` metadata.

    ``X | None`` is reduced to ``X``; metadata found on either level is kept.
    """
    data_type, metadata = _strip_annotated(annotation)
    if get_origin(data_type) in {Union, types.UnionType}:
        args = [arg for arg in get_args(data_type) if arg is not type(None)]
        if len(args) == 1:
            data_type, inner = _strip_annotated(args[0])
            metadata = inner + metadata
    return data_type, metadata


def _is_class_level(annotation: Any) -> bool:
    return annotation in _CLASS_LEVEL or get_origin(annotation) in _CLASS_LEVEL


def _getter_annotation(getter: Any) -> Any:
    if not inspect.isfunction(getter) and not inspect.ismethod(getter):
        return object
    return get_type_hints(getter, include_extras=True).get('return', object)


class _Discovery:
    """Mutable state of one catalog build."""

    def __init__(self, cls: type, options: MappingOptions):
        self.cls = cls
        self.options = options
        self.properties: dict[str, PropertyDescriptor] = {}
        self.primary_key_name: str | None = None
        self.generated_column_name: str | None = None

    def run(self) -> None:
        self.discover_fields()
        self.discover_accessors()

    def discover_fields(self) -> None:
        hints = get_type_hints(self.cls, include_extras=True)
        for attribute, annotation in hints.items():
            if attribute.startswith('_') or _is_class_level(annotation):
                continue
            data_type, metadata = split_annotation(annotation)
            if _is_class_level(data_type) or find_marker(metadata, Transient):
                continue
            self.add(attribute, FieldBacked(attribute), data_type, metadata)

    def discover_accessors(self) -> None:
        names: dict[str, None] = {}
        for klass in reversed(self.cls.__mro__):
            if klass is object:
                continue
            for name, member in vars(klass).items():
                if isinstance(member, property) and not name.startswith('_'):
                    names[name] = None

        for name in names:
            prop = inspect.getattr_static(self.cls, name, None)
            if not isinstance(prop, property) or prop.fget is None:
                continue
            data_type, metadata = split_annotation(_getter_annotation(prop.fget))
            if find_marker(metadata, Transient):
                continue
            self.add(name, AccessorBacked(prop.fget, prop.fset), data_type, metadata)

    def add(self, name: str, storage: FieldBacked | AccessorBacked,
            data_type: Any, metadata: tuple) -> None:
        """Apply member metadata and register the descriptor under its final name.
        """
        column = find_marker(metadata, Column)
        if column is not None and column.name.strip():
            name = column.name.strip()

        is_primary_key = find_marker(metadata, Id) is not None
        if is_primary_key:
            self.primary_key_name = self._claim('primary key', self.primary_key_name, name)

        is_generated = find_marker(metadata, GeneratedValue) is not None
        if is_generated:
            self.generated_column_name = self._claim('generated column',
                                                     self.generated_column_name, name)

        is_enum = is_enum_type(data_type)
        enum_type = None
        if is_enum:
            enum_type = EnumType.STRING
            enumerated = find_marker(metadata, Enumerated)
            if enumerated is not None:
                enum_type = enumerated.value

        serializer = None
        reference = find_marker(metadata, DbSerializer)
        if reference is not None:
            serializer = reference.value()

        self.properties[name] = PropertyDescriptor(
            name=name,
            storage=storage,
            data_type=data_type,
            is_primary_key=is_primary_key,
            is_generated=is_generated,
            is_enum=is_enum,
            enum_type=enum_type,
            serializer=serializer,
            column=column,
        )

    def _claim(self, role: str, current: str | None, name: str) -> str:
        if current is not None and current != name:
            if self.options.strict_keys:
                raise DiscoveryError(
                    f'{self.cls.__qualname__} declares more than one {role}: {current}, {name}')
            logger.warning(f'{self.cls.__qualname__}: {role} {current} replaced by {name}')
        return name


class Catalog:
    """Immutable mapping metadata for one class.

    Attributes
        mapped_type: The class the catalog describes
        table: Storage table name
        primary_key_name: Name of the primary-key property, if any
        generated_column_name: Name of the storage-generated property, if any
        properties: Read-only mapping of property name to PropertyDescriptor
        is_dynamic: True for key-value container classes, whose catalog is empty
    """

    __slots__ = ('mapped_type', 'table', 'primary_key_name', 'generated_column_name',
                 'properties', 'is_dynamic')

    def __init__(self, cls: type,
                 options: MappingOptions | dict[str, Any] | None = None):
        options = resolve_options(options)
        discovery = _Discovery(cls, options)
        dynamic = is_dynamic_type(cls)
        try:
            if not dynamic:
                discovery.run()
            table = get_table_override(cls) or cls.__name__
        except DiscoveryError:
            raise
        except Exception as exc:
            raise DiscoveryError(f'Could not build catalog for {cls!r}: {exc}') from exc

        set_ = object.__setattr__
        set_(self, 'mapped_type', cls)
        set_(self, 'table', table)
        set_(self, 'primary_key_name', discovery.primary_key_name)
        set_(self, 'generated_column_name', discovery.generated_column_name)
        set_(self, 'properties', types.MappingProxyType(discovery.properties))
        set_(self, 'is_dynamic', dynamic)
        logger.debug(f'Built catalog for {cls.__qualname__}: table={table}, '
                     f'{len(discovery.properties)} properties')

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'Catalog is immutable, cannot set {name}')

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f'Catalog is immutable, cannot delete {name}')

    def __repr__(self) -> str:
        return (f'Catalog({self.mapped_type.__qualname__}, table={self.table!r}, '
                f'columns={self.column_names!r})')

    def __contains__(self, name: object) -> bool:
        return name in self.properties

    def __iter__(self) -> Iterator[PropertyDescriptor]:
        return iter(self.properties.values())

    def __len__(self) -> int:
        return len(self.properties)

    @property
    def column_names(self) -> list[str]:
        return list(self.properties)

    def get_property(self, name: str) -> PropertyDescriptor:
        """Return the descriptor for ``name``.

        Raises
            UnknownPropertyError: no property has that name
        """
        try:
            return self.properties[name]
        except KeyError:
            raise UnknownPropertyError(
                f'No such property: {name} on {self.mapped_type.__qualname__}') from None

    def get_value(self, instance: Any, name: str) -> Any:
        """Read a property from ``instance`` in its storable form."""
        return read_value(self, instance, name)

    def put_value(self, instance: Any, name: str, value: Any) -> None:
        """Write a stored value into ``instance``."""
        write_value(self, instance, name, value)

    def populate_generated_key(self, source: Any, instance: Any) -> None:
        """Write the key generated by an insert back into ``instance``."""
        populate_generated_key(self, source, instance)


def build_catalog(cls: type,
                  options: MappingOptions | dict[str, Any] | None = None) -> Catalog:
    """Build a new catalog for ``cls`` without consulting the catalog cache.
    """
    return Catalog(cls, options)
