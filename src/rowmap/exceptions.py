"""
Mapping-specific exception classes.
"""


class MappingError(Exception):
    """Base class for all rowmap errors.
    """


class DiscoveryError(MappingError):
    """Error introspecting a class while building its catalog.
    """


class UnknownPropertyError(MappingError):
    """No property with the requested name exists in the catalog.
    """


class ReadOnlyPropertyError(MappingError):
    """Write attempted on an accessor-backed property without a setter.
    """


class ReadFailureError(MappingError):
    """Reading a property from an instance failed.
    """


class WriteFailureError(MappingError):
    """Writing a property into an instance failed.
    """


class CoercionError(MappingError):
    """Error converting a value between storage and member representation.
    """


class NumericOverflowError(CoercionError):
    """Integer is above the range of the target member.
    """


class NumericUnderflowError(CoercionError):
    """Integer is below the range of the target member.
    """


class InvalidOrdinalError(CoercionError):
    """Ordinal is not a valid index into the enum's members.
    """


class EnumValueError(CoercionError):
    """String does not name any member of the enum.
    """


class GeneratedKeyError(MappingError):
    """Error writing a storage-generated key back into an inserted instance.
    """


class MaterializationError(MappingError):
    """Error constructing an instance from a retrieved row.
    """


CoercionErrors = (
    NumericOverflowError,
    NumericUnderflowError,
    InvalidOrdinalError,
    EnumValueError,
    )

AccessErrors = (
    UnknownPropertyError,
    ReadOnlyPropertyError,
    ReadFailureError,
    WriteFailureError,
    )
