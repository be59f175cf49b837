"""
Generated-key population after inserts.
"""
import logging
from typing import TYPE_CHECKING, Any

from rowmap.access import write_value
from rowmap.adapters.numeric import coerce_generated_key
from rowmap.exceptions import GeneratedKeyError
from rowmap.row import RowAdapter

if TYPE_CHECKING:
    from rowmap.catalog import Catalog

logger = logging.getLogger(__name__)

__all__ = ['populate_generated_key', 'first_generated_value']

_NO_VALUE = object()


def _next_row(source: Any) -> Any:
    if hasattr(source, 'fetchone'):
        row = source.fetchone() if getattr(source, 'description', True) else None
        if row is None:
            lastrowid = getattr(source, 'lastrowid', None)
            return _NO_VALUE if lastrowid is None else lastrowid
        return row
    return next(iter(source), _NO_VALUE)


def first_generated_value(source: Any) -> Any:
    """Read the first generated value from a key source.

    Args:
        source: A DB-API cursor (after ``INSERT ... RETURNING`` or a plain
            insert exposing ``lastrowid``) or any iterable of keys or rows

    Returns
        The first column of the first row, or the first item itself

    Raises
        GeneratedKeyError: the source yields nothing
    """
    row = _next_row(source)
    if row is _NO_VALUE:
        raise GeneratedKeyError('Generated key source yielded no value')
    value = RowAdapter(row).get_value()
    if value is None:
        raise GeneratedKeyError('Generated key source yielded no value')
    return value


def populate_generated_key(catalog: 'Catalog', source: Any, instance: Any) -> None:
    """Write the storage-generated key into ``instance``.

    The key is coerced to the width of the generated property and written
    through the mutator under the catalog's generated column name.

    Raises
        GeneratedKeyError: no generated column is declared, the source yields
            nothing, or the key cannot be written
    """
    name = catalog.generated_column_name
    if name is None:
        raise GeneratedKeyError(
            f'{catalog.mapped_type.__qualname__} declares no generated column')
    try:
        prop = catalog.get_property(name)
        key = coerce_generated_key(first_generated_value(source), prop.data_type)
        write_value(catalog, instance, name, key)
    except GeneratedKeyError:
        raise
    except Exception as exc:
        raise GeneratedKeyError(
            f'Could not populate generated key {name} on '
            f'{type(instance).__qualname__}: {exc}') from exc
    logger.debug(f'Populated generated key {name}={key} on {type(instance).__qualname__}')
