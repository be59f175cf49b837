"""Row adapter giving uniform access to driver rows."""
from numbers import Number
from typing import Any


class RowAdapter:
    """Simple row adapter for converting database rows to dictionaries.

    Handles plain dicts, ``sqlite3.Row``, namedtuples, sequences and scalars.
    """

    def __init__(self, row: Any):
        self.row = row

    def to_dict(self) -> dict[str, Any]:
        """Convert row to dictionary."""
        # sqlite3.Row
        if hasattr(self.row, 'keys') and callable(self.row.keys):
            return {key: self.row[key] for key in self.row.keys()}  # noqa: SIM118
        # Namedtuple
        if hasattr(self.row, '_asdict'):
            return self.row._asdict()
        raise TypeError(f'Row of type {type(self.row).__qualname__} has no column names')

    def get_value(self, key: str | None = None) -> Any:
        """Get a value from the row, or its first column when no key is given."""
        if key is not None:
            if hasattr(self.row, 'keys'):
                return self.row[key]
            return getattr(self.row, key)

        if isinstance(self.row, Number | str | bytes):
            return self.row
        if hasattr(self.row, 'keys') and callable(self.row.keys):
            keys = list(self.row.keys())
            return self.row[keys[0]] if keys else None
        if hasattr(self.row, '__getitem__'):
            return self.row[0] if len(self.row) else None
        return self.row
