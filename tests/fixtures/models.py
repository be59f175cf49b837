"""
Sample mapped classes for rowmap tests.

Usage:
    def test_status(account_catalog):
        row = Account(status=Status.CLOSED)
        assert account_catalog.get_value(row, 'status') == 1
"""
import enum
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, ClassVar, Final, Optional

import numpy as np
import pytest
from rowmap import Column, DbSerializer, Enumerated, EnumType, GeneratedValue
from rowmap import Id, Transient, build_catalog, table


class Status(enum.Enum):
    ACTIVE = 'active'
    CLOSED = 'closed'


class Color(enum.Enum):
    RED = 1
    GREEN = 2
    BLUE = 3
    CRIMSON = 1  # alias of RED, not a separate ordinal


class JsonSerializer:
    """Stores dict members as JSON text."""

    def serialize(self, value):
        return json.dumps(value, sort_keys=True)

    def deserialize(self, value, data_type):
        return data_type(json.loads(value))


class ColorCodeSerializer:
    """Stores colors by lower-case name, taking priority over enum handling."""

    def serialize(self, value):
        return value.name.lower()

    def deserialize(self, value, data_type):
        return data_type[value.upper()]


class BrokenSerializer:
    def __init__(self):
        raise RuntimeError('serializer needs configuration')

    def serialize(self, value):
        return value

    def deserialize(self, value, data_type):
        return value


@table('accounts')
class Account:
    id: Annotated[int, Id, GeneratedValue]
    status: Annotated[Status, Enumerated(EnumType.ORDINAL)]

    def __init__(self, id=None, status=None):
        self.id = id
        self.status = status


class Person:
    registry: ClassVar[dict] = {}
    VERSION: Final = 2
    first_name: Annotated[str, Column(name='  given_name  ')]
    middle_name: Annotated[str, Column(name='   ')]
    nickname: Annotated[str, Transient]
    _secret: str
    age: np.int32
    visits: np.int64
    color: Color
    favorite: Optional[Annotated[Color, Enumerated(EnumType.ORDINAL)]]
    code: Annotated[Color, DbSerializer(ColorCodeSerializer)]
    payload: Annotated[dict, DbSerializer(JsonSerializer)]
    label: str

    def __init__(self):
        self.first_name = None
        self.middle_name = None
        self.nickname = None
        self._secret = None
        self.age = None
        self.visits = None
        self.color = None
        self.favorite = None
        self.code = None
        self.payload = None
        self._label = None

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value):
        self._label = value

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.middle_name}'

    @property
    def cached(self) -> Annotated[int, Transient]:
        return 0

    @property
    def _hidden(self) -> str:
        return 'hidden'


class Ledger:
    """Accessor-backed members only."""

    def __init__(self):
        self._number = None
        self._amount = None

    @property
    def number(self) -> Annotated[np.int32, Id, GeneratedValue, Column(name='ledger_no')]:
        return self._number

    @number.setter
    def number(self, value):
        self._number = value

    @property
    def amount(self) -> Decimal:
        return self._amount

    @amount.setter
    def amount(self, value):
        if not isinstance(value, Decimal):
            raise TypeError(f'amount must be Decimal, got {type(value).__name__}')
        self._amount = value

    @property
    def broken(self) -> str:
        raise RuntimeError('not loaded')


class Event:
    id: Annotated[np.int64, Id, GeneratedValue]
    name: str

    def __init__(self):
        self.id = None
        self.name = None


@table('notes')
class Note:
    id: Annotated[np.int64, Id, GeneratedValue]
    title: Annotated[str, Column(name='note_title')]
    color: Color
    rank: np.int32
    tags: Annotated[dict, DbSerializer(JsonSerializer)]

    def __init__(self):
        self.id = None
        self.title = None
        self.color = None
        self.rank = None
        self.tags = None


class TwoKeys:
    first: Annotated[int, Id, GeneratedValue]
    second: Annotated[int, Id, GeneratedValue]


class BaseEntity:
    id: Annotated[int, Id]
    created: str


class Invoice(BaseEntity):
    total: int
    created: Annotated[str, Column(name='created_at')]


class Record(dict):
    """Key-value row whose members are never introspected."""
    id: Annotated[int, Id, GeneratedValue]
    name: str

    @property
    def title(self) -> str:
        return self.get('name', '')


@table('  events_log  ')
class LoggedEvent(dict):
    pass


@dataclass(frozen=True)
class Point:
    x: int = 0
    y: int = 0


class BrokenEntity:
    value: Annotated[str, DbSerializer(BrokenSerializer)]


class NeedsArgs:
    name: str

    def __init__(self, name):
        self.name = name


@pytest.fixture
def account_catalog():
    return build_catalog(Account)


@pytest.fixture
def person_catalog():
    return build_catalog(Person)


@pytest.fixture
def ledger_catalog():
    return build_catalog(Ledger)


@pytest.fixture
def event_catalog():
    return build_catalog(Event)
