"""
Tests for statement text generated from catalogs.
"""
import numpy as np
import pytest
from rowmap import MappingError, build_catalog
from rowmap.sqlmaker import build_delete, build_insert, build_select, build_update
from rowmap.sqlmaker import insert_columns, placeholder, quote_identifier
from rowmap.sqlmaker import row_args, to_db_param, update_columns

from tests.fixtures.models import Color, Invoice, LoggedEvent, Note, Person


@pytest.fixture
def note_catalog():
    return build_catalog(Note)


def test_quote_identifier():
    assert quote_identifier('notes', 'sqlite') == '"notes"'
    assert quote_identifier('we"ird', 'postgresql') == '"we""ird"'
    with pytest.raises(ValueError, match='Unknown dialect'):
        quote_identifier('notes', 'oracle')


def test_placeholder():
    assert placeholder('postgresql') == '%s'
    assert placeholder('sqlite') == '?'
    with pytest.raises(ValueError, match='Unknown dialect'):
        placeholder('oracle')


def test_generated_column_not_inserted(note_catalog):
    assert insert_columns(note_catalog) == ['note_title', 'color', 'rank', 'tags']
    assert update_columns(note_catalog) == ['note_title', 'color', 'rank', 'tags']


def test_build_insert(note_catalog):
    sql, columns = build_insert(note_catalog, 'sqlite')
    assert sql == ('INSERT INTO "notes" ("note_title", "color", "rank", "tags") '
                   'VALUES (?, ?, ?, ?)')
    assert columns == ['note_title', 'color', 'rank', 'tags']


def test_build_insert_returning(note_catalog):
    sql, _ = build_insert(note_catalog, 'postgresql', returning=True)
    assert sql.endswith('VALUES (%s, %s, %s, %s) RETURNING "id"')


def test_build_insert_key_value_rows():
    catalog = build_catalog(LoggedEvent)
    with pytest.raises(MappingError, match='No insertable columns'):
        build_insert(catalog, 'sqlite')
    sql, columns = build_insert(catalog, 'sqlite', columns=['kind'])
    assert sql == 'INSERT INTO "events_log" ("kind") VALUES (?)'
    assert columns == ['kind']


def test_build_update(note_catalog):
    sql, columns = build_update(note_catalog, 'postgresql')
    assert sql == ('UPDATE "notes" SET "note_title" = %s, "color" = %s, "rank" = %s, '
                   '"tags" = %s WHERE "id" = %s')
    assert columns[-1] == 'id'


def test_build_update_inherited_key():
    sql, columns = build_update(build_catalog(Invoice), 'sqlite')
    assert sql == 'UPDATE "Invoice" SET "created_at" = ?, "total" = ? WHERE "id" = ?'
    assert columns == ['created_at', 'total', 'id']


def test_build_select(note_catalog):
    assert build_select(note_catalog, 'sqlite') == (
        'SELECT "id", "note_title", "color", "rank", "tags" FROM "notes"')
    assert build_select(note_catalog, 'sqlite', where='"id" = ?').endswith(' WHERE "id" = ?')
    assert build_select(build_catalog(LoggedEvent), 'sqlite') == 'SELECT * FROM "events_log"'


def test_build_delete(note_catalog):
    sql, columns = build_delete(note_catalog, 'sqlite')
    assert sql == 'DELETE FROM "notes" WHERE "id" = ?'
    assert columns == ['id']


def test_no_primary_key():
    with pytest.raises(MappingError, match='declares no primary key'):
        build_delete(build_catalog(Person), 'sqlite')


def test_to_db_param():
    value = to_db_param(np.int32(3))
    assert type(value) is int
    assert to_db_param('x') == 'x'
    assert to_db_param(None) is None


def test_row_args(note_catalog):
    note = Note()
    note.title = 'a'
    note.color = Color.BLUE
    note.rank = np.int32(7)
    note.tags = {'k': 1}
    _, columns = build_insert(note_catalog, 'sqlite')
    args = row_args(note_catalog, note, columns)
    assert args == ['a', 'BLUE', 7, '{"k": 1}']
    assert type(args[2]) is int


def test_row_args_key_value_rows():
    catalog = build_catalog(LoggedEvent)
    assert row_args(catalog, LoggedEvent(kind='start', seq=np.int64(2)), ['seq', 'kind']) == [2, 'start']


if __name__ == '__main__':
    __import__('pytest').main([__file__])
