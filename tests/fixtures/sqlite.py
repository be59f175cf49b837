import sqlite3

import config
import pytest


@pytest.fixture
def sqlite_conn():
    """Create an in-memory SQLite database for testing"""
    conn = sqlite3.connect(config.sqlite.database, detect_types=config.sqlite.detect_types)
    conn.row_factory = sqlite3.Row

    conn.execute("""
    CREATE TABLE accounts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        status INTEGER
    )
    """)
    conn.execute("""
    CREATE TABLE notes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        note_title TEXT,
        color TEXT,
        rank INTEGER,
        tags TEXT
    )
    """)

    yield conn
    conn.close()
