"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and for bootstrapping the schema (``init_db``).
It backs the ``sqlite`` variant of the record store: each collection
lives in its own table, with a ``position`` column preserving insertion
order and a ``sequences`` table holding the id counters.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS materias (
            id INTEGER PRIMARY KEY,
            position INTEGER NOT NULL,
            nome TEXT NOT NULL,
            created_at TEXT,
            updated_at TEXT
        );

        CREATE TABLE IF NOT EXISTS professores (
            id INTEGER PRIMARY KEY,
            position INTEGER NOT NULL,
            nome TEXT NOT NULL,
            -- JSON array of materia ids
            materias TEXT NOT NULL DEFAULT '[]',
            created_at TEXT,
            updated_at TEXT
        );

        CREATE TABLE IF NOT EXISTS aulas (
            id INTEGER PRIMARY KEY,
            position INTEGER NOT NULL,
            data TEXT NOT NULL,
            horario TEXT NOT NULL,
            professor_id INTEGER NOT NULL,
            turma TEXT NOT NULL,
            created_at TEXT,
            updated_at TEXT
        );

        CREATE TABLE IF NOT EXISTS trocas (
            id INTEGER PRIMARY KEY,
            position INTEGER NOT NULL,
            aula_id INTEGER NOT NULL,
            professor_original_id INTEGER NOT NULL,
            professor_substituto_id INTEGER NOT NULL,
            motivo TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'PENDING',
            created_at TEXT,
            updated_at TEXT
        );
        """,
    ),
    # Migration 2: persisted id counters so ids are never reused
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS sequences (
            name TEXT PRIMARY KEY,
            value INTEGER NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_aulas_slot ON aulas(data, horario);
        CREATE INDEX IF NOT EXISTS idx_trocas_aula_id ON trocas(aula_id);
        """,
    ),
]


def get_database_path(db_url: str) -> str:
    """Compute the path to the SQLite database file.

    An absolute path is used as is.
    Otherwise the path is resolved relative to the project root.
    """
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Values come back exactly as stored (strings and integers).
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block succeeds and rolled
    back when it raises.
    """
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Create the database if needed and apply pending migrations."""
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
