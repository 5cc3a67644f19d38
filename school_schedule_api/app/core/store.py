"""
Record store for the four scheduling collections.

The whole state of the API is a single ``Dataset``: the ``materias``,
``professores``, ``aulas`` and ``trocas`` collections plus the id
counters.  A store hands out a fresh ``Dataset`` on every ``load`` and
replaces the persisted representation on every ``save``; nothing is
cached between requests.

Two implementations are provided:

* :class:`JsonFileStore` keeps one JSON document on disk and rewrites it
  atomically (temporary file + ``os.replace``).
* :class:`SqliteStore` keeps one table per collection and rewrites every
  row inside a single transaction.

Both raise :class:`StoreFailure` when the medium cannot be read or
written.  Use :func:`build_store` to pick one from the settings.
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .config import Settings
from .db import get_connection, get_cursor, get_database_path, init_db
from .errors import StoreFailure


logger = logging.getLogger(__name__)

COLLECTIONS = ("materias", "professores", "aulas", "trocas")


@dataclass
class Dataset:
    """In-memory copy of every collection, in insertion order."""

    materias: List[Dict[str, Any]] = field(default_factory=list)
    professores: List[Dict[str, Any]] = field(default_factory=list)
    aulas: List[Dict[str, Any]] = field(default_factory=list)
    trocas: List[Dict[str, Any]] = field(default_factory=list)
    # Last id handed out per collection.  Only collections that ever
    # received an id through the services appear here.
    sequences: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: Any) -> "Dataset":
        """Build a dataset from a decoded document.

        Missing or malformed collections become empty lists so that a
        partially initialised document can still be served.
        """
        if not isinstance(document, dict):
            logger.warning("Document root is not an object; serving empty collections")
            document = {}
        unknown = sorted(set(document) - set(COLLECTIONS) - {"sequences"})
        if unknown:
            logger.warning("Ignoring unknown top-level keys: %s", ", ".join(map(str, unknown)))
        collections = {}
        for name in COLLECTIONS:
            items = document.get(name)
            if items is not None and not isinstance(items, list):
                logger.warning("Collection %s is not a list; treating it as empty", name)
            if not isinstance(items, list):
                items = []
            records = [item for item in items if isinstance(item, dict)]
            if len(records) != len(items):
                logger.warning(
                    "Discarding %d malformed record(s) from %s", len(items) - len(records), name
                )
            collections[name] = records
        raw_sequences = document.get("sequences")
        sequences = {}
        if isinstance(raw_sequences, dict):
            sequences = {
                name: value
                for name, value in raw_sequences.items()
                if name in COLLECTIONS and isinstance(value, int)
            }
        return cls(sequences=sequences, **collections)

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {name: getattr(self, name) for name in COLLECTIONS}
        if self.sequences:
            document["sequences"] = dict(self.sequences)
        return document


class RecordStore:
    """Interface shared by the persistence backends."""

    backend = "abstract"

    def open(self) -> None:
        """Prepare the medium (create the file or the tables)."""

    def close(self) -> None:
        """Release resources held by the store."""

    def load(self) -> Dataset:
        raise NotImplementedError

    def save(self, dataset: Dataset) -> None:
        raise NotImplementedError


class JsonFileStore(RecordStore):
    """Store the dataset as one JSON document on disk."""

    backend = "json"

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def open(self) -> None:
        try:
            self._ensure_document()
        except OSError as exc:
            logger.exception("Could not initialise %s", self.path)
            raise StoreFailure("Erro ao inicializar o banco de dados") from exc
        logger.info("JSON store ready at %s", self.path)

    def load(self) -> Dataset:
        try:
            self._ensure_document()
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.exception("Error reading %s", self.path)
            raise StoreFailure("Erro ao ler o banco de dados") from exc
        try:
            document = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Document %s is not valid JSON; serving empty collections", self.path)
            document = {}
        return Dataset.from_document(document)

    def save(self, dataset: Dataset) -> None:
        try:
            self._write(dataset.to_document())
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Error writing %s", self.path)
            raise StoreFailure("Erro ao gravar no banco de dados") from exc

    def _ensure_document(self) -> None:
        if not self.path.exists():
            self._write(Dataset().to_document())

    def _write(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


# Column name -> document key, per table.  The order is the column
# order used for inserts.
_COLUMNS: Dict[str, List[tuple[str, str]]] = {
    "materias": [
        ("id", "id"),
        ("nome", "nome"),
        ("created_at", "createdAt"),
        ("updated_at", "updatedAt"),
    ],
    "professores": [
        ("id", "id"),
        ("nome", "nome"),
        ("materias", "materias"),
        ("created_at", "createdAt"),
        ("updated_at", "updatedAt"),
    ],
    "aulas": [
        ("id", "id"),
        ("data", "data"),
        ("horario", "horario"),
        ("professor_id", "professorId"),
        ("turma", "turma"),
        ("created_at", "createdAt"),
        ("updated_at", "updatedAt"),
    ],
    "trocas": [
        ("id", "id"),
        ("aula_id", "aulaId"),
        ("professor_original_id", "professorOriginalId"),
        ("professor_substituto_id", "professorSubstitutoId"),
        ("motivo", "motivo"),
        ("status", "status"),
        ("created_at", "createdAt"),
        ("updated_at", "updatedAt"),
    ],
}

# Columns holding JSON-encoded lists.
_JSON_COLUMNS = {("professores", "materias")}

# Keys left out of a loaded record when the column is NULL.
_OPTIONAL_KEYS = {"createdAt", "updatedAt"}


class SqliteStore(RecordStore):
    """Store each collection in its own SQLite table.

    ``save`` deletes and re-inserts every row of the four tables inside
    one transaction, which gives the same replace-all semantics as the
    JSON document.
    """

    backend = "sqlite"

    def __init__(self, db_url: str) -> None:
        self.db_path = get_database_path(db_url)
        self._ready = False

    def open(self) -> None:
        self._ensure_schema()
        logger.info("SQLite store ready at %s", self.db_path)

    def close(self) -> None:
        self._ready = False

    def load(self) -> Dataset:
        self._ensure_schema()
        conn = None
        try:
            conn = get_connection(self.db_path)
            cursor = conn.cursor()
            collections = {}
            for table, columns in _COLUMNS.items():
                names = ", ".join(column for column, _ in columns)
                rows = cursor.execute(
                    f"SELECT {names} FROM {table} ORDER BY position ASC"
                ).fetchall()
                collections[table] = [self._row_to_record(table, row) for row in rows]
            rows = cursor.execute("SELECT name, value FROM sequences").fetchall()
            sequences = {row["name"]: row["value"] for row in rows}
        except (sqlite3.Error, ValueError) as exc:
            logger.exception("Error reading %s", self.db_path)
            raise StoreFailure("Erro ao ler o banco de dados") from exc
        finally:
            if conn is not None:
                conn.close()
        return Dataset.from_document({**collections, "sequences": sequences})

    def save(self, dataset: Dataset) -> None:
        self._ensure_schema()
        try:
            with get_cursor(self.db_path) as cursor:
                for table, columns in _COLUMNS.items():
                    cursor.execute(f"DELETE FROM {table}")
                    names = ", ".join(["position"] + [column for column, _ in columns])
                    marks = ", ".join("?" for _ in range(len(columns) + 1))
                    cursor.executemany(
                        f"INSERT INTO {table} ({names}) VALUES ({marks})",
                        [
                            self._record_to_row(table, position, record)
                            for position, record in enumerate(getattr(dataset, table))
                        ],
                    )
                cursor.execute("DELETE FROM sequences")
                cursor.executemany(
                    "INSERT INTO sequences (name, value) VALUES (?, ?)",
                    list(dataset.sequences.items()),
                )
        except (sqlite3.Error, TypeError, ValueError) as exc:
            logger.exception("Error writing %s", self.db_path)
            raise StoreFailure("Erro ao gravar no banco de dados") from exc

    def _ensure_schema(self) -> None:
        if self._ready:
            return
        try:
            init_db(self.db_path)
        except sqlite3.Error as exc:
            logger.exception("Could not initialise %s", self.db_path)
            raise StoreFailure("Erro ao inicializar o banco de dados") from exc
        self._ready = True

    @staticmethod
    def _row_to_record(table: str, row: sqlite3.Row) -> Dict[str, Any]:
        record: Dict[str, Any] = {}
        for column, key in _COLUMNS[table]:
            value = row[column]
            if (table, column) in _JSON_COLUMNS:
                value = json.loads(value) if value else []
            if value is None and key in _OPTIONAL_KEYS:
                continue
            record[key] = value
        return record

    @staticmethod
    def _record_to_row(table: str, position: int, record: Dict[str, Any]) -> tuple:
        values: List[Any] = [position]
        for column, key in _COLUMNS[table]:
            value = record.get(key)
            if (table, column) in _JSON_COLUMNS:
                value = json.dumps(value or [])
            values.append(value)
        return tuple(values)


def build_store(settings: Settings) -> RecordStore:
    """Return the store selected by ``settings.store_backend``."""
    backend = settings.store_backend.lower()
    if backend == "json":
        return JsonFileStore(settings.database_path)
    if backend == "sqlite":
        return SqliteStore(settings.database_url)
    raise ValueError(f"Unknown store backend: {settings.store_backend!r}")
