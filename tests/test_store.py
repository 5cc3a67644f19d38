import json

import pytest

from school_schedule_api.app.core.config import Settings
from school_schedule_api.app.core.errors import StoreFailure
from school_schedule_api.app.core.store import (
    Dataset,
    JsonFileStore,
    SqliteStore,
    build_store,
)


def test_json_store_initialises_missing_document(tmp_path):
    path = tmp_path / "database.json"
    store = JsonFileStore(path)

    dataset = store.load()

    assert dataset == Dataset()
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "materias": [],
        "professores": [],
        "aulas": [],
        "trocas": [],
    }


def test_json_store_defaults_missing_collections(tmp_path):
    path = tmp_path / "database.json"
    path.write_text(json.dumps({"materias": [{"id": 1, "nome": "Física"}], "aulas": None}))

    dataset = JsonFileStore(path).load()

    assert dataset.materias == [{"id": 1, "nome": "Física"}]
    assert dataset.professores == []
    assert dataset.aulas == []
    assert dataset.trocas == []


def test_json_store_warns_about_discarded_records(tmp_path, caplog):
    path = tmp_path / "database.json"
    path.write_text(
        json.dumps({"materias": [{"id": 1, "nome": "Física"}, "lixo", 3], "extra": {}}),
        encoding="utf-8",
    )

    with caplog.at_level("WARNING", logger="school_schedule_api.app.core.store"):
        dataset = JsonFileStore(path).load()

    assert dataset.materias == [{"id": 1, "nome": "Física"}]
    assert "Discarding 2 malformed record(s) from materias" in caplog.text
    assert "Ignoring unknown top-level keys: extra" in caplog.text


def test_json_store_treats_corrupted_document_as_empty(tmp_path):
    path = tmp_path / "database.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonFileStore(path).load() == Dataset()


def test_json_store_save_load_is_idempotent(tmp_path, seeded_dataset):
    path = tmp_path / "database.json"
    store = JsonFileStore(path)
    store.save(seeded_dataset)
    before = path.read_text(encoding="utf-8")

    store.save(store.load())

    assert path.read_text(encoding="utf-8") == before
    assert store.load() == seeded_dataset


def test_json_store_omits_sequences_until_an_id_is_assigned(tmp_path):
    path = tmp_path / "database.json"
    document = {"materias": [{"id": 1, "nome": "Arte"}], "professores": [], "aulas": [], "trocas": []}
    path.write_text(json.dumps(document), encoding="utf-8")
    store = JsonFileStore(path)

    store.save(store.load())

    assert json.loads(path.read_text(encoding="utf-8")) == document


def test_json_store_save_failure_raises_store_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = JsonFileStore(blocker / "database.json")

    with pytest.raises(StoreFailure):
        store.save(Dataset())


def test_sqlite_store_round_trip(tmp_path, seeded_dataset):
    store = SqliteStore(str(tmp_path / "school_schedule.db"))
    store.open()

    store.save(seeded_dataset)
    loaded = store.load()

    assert loaded == seeded_dataset
    assert loaded.professores[0]["materias"] == [1]
    assert "updatedAt" not in loaded.materias[0]
    assert loaded.sequences == {"materias": 2, "professores": 2, "aulas": 1}


def test_sqlite_store_preserves_insertion_order(tmp_path):
    store = SqliteStore(str(tmp_path / "school_schedule.db"))
    dataset = Dataset(materias=[{"id": 5, "nome": "Química"}, {"id": 2, "nome": "Artes"}])

    store.save(dataset)

    assert [m["id"] for m in store.load().materias] == [5, 2]


def test_sqlite_store_save_load_is_idempotent(tmp_path, seeded_dataset):
    store = SqliteStore(str(tmp_path / "school_schedule.db"))
    store.save(seeded_dataset)
    first = store.load()

    store.save(first)

    assert store.load() == first


def test_build_store_selects_backend(tmp_path):
    json_settings = Settings(store_backend="json", database_path=str(tmp_path / "db.json"))
    sqlite_settings = Settings(store_backend="sqlite", database_url=str(tmp_path / "db.sqlite"))

    assert isinstance(build_store(json_settings), JsonFileStore)
    assert isinstance(build_store(sqlite_settings), SqliteStore)
    with pytest.raises(ValueError):
        build_store(Settings(store_backend="redis"))
