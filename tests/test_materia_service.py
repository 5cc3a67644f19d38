import copy

import pytest

from school_schedule_api.app.core.errors import Conflict, MissingField, NotFound
from school_schedule_api.app.core.store import Dataset
from school_schedule_api.app.schemas.materia import MateriaCreate, MateriaUpdate
from school_schedule_api.app.services.materia_service import MateriaService


def test_create_assigns_sequential_ids():
    dataset = Dataset()

    ids = [MateriaService.create_materia(dataset, MateriaCreate(nome=nome))["id"] for nome in ("A", "B", "C")]

    assert ids == [1, 2, 3]
    assert [m["nome"] for m in dataset.materias] == ["A", "B", "C"]
    assert all("createdAt" in m for m in dataset.materias)


@pytest.mark.parametrize("nome", [None, "", "   "])
def test_create_requires_nome(nome):
    dataset = Dataset()

    with pytest.raises(MissingField):
        MateriaService.create_materia(dataset, MateriaCreate(nome=nome))

    assert dataset == Dataset()


def test_ids_are_not_reused_after_delete():
    dataset = Dataset()
    MateriaService.create_materia(dataset, MateriaCreate(nome="A"))
    MateriaService.create_materia(dataset, MateriaCreate(nome="B"))
    MateriaService.delete_materia(dataset, 2)

    materia = MateriaService.create_materia(dataset, MateriaCreate(nome="C"))

    assert materia["id"] == 3


def test_update_renames_and_stamps(seeded_dataset):
    materia = MateriaService.update_materia(seeded_dataset, 1, MateriaUpdate(nome="Álgebra"))

    assert materia["nome"] == "Álgebra"
    assert "updatedAt" in materia
    assert materia["id"] == 1


def test_update_with_blank_name_keeps_previous(seeded_dataset):
    materia = MateriaService.update_materia(seeded_dataset, 1, MateriaUpdate(nome=""))

    assert materia["nome"] == "Matemática"
    assert "updatedAt" in materia


def test_update_unknown_subject(seeded_dataset):
    with pytest.raises(NotFound):
        MateriaService.update_materia(seeded_dataset, 99, MateriaUpdate(nome="X"))


def test_delete_subject_taught_by_a_teacher_is_refused(seeded_dataset):
    snapshot = copy.deepcopy(seeded_dataset)

    with pytest.raises(Conflict):
        MateriaService.delete_materia(seeded_dataset, 1)

    assert seeded_dataset == snapshot


def test_delete_unreferenced_subject():
    dataset = Dataset()
    MateriaService.create_materia(dataset, MateriaCreate(nome="Física"))

    MateriaService.delete_materia(dataset, 1)

    assert dataset.materias == []
    with pytest.raises(NotFound):
        MateriaService.delete_materia(dataset, 1)
