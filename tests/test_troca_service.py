import copy

import pytest

from school_schedule_api.app.core.errors import (
    Conflict,
    InvalidArgument,
    InvalidReference,
    MissingField,
    NotFound,
)
from school_schedule_api.app.schemas.aula import AulaCreate
from school_schedule_api.app.schemas.professor import ProfessorCreate
from school_schedule_api.app.schemas.troca import TrocaCreate
from school_schedule_api.app.services.aula_service import AulaService
from school_schedule_api.app.services.professor_service import ProfessorService
from school_schedule_api.app.services.troca_service import TrocaService


def _troca(**overrides):
    fields = {
        "aula_id": 1,
        "professor_original_id": 1,
        "professor_substituto_id": 2,
        "motivo": "Consulta médica",
    }
    fields.update(overrides)
    return TrocaCreate(**fields)


def test_create_is_pending(seeded_dataset):
    troca = TrocaService.create_troca(seeded_dataset, _troca())

    assert troca["id"] == 1
    assert troca["status"] == "PENDING"
    assert "createdAt" in troca


@pytest.mark.parametrize(
    "missing", ["aula_id", "professor_original_id", "professor_substituto_id", "motivo"]
)
def test_create_requires_every_field(seeded_dataset, missing):
    with pytest.raises(MissingField):
        TrocaService.create_troca(seeded_dataset, _troca(**{missing: None}))


@pytest.mark.parametrize(
    "overrides",
    [{"aula_id": 9}, {"professor_original_id": 9}, {"professor_substituto_id": 9}],
)
def test_create_with_unknown_reference_is_refused(seeded_dataset, overrides):
    with pytest.raises(InvalidReference):
        TrocaService.create_troca(seeded_dataset, _troca(**overrides))


def test_original_teacher_must_own_the_class(seeded_dataset):
    snapshot = copy.deepcopy(seeded_dataset)

    with pytest.raises(Conflict):
        TrocaService.create_troca(
            seeded_dataset, _troca(professor_original_id=2, professor_substituto_id=1)
        )

    assert seeded_dataset == snapshot


def test_approve_moves_class_to_substitute(seeded_dataset):
    TrocaService.create_troca(seeded_dataset, _troca())

    troca = TrocaService.update_status(seeded_dataset, 1, "APPROVED")

    assert troca["status"] == "APPROVED"
    assert "updatedAt" in troca
    assert seeded_dataset.aulas[0]["professorId"] == 2
    assert "updatedAt" in seeded_dataset.aulas[0]


def test_reject_leaves_class_untouched(seeded_dataset):
    TrocaService.create_troca(seeded_dataset, _troca())
    aula_before = copy.deepcopy(seeded_dataset.aulas[0])

    troca = TrocaService.update_status(seeded_dataset, 1, "REJECTED")

    assert troca["status"] == "REJECTED"
    assert seeded_dataset.aulas[0] == aula_before


@pytest.mark.parametrize("status", [None, "", "PENDING", "MAYBE"])
def test_update_status_rejects_other_values(seeded_dataset, status):
    TrocaService.create_troca(seeded_dataset, _troca())
    snapshot = copy.deepcopy(seeded_dataset)

    with pytest.raises(InvalidArgument):
        TrocaService.update_status(seeded_dataset, 1, status)

    assert seeded_dataset == snapshot


def test_update_status_unknown_troca(seeded_dataset):
    with pytest.raises(NotFound):
        TrocaService.update_status(seeded_dataset, 3, "APPROVED")


def test_approve_after_class_was_removed(seeded_dataset):
    TrocaService.create_troca(seeded_dataset, _troca())
    seeded_dataset.aulas.clear()

    with pytest.raises(InvalidReference):
        TrocaService.update_status(seeded_dataset, 1, "APPROVED")

    assert seeded_dataset.trocas[0]["status"] == "PENDING"


def test_approve_refused_when_substitute_is_busy_in_that_slot(seeded_dataset):
    AulaService.create_aula(
        seeded_dataset,
        AulaCreate(data="2030-01-01", horario="10:00", professor_id=2, turma="B"),
    )
    TrocaService.create_troca(seeded_dataset, _troca())
    snapshot = copy.deepcopy(seeded_dataset)

    with pytest.raises(Conflict):
        TrocaService.update_status(seeded_dataset, 1, "APPROVED")

    assert seeded_dataset == snapshot
    assert [aula["professorId"] for aula in seeded_dataset.aulas] == [1, 2]


def test_approve_refused_when_original_no_longer_owns_the_class(seeded_dataset):
    ProfessorService.create_professor(seeded_dataset, ProfessorCreate(nome="Carla"))
    TrocaService.create_troca(seeded_dataset, _troca())
    TrocaService.create_troca(seeded_dataset, _troca(professor_substituto_id=3))
    TrocaService.update_status(seeded_dataset, 1, "APPROVED")
    snapshot = copy.deepcopy(seeded_dataset)

    with pytest.raises(Conflict):
        TrocaService.update_status(seeded_dataset, 2, "APPROVED")

    assert seeded_dataset == snapshot
    assert seeded_dataset.aulas[0]["professorId"] == 2
    assert seeded_dataset.trocas[1]["status"] == "PENDING"


def test_rejecting_after_the_class_moved_is_allowed(seeded_dataset):
    ProfessorService.create_professor(seeded_dataset, ProfessorCreate(nome="Carla"))
    TrocaService.create_troca(seeded_dataset, _troca())
    TrocaService.create_troca(seeded_dataset, _troca(professor_substituto_id=3))
    TrocaService.update_status(seeded_dataset, 1, "APPROVED")

    troca = TrocaService.update_status(seeded_dataset, 2, "REJECTED")

    assert troca["status"] == "REJECTED"
    assert seeded_dataset.aulas[0]["professorId"] == 2


def test_enrich_attaches_class_and_teachers(seeded_dataset):
    TrocaService.create_troca(seeded_dataset, _troca())

    [troca] = TrocaService.list_trocas(seeded_dataset)

    assert troca["aula"] == {"id": 1, "data": "2030-01-01", "horario": "10:00", "turma": "A"}
    assert troca["professorOriginal"] == {"id": 1, "nome": "Alice"}
    assert troca["professorSubstituto"] == {"id": 2, "nome": "Bruno"}
