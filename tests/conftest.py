import pytest
from fastapi.testclient import TestClient

from school_schedule_api.app.core.config import Settings
from school_schedule_api.app.core.store import Dataset, JsonFileStore, SqliteStore
from school_schedule_api.app.main import create_app
from school_schedule_api.app.schemas.aula import AulaCreate
from school_schedule_api.app.schemas.materia import MateriaCreate
from school_schedule_api.app.schemas.professor import ProfessorCreate
from school_schedule_api.app.services.aula_service import AulaService
from school_schedule_api.app.services.materia_service import MateriaService
from school_schedule_api.app.services.professor_service import ProfessorService


@pytest.fixture
def seeded_dataset():
    """Two subjects, two teachers and one future class for teacher 1 / turma A."""
    dataset = Dataset()
    MateriaService.create_materia(dataset, MateriaCreate(nome="Matemática"))
    MateriaService.create_materia(dataset, MateriaCreate(nome="História"))
    ProfessorService.create_professor(dataset, ProfessorCreate(nome="Alice", materia_ids=[1]))
    ProfessorService.create_professor(dataset, ProfessorCreate(nome="Bruno", materia_ids=[2]))
    AulaService.create_aula(
        dataset,
        AulaCreate(data="2030-01-01", horario="10:00", professor_id=1, turma="A"),
    )
    return dataset


@pytest.fixture(params=["json", "sqlite"])
def store(request, tmp_path):
    """Each API test runs once per persistence backend."""
    if request.param == "json":
        return JsonFileStore(tmp_path / "database.json")
    return SqliteStore(str(tmp_path / "school_schedule.db"))


@pytest.fixture
def client(store):
    app = create_app(Settings(), store=store)
    with TestClient(app) as test_client:
        yield test_client
