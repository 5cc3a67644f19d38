"""
Teacher endpoints.

Reads return teachers with their subjects expanded into objects;
create and update return the stored record, where ``materias`` holds
subject ids.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, status

from school_schedule_api.app.api.deps import get_store
from school_schedule_api.app.core.store import RecordStore
from school_schedule_api.app.schemas.common import MessageResponse
from school_schedule_api.app.schemas.professor import (
    ProfessorCreate,
    ProfessorDetail,
    ProfessorRead,
    ProfessorUpdate,
)
from school_schedule_api.app.services.professor_service import ProfessorService


router = APIRouter()


@router.get("", response_model=List[ProfessorDetail])
def list_professores(store: RecordStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Return every teacher with its subjects."""
    return ProfessorService.list_professores(store.load())


@router.get("/{professor_id}", response_model=ProfessorDetail)
def get_professor(
    professor_id: int = Path(..., description="ID of the teacher"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    dataset = store.load()
    return ProfessorService.enrich(dataset, ProfessorService.get_professor(dataset, professor_id))


@router.post("", response_model=ProfessorRead, status_code=status.HTTP_201_CREATED)
def create_professor(
    professor_in: Optional[ProfessorCreate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    """Create a teacher.  Every id in ``materiaIds`` must be a known subject."""
    dataset = store.load()
    professor = ProfessorService.create_professor(dataset, professor_in or ProfessorCreate())
    store.save(dataset)
    return professor


@router.put("/{professor_id}", response_model=ProfessorRead)
def update_professor(
    professor_id: int = Path(..., description="ID of the teacher"),
    professor_in: Optional[ProfessorUpdate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    dataset = store.load()
    professor = ProfessorService.update_professor(
        dataset, professor_id, professor_in or ProfessorUpdate()
    )
    store.save(dataset)
    return professor


@router.delete("/{professor_id}", response_model=MessageResponse)
def delete_professor(
    professor_id: int = Path(..., description="ID of the teacher"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, str]:
    """Delete a teacher who has no scheduled classes."""
    dataset = store.load()
    ProfessorService.delete_professor(dataset, professor_id)
    store.save(dataset)
    return {"message": "Professor removido com sucesso"}
