"""
Subject endpoints.

CRUD over the ``materias`` collection.  Deleting a subject still taught
by some teacher is refused with HTTP 400.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, status

from school_schedule_api.app.api.deps import get_store
from school_schedule_api.app.core.store import RecordStore
from school_schedule_api.app.schemas.common import MessageResponse
from school_schedule_api.app.schemas.materia import MateriaCreate, MateriaRead, MateriaUpdate
from school_schedule_api.app.services.materia_service import MateriaService


router = APIRouter()


@router.get("", response_model=List[MateriaRead])
def list_materias(store: RecordStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Return every subject in insertion order."""
    return MateriaService.list_materias(store.load())


@router.get("/{materia_id}", response_model=MateriaRead)
def get_materia(
    materia_id: int = Path(..., description="ID of the subject"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    return MateriaService.get_materia(store.load(), materia_id)


@router.post("", response_model=MateriaRead, status_code=status.HTTP_201_CREATED)
def create_materia(
    materia_in: Optional[MateriaCreate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    """Create a subject.  ``nome`` is required."""
    dataset = store.load()
    materia = MateriaService.create_materia(dataset, materia_in or MateriaCreate())
    store.save(dataset)
    return materia


@router.put("/{materia_id}", response_model=MateriaRead)
def update_materia(
    materia_id: int = Path(..., description="ID of the subject"),
    materia_in: Optional[MateriaUpdate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    """Rename a subject.  A blank ``nome`` keeps the current one."""
    dataset = store.load()
    materia = MateriaService.update_materia(dataset, materia_id, materia_in or MateriaUpdate())
    store.save(dataset)
    return materia


@router.delete("/{materia_id}", response_model=MessageResponse)
def delete_materia(
    materia_id: int = Path(..., description="ID of the subject"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, str]:
    dataset = store.load()
    MateriaService.delete_materia(dataset, materia_id)
    store.save(dataset)
    return {"message": "Matéria removida com sucesso"}
