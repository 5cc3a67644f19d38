"""
Class scheduling endpoints.

Creating or updating a class checks that the teacher exists and that
neither the teacher nor the class group is already booked in the same
slot.  Classes in the past cannot be deleted.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, status

from school_schedule_api.app.api.deps import get_store
from school_schedule_api.app.core.store import RecordStore
from school_schedule_api.app.schemas.aula import AulaCreate, AulaDetail, AulaResponse, AulaUpdate
from school_schedule_api.app.schemas.common import MessageResponse
from school_schedule_api.app.services.aula_service import AulaService


router = APIRouter()


@router.get("", response_model=List[AulaDetail])
def list_aulas(store: RecordStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Return every class with its teacher's ``{id, nome}``."""
    return AulaService.list_aulas(store.load())


@router.get("/{aula_id}", response_model=AulaDetail)
def get_aula(
    aula_id: int = Path(..., description="ID of the class"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    dataset = store.load()
    return AulaService.enrich(dataset, AulaService.get_aula(dataset, aula_id))


@router.post("", response_model=AulaResponse, status_code=status.HTTP_201_CREATED)
def create_aula(
    aula_in: Optional[AulaCreate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    dataset = store.load()
    aula = AulaService.create_aula(dataset, aula_in or AulaCreate())
    store.save(dataset)
    return {"message": "Aula agendada com sucesso", "aula": aula}


@router.put("/{aula_id}", response_model=AulaResponse)
def update_aula(
    aula_id: int = Path(..., description="ID of the class"),
    aula_in: Optional[AulaUpdate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    dataset = store.load()
    aula = AulaService.update_aula(dataset, aula_id, aula_in or AulaUpdate())
    store.save(dataset)
    return {"message": "Aula atualizada com sucesso", "aula": aula}


@router.delete("/{aula_id}", response_model=MessageResponse)
def delete_aula(
    aula_id: int = Path(..., description="ID of the class"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, str]:
    dataset = store.load()
    AulaService.delete_aula(dataset, aula_id)
    store.save(dataset)
    return {"message": "Aula removida com sucesso"}
