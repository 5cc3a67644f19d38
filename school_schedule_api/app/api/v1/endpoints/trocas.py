"""
Substitution request endpoints.

``PUT /trocas/{id}`` decides a request.  Approving it also moves the
class to the substitute teacher; both changes are written together.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Path, status

from school_schedule_api.app.api.deps import get_store
from school_schedule_api.app.core.store import RecordStore
from school_schedule_api.app.schemas.troca import (
    TrocaCreate,
    TrocaDetail,
    TrocaResponse,
    TrocaStatus,
    TrocaStatusUpdate,
)
from school_schedule_api.app.services.troca_service import TrocaService


router = APIRouter()

_DECISION_MESSAGES = {
    TrocaStatus.APPROVED.value: "Troca aprovada com sucesso",
    TrocaStatus.REJECTED.value: "Troca rejeitada com sucesso",
}


@router.get("", response_model=List[TrocaDetail])
def list_trocas(store: RecordStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return TrocaService.list_trocas(store.load())


@router.get("/{troca_id}", response_model=TrocaDetail)
def get_troca(
    troca_id: int = Path(..., description="ID of the substitution request"),
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    dataset = store.load()
    return TrocaService.enrich(dataset, TrocaService.get_troca(dataset, troca_id))


@router.post("", response_model=TrocaResponse, status_code=status.HTTP_201_CREATED)
def create_troca(
    troca_in: Optional[TrocaCreate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    """Request a substitution.  The new troca starts as ``PENDING``."""
    dataset = store.load()
    troca = TrocaService.create_troca(dataset, troca_in or TrocaCreate())
    store.save(dataset)
    return {"message": "Troca solicitada com sucesso", "troca": troca}


@router.put("/{troca_id}", response_model=TrocaResponse)
def update_troca_status(
    troca_id: int = Path(..., description="ID of the substitution request"),
    status_in: Optional[TrocaStatusUpdate] = None,
    store: RecordStore = Depends(get_store),
) -> Dict[str, Any]:
    """Approve or reject a substitution request."""
    dataset = store.load()
    troca = TrocaService.update_status(dataset, troca_id, (status_in or TrocaStatusUpdate()).status)
    store.save(dataset)
    return {"message": _DECISION_MESSAGES[troca["status"]], "troca": troca}
