"""Liveness endpoint reporting the configured store backend."""

from typing import Dict

from fastapi import APIRouter, Depends

from school_schedule_api.app.api.deps import get_store
from school_schedule_api.app.core.store import RecordStore


router = APIRouter()


@router.get("/health")
def healthcheck(store: RecordStore = Depends(get_store)) -> Dict[str, str]:
    # Loading proves the store is readable; a failure surfaces as a 500.
    store.load()
    return {"status": "ok", "store": store.backend}
