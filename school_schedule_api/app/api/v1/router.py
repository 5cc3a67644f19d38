"""
Top-level router for version 1 of the API.

This router aggregates the resource routers under their collection
prefixes.  The application mounts it at the root, so subjects live at
``/materias``, teachers at ``/professores`` and so on.
"""

from fastapi import APIRouter

from .endpoints import aulas, health, materias, professores, trocas

router = APIRouter()

router.include_router(materias.router, prefix="/materias", tags=["materias"])
router.include_router(professores.router, prefix="/professores", tags=["professores"])
router.include_router(aulas.router, prefix="/aulas", tags=["aulas"])
router.include_router(trocas.router, prefix="/trocas", tags=["trocas"])
# The health router defines its own "/health" path.
router.include_router(health.router, tags=["health"])
