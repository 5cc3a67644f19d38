"""
Business logic for substitution requests ("trocas").

A troca is created ``PENDING`` and later approved or rejected.  The
original teacher must be the one currently assigned to the class.
Approving a troca also hands the class over to the substitute; both
changes are applied to the same dataset so the handler persists them
with a single save.
"""

import logging
from typing import Any, Dict, List, Optional

from school_schedule_api.app.core.errors import (
    Conflict,
    InvalidArgument,
    InvalidReference,
    NotFound,
)
from school_schedule_api.app.core.store import Dataset
from school_schedule_api.app.schemas.troca import TrocaCreate, TrocaStatus
from school_schedule_api.app.services.aula_service import AulaService
from school_schedule_api.app.services.base import find_record, next_id, require_fields, utc_now_iso
from school_schedule_api.app.services.professor_service import ProfessorService


logger = logging.getLogger(__name__)

# Statuses a pending troca can be moved to.
DECISIONS = (TrocaStatus.APPROVED.value, TrocaStatus.REJECTED.value)


class TrocaService:
    """Service for substitution requests."""

    @classmethod
    def list_trocas(cls, dataset: Dataset) -> List[Dict[str, Any]]:
        """Return every troca with its class and both teachers attached."""
        return [cls.enrich(dataset, troca) for troca in dataset.trocas]

    @classmethod
    def get_troca(cls, dataset: Dataset, troca_id: int) -> Dict[str, Any]:
        troca = find_record(dataset.trocas, troca_id)
        if troca is None:
            raise NotFound("Troca não encontrada")
        return troca

    @classmethod
    def create_troca(cls, dataset: Dataset, data: TrocaCreate) -> Dict[str, Any]:
        """Register a pending substitution request and return it."""
        require_fields({
            "aulaId": data.aula_id,
            "professorOriginalId": data.professor_original_id,
            "professorSubstitutoId": data.professor_substituto_id,
            "motivo": data.motivo,
        })
        aula = find_record(dataset.aulas, data.aula_id)
        if aula is None:
            raise InvalidReference("Aula não cadastrada")
        if find_record(dataset.professores, data.professor_original_id) is None:
            raise InvalidReference("Professor original não cadastrado")
        if find_record(dataset.professores, data.professor_substituto_id) is None:
            raise InvalidReference("Professor substituto não cadastrado")
        if aula.get("professorId") != data.professor_original_id:
            raise Conflict("Professor original não está atribuído a esta aula")

        troca = {
            "id": next_id(dataset, "trocas"),
            "aulaId": data.aula_id,
            "professorOriginalId": data.professor_original_id,
            "professorSubstitutoId": data.professor_substituto_id,
            "motivo": data.motivo.strip(),
            "status": TrocaStatus.PENDING.value,
            "createdAt": utc_now_iso(),
        }
        dataset.trocas.append(troca)
        logger.info("Created troca %s for aula %s", troca["id"], data.aula_id)
        return troca

    @classmethod
    def update_status(cls, dataset: Dataset, troca_id: int, status: Optional[str]) -> Dict[str, Any]:
        """Approve or reject a troca.

        On approval the referenced class is reassigned to the substitute
        teacher.  The approval is refused and nothing changes when that
        class no longer exists, when it is no longer given by the
        original teacher, or when the substitute already teaches in the
        same slot.
        """
        troca = cls.get_troca(dataset, troca_id)
        decision = (status or "").strip().upper()
        if decision not in DECISIONS:
            raise InvalidArgument("Status inválido: use APPROVED ou REJECTED")

        now = utc_now_iso()
        if decision == TrocaStatus.APPROVED.value:
            aula = find_record(dataset.aulas, troca.get("aulaId"))
            if aula is None:
                raise InvalidReference("Aula da troca não existe mais")
            if aula.get("professorId") != troca.get("professorOriginalId"):
                raise Conflict("Professor original não está mais atribuído a esta aula")
            AulaService.check_slot(
                dataset,
                {**aula, "professorId": troca.get("professorSubstitutoId")},
                ignore_id=aula.get("id"),
            )
            aula["professorId"] = troca.get("professorSubstitutoId")
            aula["updatedAt"] = now
            logger.info(
                "Aula %s reassigned to professor %s by troca %s",
                aula.get("id"), aula["professorId"], troca_id,
            )
        troca["status"] = decision
        troca["updatedAt"] = now
        logger.info("Troca %s set to %s", troca_id, decision)
        return troca

    @classmethod
    def enrich(cls, dataset: Dataset, troca: Dict[str, Any]) -> Dict[str, Any]:
        aula = find_record(dataset.aulas, troca.get("aulaId"))
        original = find_record(dataset.professores, troca.get("professorOriginalId"))
        substituto = find_record(dataset.professores, troca.get("professorSubstitutoId"))
        return {
            **troca,
            "aula": AulaService.summary(aula),
            "professorOriginal": ProfessorService.summary(original),
            "professorSubstituto": ProfessorService.summary(substituto),
        }
