"""
Business logic for teachers ("professores").

Teachers reference subjects by id.  Those ids are checked against the
``materias`` collection both on create and on update, and a teacher
with scheduled classes cannot be deleted.  ``enrich`` expands the ids
into subject objects for reading; the expansion is never stored.
"""

import logging
from typing import Any, Dict, List, Optional

from school_schedule_api.app.core.errors import Conflict, InvalidReference, MissingField, NotFound
from school_schedule_api.app.core.store import Dataset
from school_schedule_api.app.schemas.professor import ProfessorCreate, ProfessorUpdate
from school_schedule_api.app.services.base import find_record, is_blank, next_id, utc_now_iso


logger = logging.getLogger(__name__)


class ProfessorService:
    """Service for managing teachers."""

    @classmethod
    def list_professores(cls, dataset: Dataset) -> List[Dict[str, Any]]:
        """Return every teacher with its subjects expanded."""
        return [cls.enrich(dataset, professor) for professor in dataset.professores]

    @classmethod
    def get_professor(cls, dataset: Dataset, professor_id: int) -> Dict[str, Any]:
        professor = find_record(dataset.professores, professor_id)
        if professor is None:
            raise NotFound("Professor não encontrado")
        return professor

    @classmethod
    def create_professor(cls, dataset: Dataset, data: ProfessorCreate) -> Dict[str, Any]:
        """Append a new teacher and return it as stored."""
        if is_blank(data.nome):
            raise MissingField("Nome é obrigatório")
        materias = cls._validate_materia_ids(dataset, data.materia_ids)
        professor = {
            "id": next_id(dataset, "professores"),
            "nome": data.nome.strip(),
            "materias": materias,
            "createdAt": utc_now_iso(),
        }
        dataset.professores.append(professor)
        logger.info("Created professor %s", professor["id"])
        return professor

    @classmethod
    def update_professor(cls, dataset: Dataset, professor_id: int, data: ProfessorUpdate) -> Dict[str, Any]:
        """Update a teacher.

        ``nome`` is replaced when non-blank; ``materia_ids`` replaces the
        whole list when given.  Unknown subject ids are rejected before
        anything changes.
        """
        professor = cls.get_professor(dataset, professor_id)
        materias = None
        if data.materia_ids is not None:
            materias = cls._validate_materia_ids(dataset, data.materia_ids)
        if not is_blank(data.nome):
            professor["nome"] = data.nome.strip()
        if materias is not None:
            professor["materias"] = materias
        professor["updatedAt"] = utc_now_iso()
        logger.info("Updated professor %s", professor_id)
        return professor

    @classmethod
    def delete_professor(cls, dataset: Dataset, professor_id: int) -> None:
        cls.get_professor(dataset, professor_id)
        if any(aula.get("professorId") == professor_id for aula in dataset.aulas):
            raise Conflict("Professor com aulas agendadas não pode ser removido")
        dataset.professores = [p for p in dataset.professores if p.get("id") != professor_id]
        logger.info("Deleted professor %s", professor_id)

    @classmethod
    def enrich(cls, dataset: Dataset, professor: Dict[str, Any]) -> Dict[str, Any]:
        """Copy of ``professor`` with ``materias`` as subject objects.

        Ids that no longer resolve are dropped.
        """
        materias = []
        for materia_id in professor.get("materias") or []:
            materia = find_record(dataset.materias, materia_id)
            if materia is not None:
                materias.append(materia)
        return {**professor, "materias": materias}

    @staticmethod
    def summary(professor: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """``{id, nome}`` projection used inside aulas and trocas."""
        if professor is None:
            return None
        return {"id": professor.get("id"), "nome": professor.get("nome")}

    @staticmethod
    def _validate_materia_ids(dataset: Dataset, materia_ids: Optional[List[int]]) -> List[int]:
        if not materia_ids:
            return []
        known = {materia.get("id") for materia in dataset.materias}
        unknown = [materia_id for materia_id in materia_ids if materia_id not in known]
        if unknown:
            raise InvalidReference(
                "Matérias inexistentes: " + ", ".join(str(materia_id) for materia_id in unknown)
            )
        # Collapse duplicates, keeping the first occurrence.
        return list(dict.fromkeys(materia_ids))
