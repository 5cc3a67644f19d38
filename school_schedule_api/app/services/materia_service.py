"""
Business logic for subjects ("matérias").

``MateriaService`` validates and applies mutations on the ``materias``
collection of a loaded ``Dataset``.  A subject referenced by a
teacher's ``materias`` list cannot be deleted.
"""

import logging
from typing import Any, Dict, List

from school_schedule_api.app.core.errors import Conflict, MissingField, NotFound
from school_schedule_api.app.core.store import Dataset
from school_schedule_api.app.schemas.materia import MateriaCreate, MateriaUpdate
from school_schedule_api.app.services.base import find_record, is_blank, next_id, utc_now_iso


logger = logging.getLogger(__name__)


class MateriaService:
    """Service for managing subjects."""

    @classmethod
    def list_materias(cls, dataset: Dataset) -> List[Dict[str, Any]]:
        return list(dataset.materias)

    @classmethod
    def get_materia(cls, dataset: Dataset, materia_id: int) -> Dict[str, Any]:
        materia = find_record(dataset.materias, materia_id)
        if materia is None:
            raise NotFound("Matéria não encontrada")
        return materia

    @classmethod
    def create_materia(cls, dataset: Dataset, data: MateriaCreate) -> Dict[str, Any]:
        """Append a new subject and return it."""
        if is_blank(data.nome):
            raise MissingField("Nome é obrigatório")
        materia = {
            "id": next_id(dataset, "materias"),
            "nome": data.nome.strip(),
            "createdAt": utc_now_iso(),
        }
        dataset.materias.append(materia)
        logger.info("Created materia %s", materia["id"])
        return materia

    @classmethod
    def update_materia(cls, dataset: Dataset, materia_id: int, data: MateriaUpdate) -> Dict[str, Any]:
        """Rename a subject.  A blank ``nome`` keeps the current name."""
        materia = cls.get_materia(dataset, materia_id)
        if not is_blank(data.nome):
            materia["nome"] = data.nome.strip()
        materia["updatedAt"] = utc_now_iso()
        logger.info("Updated materia %s", materia_id)
        return materia

    @classmethod
    def delete_materia(cls, dataset: Dataset, materia_id: int) -> None:
        cls.get_materia(dataset, materia_id)
        if any(materia_id in (professor.get("materias") or []) for professor in dataset.professores):
            raise Conflict("Matéria vinculada a um professor não pode ser removida")
        dataset.materias = [m for m in dataset.materias if m.get("id") != materia_id]
        logger.info("Deleted materia %s", materia_id)
