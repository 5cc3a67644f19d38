"""
Business logic for scheduled classes ("aulas").

An aula occupies a slot, the pair (``data``, ``horario``).  Within a
slot a teacher can give only one class and a class group (``turma``)
can attend only one.  Classes that already took place cannot be
deleted.
"""

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Tuple

from school_schedule_api.app.core.errors import (
    Conflict,
    InvalidArgument,
    InvalidReference,
    NotFound,
)
from school_schedule_api.app.core.store import Dataset
from school_schedule_api.app.schemas.aula import AulaCreate, AulaUpdate
from school_schedule_api.app.services.base import (
    find_record,
    is_blank,
    next_id,
    require_fields,
    utc_now_iso,
)
from school_schedule_api.app.services.professor_service import ProfessorService


logger = logging.getLogger(__name__)


def parse_slot(data: Any, horario: Any) -> Optional[datetime]:
    """Local datetime of a slot, or ``None`` when either part does not parse."""
    try:
        return datetime.combine(
            date.fromisoformat(str(data)),
            time.fromisoformat(str(horario)).replace(tzinfo=None),
        )
    except ValueError:
        return None


class AulaService:
    """Service for scheduling classes."""

    @classmethod
    def list_aulas(cls, dataset: Dataset) -> List[Dict[str, Any]]:
        """Return every class with the owning teacher attached."""
        return [cls.enrich(dataset, aula) for aula in dataset.aulas]

    @classmethod
    def get_aula(cls, dataset: Dataset, aula_id: int) -> Dict[str, Any]:
        aula = find_record(dataset.aulas, aula_id)
        if aula is None:
            raise NotFound("Aula não encontrada")
        return aula

    @classmethod
    def create_aula(cls, dataset: Dataset, data: AulaCreate) -> Dict[str, Any]:
        """Schedule a class and return it as stored."""
        require_fields({
            "data": data.data,
            "horario": data.horario,
            "professorId": data.professor_id,
            "turma": data.turma,
        })
        fields = {
            "data": data.data.strip(),
            "horario": data.horario.strip(),
            "professorId": data.professor_id,
            "turma": data.turma.strip(),
        }
        cls._validate(dataset, fields)
        aula = {"id": next_id(dataset, "aulas"), **fields, "createdAt": utc_now_iso()}
        dataset.aulas.append(aula)
        logger.info("Created aula %s", aula["id"])
        return aula

    @classmethod
    def update_aula(cls, dataset: Dataset, aula_id: int, data: AulaUpdate) -> Dict[str, Any]:
        """Reschedule or reassign a class.

        Provided fields overwrite the current ones, blank or omitted
        fields are kept.  The merged record goes through the same checks
        as a new class, ignoring the class itself when looking for
        conflicts.
        """
        aula = cls.get_aula(dataset, aula_id)
        fields = {
            "data": aula.get("data"),
            "horario": aula.get("horario"),
            "professorId": aula.get("professorId"),
            "turma": aula.get("turma"),
        }
        if not is_blank(data.data):
            fields["data"] = data.data.strip()
        if not is_blank(data.horario):
            fields["horario"] = data.horario.strip()
        if data.professor_id is not None:
            fields["professorId"] = data.professor_id
        if not is_blank(data.turma):
            fields["turma"] = data.turma.strip()
        cls._validate(dataset, fields, ignore_id=aula_id)
        aula.update(fields)
        aula["updatedAt"] = utc_now_iso()
        logger.info("Updated aula %s", aula_id)
        return aula

    @classmethod
    def delete_aula(cls, dataset: Dataset, aula_id: int, now: Optional[datetime] = None) -> None:
        """Remove a class that has not happened yet.

        ``now`` defaults to the current local time.
        """
        aula = cls.get_aula(dataset, aula_id)
        starts_at = parse_slot(aula.get("data"), aula.get("horario"))
        if starts_at is not None and starts_at < (now or datetime.now()):
            raise Conflict("Não é possível remover uma aula que já ocorreu")
        dataset.aulas = [a for a in dataset.aulas if a.get("id") != aula_id]
        logger.info("Deleted aula %s", aula_id)

    @classmethod
    def enrich(cls, dataset: Dataset, aula: Dict[str, Any]) -> Dict[str, Any]:
        professor = find_record(dataset.professores, aula.get("professorId"))
        return {**aula, "professor": ProfessorService.summary(professor)}

    @staticmethod
    def summary(aula: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """``{id, data, horario, turma}`` projection used inside trocas."""
        if aula is None:
            return None
        return {
            "id": aula.get("id"),
            "data": aula.get("data"),
            "horario": aula.get("horario"),
            "turma": aula.get("turma"),
        }

    @classmethod
    def _validate(cls, dataset: Dataset, fields: Dict[str, Any], ignore_id: Optional[int] = None) -> None:
        try:
            date.fromisoformat(str(fields["data"]))
        except ValueError:
            raise InvalidArgument("Data inválida: use o formato AAAA-MM-DD")
        try:
            time.fromisoformat(str(fields["horario"]))
        except ValueError:
            raise InvalidArgument("Horário inválido: use o formato HH:MM")
        if find_record(dataset.professores, fields["professorId"]) is None:
            raise InvalidReference("Professor não cadastrado")
        cls.check_slot(dataset, fields, ignore_id=ignore_id)

    @classmethod
    def check_slot(cls, dataset: Dataset, fields: Dict[str, Any], ignore_id: Optional[int] = None) -> None:
        """Raise ``Conflict`` if the teacher or the turma of ``fields`` is
        already booked in its slot by another class."""
        slot = cls._slot_key(fields)
        for other in dataset.aulas:
            if ignore_id is not None and other.get("id") == ignore_id:
                continue
            if cls._slot_key(other) != slot:
                continue
            if other.get("professorId") == fields.get("professorId"):
                raise Conflict("Professor já possui aula neste horário")
            if other.get("turma") == fields.get("turma"):
                raise Conflict("Turma já possui aula neste horário")

    @staticmethod
    def _slot_key(aula: Dict[str, Any]) -> Tuple[Any, Any]:
        # "10:00" and "10:00:00" are the same slot.
        starts_at = parse_slot(aula.get("data"), aula.get("horario"))
        if starts_at is not None:
            return (starts_at, None)
        return (aula.get("data"), aula.get("horario"))
