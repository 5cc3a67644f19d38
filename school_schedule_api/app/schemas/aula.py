"""
Pydantic models for scheduled classes ("aulas").

An aula books a teacher and a class group (``turma``) on a date
(``YYYY-MM-DD``) at a time of day (``HH:MM``).  Create and update
responses wrap the record in ``{"message", "aula"}``.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .professor import ProfessorResumo


class AulaBase(BaseModel):
    data: Optional[str] = Field(None, examples=["2030-01-01"])
    horario: Optional[str] = Field(None, examples=["10:00"])
    professor_id: Optional[int] = Field(None, alias="professorId", examples=[1])
    turma: Optional[str] = Field(None, examples=["A"])

    model_config = {
        "populate_by_name": True,
    }


class AulaCreate(AulaBase):
    """Schema for scheduling a class.  Every field is required by the service."""
    pass


class AulaUpdate(AulaBase):
    """Schema for updating a class.  Omitted or blank fields are kept."""
    pass


class AulaResumo(BaseModel):
    """Minimal projection of a class embedded in exchanges."""

    id: int
    data: Optional[str] = None
    horario: Optional[str] = None
    turma: Optional[str] = None


class AulaRead(BaseModel):
    """Schema for a class as stored.

    Only ``id`` is guaranteed: documents written before validation
    existed may lack any of the other fields.
    """

    id: int
    data: Optional[str] = None
    horario: Optional[str] = None
    professor_id: Optional[int] = Field(None, alias="professorId")
    turma: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }


class AulaDetail(AulaRead):
    """Class with the owning teacher attached (``None`` if it no longer exists)."""

    professor: Optional[ProfessorResumo] = None


class AulaResponse(BaseModel):
    message: str
    aula: AulaRead
