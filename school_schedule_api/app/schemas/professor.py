"""
Pydantic models for teachers ("professores").

A teacher is stored with the ids of the subjects they teach in the
``materias`` field.  Requests send those ids as ``materiaIds``.  When
teachers are read back through the API the ids are expanded into full
subject objects (``ProfessorDetail``); the stored form is returned by
create and update (``ProfessorRead``).
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .materia import MateriaRead


class ProfessorCreate(BaseModel):
    """Schema for creating a teacher."""

    nome: Optional[str] = Field(None, examples=["Alice"])
    materia_ids: Optional[List[int]] = Field(None, alias="materiaIds", examples=[[1, 2]])

    model_config = {
        "populate_by_name": True,
    }


class ProfessorUpdate(BaseModel):
    """Schema for updating a teacher.

    ``nome`` is replaced when non-blank.  ``materiaIds`` replaces the
    whole list when present (an empty list clears it).
    """

    nome: Optional[str] = None
    materia_ids: Optional[List[int]] = Field(None, alias="materiaIds")

    model_config = {
        "populate_by_name": True,
    }


class ProfessorResumo(BaseModel):
    """Minimal projection of a teacher embedded in other records."""

    id: int
    nome: str


class ProfessorRead(BaseModel):
    """Schema for a teacher as stored."""

    id: int
    nome: str
    materias: List[int] = []
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }


class ProfessorDetail(ProfessorRead):
    """Schema for a teacher with its subjects expanded."""

    materias: List[MateriaRead] = []
