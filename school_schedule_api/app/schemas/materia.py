"""
Pydantic models for subjects ("matérias").

Request models keep every field optional so that a missing ``nome``
reaches the service layer and is reported as a missing field instead of
a generic validation error.  Response models use the camelCase keys of
the persisted document (``createdAt``, ``updatedAt``).
"""

from typing import Optional

from pydantic import BaseModel, Field


class MateriaCreate(BaseModel):
    """Schema for creating a subject."""

    nome: Optional[str] = Field(None, examples=["Matemática"])


class MateriaUpdate(BaseModel):
    """Schema for updating a subject.

    A blank or omitted ``nome`` keeps the current value.
    """

    nome: Optional[str] = None


class MateriaRead(BaseModel):
    """Schema for reading a subject."""

    id: int
    nome: str
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }
