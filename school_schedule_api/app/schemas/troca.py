"""
Pydantic models for substitution requests ("trocas").

A troca asks for ``professorSubstitutoId`` to take over an aula currently
given by ``professorOriginalId``.  It starts as ``PENDING`` and is moved
to ``APPROVED`` or ``REJECTED`` through the status endpoint.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .aula import AulaResumo
from .professor import ProfessorResumo


class TrocaStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TrocaCreate(BaseModel):
    """Schema for requesting a substitution."""

    aula_id: Optional[int] = Field(None, alias="aulaId", examples=[1])
    professor_original_id: Optional[int] = Field(None, alias="professorOriginalId", examples=[1])
    professor_substituto_id: Optional[int] = Field(None, alias="professorSubstitutoId", examples=[2])
    motivo: Optional[str] = Field(None, examples=["Consulta médica"])

    model_config = {
        "populate_by_name": True,
    }


class TrocaStatusUpdate(BaseModel):
    """Schema for deciding a substitution.

    ``status`` is kept as free text so that unknown values are reported
    by the service as an invalid argument.
    """

    status: Optional[str] = Field(None, examples=["APPROVED"])


class TrocaRead(BaseModel):
    """Schema for a troca as stored.

    Older documents stored the request body verbatim, without a
    ``status`` and possibly without some references, so every field but
    ``id`` may be missing.
    """

    id: int
    aula_id: Optional[int] = Field(None, alias="aulaId")
    professor_original_id: Optional[int] = Field(None, alias="professorOriginalId")
    professor_substituto_id: Optional[int] = Field(None, alias="professorSubstitutoId")
    motivo: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }


class TrocaDetail(TrocaRead):
    """Exchange with the class and both teachers attached."""

    aula: Optional[AulaResumo] = None
    professor_original: Optional[ProfessorResumo] = Field(None, alias="professorOriginal")
    professor_substituto: Optional[ProfessorResumo] = Field(None, alias="professorSubstituto")


class TrocaResponse(BaseModel):
    message: str
    troca: TrocaRead
