"""
Evaluations Application DTOs
=============================
"""

from typing import Optional

from pydantic import BaseModel, Field


class SubmitEvaluationRequest(BaseModel):
    """Body of POST /movil/evaluaciones."""
    id_ticket: Optional[int] = Field(None, description="Closed ticket being evaluated")
    id_usuario: Optional[int] = Field(None, description="Ticket owner")
    calificacion: Optional[int] = Field(None, description="Rating")
    comentario: Optional[str] = Field(None, description="Optional comment")


class EvaluationStatusResponse(BaseModel):
    evaluado: bool


class MessageResponse(BaseModel):
    mensaje: str
