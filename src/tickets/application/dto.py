"""
Tickets Application DTOs
=========================

Pydantic models for the mobile API. Field names follow the JSON contract
the mobile app already speaks.

Request fields are optional at the schema level so a missing field yields
the service's "Faltan campos obligatorios" answer instead of a schema error.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


PriorityStr = Literal["Alta", "Media", "Baja"]


# ========== Request DTOs ==========

class CreateTicketRequest(BaseModel):
    """Body of POST /movil/tickets."""
    id_usuario: Optional[int] = Field(None, description="Owner user id")
    id_area: Optional[int] = Field(None, description="Area the ticket belongs to")
    titulo: Optional[str] = Field(None, description="Short title")
    descripcion_problema: Optional[str] = Field(None, description="Problem description sent to the classifier")


class UpdateStatusRequest(BaseModel):
    """Body of PUT /movil/tickets/{id}/estado."""
    nuevoEstado: Optional[str] = Field(None, description="En proceso, Cerrado or Cancelado")


# ========== Response DTOs ==========

class TicketSummary(BaseModel):
    """Ticket row as listed for its owner."""
    id: int
    titulo: Optional[str] = None
    descripcion: Optional[str] = None
    estado: str
    prioridad: str
    fecha_creacion: Optional[datetime] = None


class TechnicianTicketSummary(TicketSummary):
    """Ticket row as listed for the assigned technician."""
    id_usuario: int
    nombre_usuario: Optional[str] = None
    apellido_usuario: Optional[str] = None
    area_usuario: Optional[str] = None


class CreateTicketResponse(BaseModel):
    mensaje: str
    prioridad_asignada: PriorityStr


class MessageResponse(BaseModel):
    mensaje: str
