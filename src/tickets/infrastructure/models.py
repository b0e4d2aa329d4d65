"""
Tickets Infrastructure Models
==============================

SQLAlchemy ORM models for the existing ticket and area tables.

Attribute names are English; column names match the production schema.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer, Text, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base
from src.config import TicketStatus


class AreaModel(Base):
    """
    Read-only reference data.

    Maps to the 'tbl_areas' table.
    """
    __tablename__ = "tbl_areas"

    id: Mapped[int] = mapped_column("id_area", Integer, primary_key=True)
    name: Mapped[str] = mapped_column("nombre_area", String(100), nullable=False)


class TicketModel(Base):
    """
    Database model for Ticket entity. Rows created before the mobile app
    may have no title or description.

    Maps to the 'tbl_tickets' table.
    """
    __tablename__ = "tbl_tickets"

    id: Mapped[int] = mapped_column("id_ticket", Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        "id_usuario", Integer, ForeignKey("tbl_usuarios.id_usuario"), nullable=False, index=True
    )
    area_id: Mapped[int] = mapped_column("id_area", Integer, ForeignKey("tbl_areas.id_area"), nullable=False)
    technician_id: Mapped[Optional[int]] = mapped_column(
        "id_tecnico", Integer, ForeignKey("tbl_usuarios.id_usuario"), nullable=True, index=True
    )

    title: Mapped[Optional[str]] = mapped_column("titulo", String(200), nullable=True)
    description: Mapped[Optional[str]] = mapped_column("descripcion_problema", Text, nullable=True)
    status: Mapped[str] = mapped_column("estado", String(50), nullable=False, default=TicketStatus.IN_PROGRESS)
    priority: Mapped[str] = mapped_column("prioridad", String(20), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "fecha_creacion", DateTime, nullable=False, server_default=func.now()
    )
    closed_at: Mapped[Optional[datetime]] = mapped_column("fecha_cierre", DateTime, nullable=True)
