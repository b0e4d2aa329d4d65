"""
Evaluations Infrastructure Models
==================================

SQLAlchemy ORM model for the existing 'tbl_evaluaciones' table.
"""

from typing import Optional

from sqlalchemy import String, Integer, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base
from src.config import EvaluatorRole


class EvaluationModel(Base):
    """
    Database model for Evaluation entity.

    No uniqueness on (ticket, user): the verification endpoint is advisory.
    """
    __tablename__ = "tbl_evaluaciones"

    id: Mapped[int] = mapped_column("id_evaluacion", Integer, primary_key=True, autoincrement=True)

    ticket_id: Mapped[int] = mapped_column(
        "id_ticket", Integer, ForeignKey("tbl_tickets.id_ticket"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        "id_usuario", Integer, ForeignKey("tbl_usuarios.id_usuario"), nullable=False
    )
    evaluator_role: Mapped[str] = mapped_column(
        "rol_evaluador", String(50), nullable=False, default=EvaluatorRole.USER
    )
    rating: Mapped[int] = mapped_column("calificacion", Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column("comentario", Text, nullable=True)
