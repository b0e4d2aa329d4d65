"""
Tickets Infrastructure Repositories
====================================

SQLAlchemy implementation of the ticket repository. Every method issues a
single parameterized statement.
"""

from typing import List, Optional

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from src.tickets.application.services import ITicketRepository
from src.tickets.domain import Ticket
from src.tickets.infrastructure.models import TicketModel, AreaModel
from src.accounts.infrastructure.models import UserModel
from src.infrastructure.database import store_errors
from src.config import TicketStatus


class SQLAlchemyTicketRepository(ITicketRepository):
    """
    Handles persistence of tickets using async SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_by_user(self, user_id: int) -> List[dict]:
        """Tickets filed by a user, newest first."""
        stmt = (
            select(
                TicketModel.id.label("id"),
                TicketModel.title.label("titulo"),
                TicketModel.description.label("descripcion"),
                TicketModel.status.label("estado"),
                TicketModel.priority.label("prioridad"),
                TicketModel.created_at.label("fecha_creacion"),
            )
            .where(TicketModel.user_id == user_id)
            .order_by(TicketModel.created_at.desc())
        )

        with store_errors("list tickets by user"):
            result = await self._session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    async def list_by_technician(self, technician_id: int) -> List[dict]:
        """Tickets assigned to a technician with the requesting user's name and area."""
        stmt = (
            select(
                TicketModel.id.label("id"),
                TicketModel.title.label("titulo"),
                TicketModel.description.label("descripcion"),
                TicketModel.status.label("estado"),
                TicketModel.priority.label("prioridad"),
                TicketModel.created_at.label("fecha_creacion"),
                UserModel.id.label("id_usuario"),
                UserModel.first_name.label("nombre_usuario"),
                UserModel.last_name.label("apellido_usuario"),
                AreaModel.name.label("area_usuario"),
            )
            .join(UserModel, TicketModel.user_id == UserModel.id)
            .outerjoin(AreaModel, UserModel.area_id == AreaModel.id)
            .where(TicketModel.technician_id == technician_id)
            .order_by(TicketModel.created_at.desc())
        )

        with store_errors("list tickets by technician"):
            result = await self._session.execute(stmt)
            return [dict(row) for row in result.mappings().all()]

    async def create(self, ticket: Ticket) -> Ticket:
        """Insert a new ticket; the status is always En proceso."""
        model = TicketModel(
            user_id=ticket.user_id,
            area_id=ticket.area_id,
            title=ticket.title,
            description=ticket.description,
            priority=ticket.priority,
            status=TicketStatus.IN_PROGRESS,
        )

        with store_errors("create ticket"):
            self._session.add(model)
            await self._session.flush()
            await self._session.commit()

        ticket.id = model.id
        ticket.status = model.status
        return ticket

    async def update_status(self, ticket_id: int, status: str) -> int:
        """
        Set the status and closure timestamp.

        The closure timestamp is the database clock when closing and NULL
        otherwise. Returns the number of rows matched.
        """
        stmt = (
            update(TicketModel)
            .where(TicketModel.id == ticket_id)
            .values(
                status=status,
                closed_at=func.now() if status == TicketStatus.CLOSED else None,
            )
            .execution_options(synchronize_session=False)
        )

        with store_errors("update ticket status"):
            result = await self._session.execute(stmt)
            await self._session.commit()
            return result.rowcount

    async def get_status_for_owner(self, ticket_id: int, user_id: int) -> Optional[str]:
        """Status of a ticket if it belongs to the user, else None."""
        stmt = select(TicketModel.status).where(
            TicketModel.id == ticket_id,
            TicketModel.user_id == user_id,
        )

        with store_errors("read ticket owner"):
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()
