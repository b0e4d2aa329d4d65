"""
Tickets Controllers (API Routes)
=================================

FastAPI routes for the mobile ticket endpoints.

Controllers are thin - they delegate to application services and turn
store failures into the endpoint's generic 500 message.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_session
from src.tickets.application import (
    TicketService, PriorityClassificationService,
    CreateTicketRequest, UpdateStatusRequest,
    TicketSummary, TechnicianTicketSummary,
    CreateTicketResponse, MessageResponse
)
from src.tickets.infrastructure import SQLAlchemyTicketRepository
from src.core import RepositoryException, ServiceException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/movil/tickets", tags=["Tickets"])


# ========== Example payloads for Swagger ==========

CREATE_TICKET_EXAMPLE = {
    "id_usuario": 1,
    "id_area": 2,
    "titulo": "No enciende el monitor",
    "descripcion_problema": "El monitor no enciende desde ayer"
}


# ========== Dependencies ==========

def get_priority_classifier(request: Request) -> PriorityClassificationService:
    """Process-wide classifier created at startup."""
    classifier = getattr(request.app.state, "priority_classifier", None)
    if classifier is None:
        classifier = PriorityClassificationService(None)
    return classifier


async def get_ticket_service(
    session: AsyncSession = Depends(get_session),
    classifier: PriorityClassificationService = Depends(get_priority_classifier)
) -> TicketService:
    return TicketService(SQLAlchemyTicketRepository(session), classifier)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


# ========== Route Handlers ==========

@router.get(
    "/usuario/{id_usuario}",
    response_model=List[TicketSummary],
    summary="List the tickets filed by a user, newest first"
)
async def list_user_tickets(
    id_usuario: int,
    request: Request,
    service: TicketService = Depends(get_ticket_service)
):
    try:
        return await service.list_for_user(id_usuario)
    except RepositoryException as e:
        logger.error(
            "Error fetching user tickets",
            extra={"correlation_id": _correlation_id(request), "user_id": id_usuario, "error": str(e)}
        )
        raise ServiceException("Error al obtener tickets")


@router.get(
    "/tecnico/{id_tecnico}",
    response_model=List[TechnicianTicketSummary],
    summary="List the tickets assigned to a technician, newest first"
)
async def list_technician_tickets(
    id_tecnico: int,
    request: Request,
    service: TicketService = Depends(get_ticket_service)
):
    try:
        return await service.list_for_technician(id_tecnico)
    except RepositoryException as e:
        logger.error(
            "Error fetching technician tickets",
            extra={"correlation_id": _correlation_id(request), "technician_id": id_tecnico, "error": str(e)}
        )
        raise ServiceException("Error al obtener tickets del técnico")


@router.post(
    "",
    response_model=CreateTicketResponse,
    summary="Create a ticket with an AI-suggested priority",
    description="""
    Creates a ticket in status **En proceso**. The problem description is sent
    to the completion model, whose reply is reduced to Alta, Media or Baja.
    Any classifier failure assigns **Baja**.
    """,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"mensaje": "Ticket creado correctamente", "prioridad_asignada": "Media"}
                }
            }
        },
        400: {"description": "Faltan campos obligatorios"}
    }
)
async def create_ticket(
    payload: CreateTicketRequest,
    request: Request,
    service: TicketService = Depends(get_ticket_service)
):
    try:
        ticket = await service.create_ticket(
            user_id=payload.id_usuario,
            area_id=payload.id_area,
            title=payload.titulo,
            description=payload.descripcion_problema
        )
    except RepositoryException as e:
        logger.error(
            "Error creating ticket",
            extra={"correlation_id": _correlation_id(request), "error": str(e)}
        )
        raise ServiceException("Error al crear el ticket")

    logger.info(
        "Ticket created",
        extra={
            "correlation_id": _correlation_id(request),
            "ticket_id": ticket.id,
            "priority": ticket.priority
        }
    )
    return CreateTicketResponse(
        mensaje="Ticket creado correctamente",
        prioridad_asignada=ticket.priority
    )


@router.put(
    "/{id_ticket}/estado",
    response_model=MessageResponse,
    summary="Change a ticket's status",
    responses={
        400: {"description": "Estado inválido"},
        404: {"description": "Ticket no encontrado"}
    }
)
async def update_ticket_status(
    id_ticket: int,
    payload: UpdateStatusRequest,
    request: Request,
    service: TicketService = Depends(get_ticket_service)
):
    try:
        status = await service.change_status(id_ticket, payload.nuevoEstado)
    except RepositoryException as e:
        logger.error(
            "Error updating ticket status",
            extra={"correlation_id": _correlation_id(request), "ticket_id": id_ticket, "error": str(e)}
        )
        raise ServiceException("Error al actualizar el estado del ticket")

    return MessageResponse(mensaje=f"Ticket actualizado a estado: {status}")


# Export router for inclusion in main app
tickets_router = router
