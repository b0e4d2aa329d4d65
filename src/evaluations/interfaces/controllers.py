"""
Evaluations Controllers (API Routes)
=====================================
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_session
from src.evaluations.application import (
    EvaluationService,
    SubmitEvaluationRequest,
    EvaluationStatusResponse,
    MessageResponse
)
from src.evaluations.infrastructure import SQLAlchemyEvaluationRepository
from src.tickets.infrastructure import SQLAlchemyTicketRepository
from src.core import RepositoryException, ServiceException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/movil/evaluaciones", tags=["Evaluations"])


# ========== Dependencies ==========

async def get_evaluation_service(
    session: AsyncSession = Depends(get_session)
) -> EvaluationService:
    return EvaluationService(
        SQLAlchemyEvaluationRepository(session),
        SQLAlchemyTicketRepository(session)
    )


# ========== Route Handlers ==========

@router.post(
    "",
    response_model=MessageResponse,
    summary="Rate a closed ticket",
    responses={
        400: {"description": "Faltan campos obligatorios / Solo se pueden evaluar tickets cerrados"},
        404: {"description": "Ticket no encontrado o no pertenece al usuario"}
    }
)
async def submit_evaluation(
    payload: SubmitEvaluationRequest,
    request: Request,
    service: EvaluationService = Depends(get_evaluation_service)
):
    try:
        await service.submit(
            ticket_id=payload.id_ticket,
            user_id=payload.id_usuario,
            rating=payload.calificacion,
            comment=payload.comentario
        )
    except RepositoryException as e:
        logger.error(
            "Error registering evaluation",
            extra={
                "correlation_id": getattr(request.state, "correlation_id", "unknown"),
                "ticket_id": payload.id_ticket,
                "error": str(e)
            }
        )
        raise ServiceException("Error al registrar la evaluación")

    return MessageResponse(mensaje="Evaluación registrada correctamente")


@router.get(
    "/verificar/{id_ticket}/{id_usuario}",
    response_model=EvaluationStatusResponse,
    summary="Whether the user already evaluated the ticket"
)
async def check_evaluation(
    id_ticket: int,
    id_usuario: int,
    service: EvaluationService = Depends(get_evaluation_service)
):
    evaluado = await service.is_evaluated(id_ticket, id_usuario)
    return EvaluationStatusResponse(evaluado=evaluado)


# Export router for inclusion in main app
evaluations_router = router
