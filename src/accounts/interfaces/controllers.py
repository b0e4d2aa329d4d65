"""
Accounts Controllers (API Routes)
==================================

Login and profile-update endpoints for the mobile app. Login returns the
user's profile only; no session or token is issued.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_session
from src.accounts.application import (
    AccountService,
    LoginRequest, UpdateUserRequest,
    LoginResponse, UserInfo, MessageResponse
)
from src.accounts.infrastructure import (
    SQLAlchemyUserRepository, hash_password, verify_credentials
)
from src.core import RepositoryException, ServiceException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/movil", tags=["Accounts"])


# ========== Dependencies ==========

async def get_account_service(
    session: AsyncSession = Depends(get_session)
) -> AccountService:
    return AccountService(
        SQLAlchemyUserRepository(session),
        verify_password=verify_credentials,
        hash_password=hash_password
    )


# ========== Route Handlers ==========

@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in with username and password",
    responses={
        400: {"description": "Faltan campos obligatorios"},
        401: {"description": "Contraseña incorrecta"},
        404: {"description": "Usuario no encontrado o inactivo"}
    }
)
async def login(
    payload: LoginRequest,
    request: Request,
    service: AccountService = Depends(get_account_service)
):
    try:
        profile = await service.login(payload.usuario, payload.contrasena)
    except RepositoryException as e:
        logger.error(
            "Error during login",
            extra={
                "correlation_id": getattr(request.state, "correlation_id", "unknown"),
                "error": str(e)
            }
        )
        raise ServiceException("Error en el servidor")

    return LoginResponse(mensaje="Login exitoso", usuario=UserInfo.from_domain(profile))


@router.put(
    "/usuario/{id_usuario}",
    response_model=MessageResponse,
    summary="Change username and/or password",
    responses={
        400: {"description": "Debe enviar al menos un campo para actualizar"},
        404: {"description": "Usuario no encontrado"}
    }
)
async def update_user(
    id_usuario: int,
    payload: UpdateUserRequest,
    request: Request,
    service: AccountService = Depends(get_account_service)
):
    try:
        await service.update_credentials(
            id_usuario,
            new_username=payload.nuevoUsuario,
            new_password=payload.nuevaContrasena
        )
    except RepositoryException as e:
        logger.error(
            "Error updating user",
            extra={
                "correlation_id": getattr(request.state, "correlation_id", "unknown"),
                "user_id": id_usuario,
                "error": str(e)
            }
        )
        raise ServiceException("Error al actualizar los datos del usuario")

    return MessageResponse(mensaje="Usuario actualizado correctamente")


# Export router for inclusion in main app
accounts_router = router
