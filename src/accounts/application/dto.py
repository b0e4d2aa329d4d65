"""
Accounts Application DTOs
==========================

Pydantic models for login and profile updates.
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.accounts.domain import UserProfile


# ========== Request DTOs ==========

class LoginRequest(BaseModel):
    """Body of POST /movil/login."""
    usuario: Optional[str] = Field(None, description="Username")
    contrasena: Optional[str] = Field(None, description="Password")


class UpdateUserRequest(BaseModel):
    """Body of PUT /movil/usuario/{id}; at least one field is required."""
    nuevoUsuario: Optional[str] = Field(None, description="New username")
    nuevaContrasena: Optional[str] = Field(None, description="New password, stored hashed")


# ========== Response DTOs ==========

class UserInfo(BaseModel):
    id: int
    nombre: str
    apellido: str
    usuario: str
    correo: Optional[str] = None
    rol: Optional[int] = None
    area: Optional[int] = None

    @classmethod
    def from_domain(cls, profile: UserProfile) -> "UserInfo":
        return cls(
            id=profile.id,
            nombre=profile.first_name,
            apellido=profile.last_name,
            usuario=profile.username,
            correo=profile.email,
            rol=profile.role_id,
            area=profile.area_id
        )


class LoginResponse(BaseModel):
    mensaje: str
    usuario: UserInfo


class MessageResponse(BaseModel):
    mensaje: str
