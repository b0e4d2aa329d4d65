"""
Accounts Infrastructure Models
===============================

SQLAlchemy ORM model for the existing 'tbl_usuarios' table.
"""

from sqlalchemy import String, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class UserModel(Base):
    """
    Database model for User entity.

    'password' holds either a bcrypt hash or, for legacy rows, plaintext.
    """
    __tablename__ = "tbl_usuarios"

    id: Mapped[int] = mapped_column("id_usuario", Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column("usuario", String(100), nullable=False, index=True)
    password: Mapped[str] = mapped_column("password", String(255), nullable=False)

    first_name: Mapped[str] = mapped_column("nombre", String(100), nullable=False)
    last_name: Mapped[str] = mapped_column("apellido", String(100), nullable=False)
    email: Mapped[str] = mapped_column("correo", String(255), nullable=True)

    role_id: Mapped[int] = mapped_column("id_rol", Integer, nullable=True)
    area_id: Mapped[int] = mapped_column("id_area", Integer, nullable=True)
    active: Mapped[bool] = mapped_column("activo", Boolean, nullable=False, default=True)
