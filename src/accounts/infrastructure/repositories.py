"""
Accounts Infrastructure Repositories
=====================================

SQLAlchemy implementation of the user repository.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.accounts.application.services import IUserRepository
from src.accounts.domain import UserProfile, StoredCredentials
from src.accounts.infrastructure.models import UserModel
from src.infrastructure.database import store_errors
from src.core import ValidationException


class SQLAlchemyUserRepository(IUserRepository):
    """
    Reads and updates rows of tbl_usuarios.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_active_by_username(self, username: str) -> Optional[StoredCredentials]:
        stmt = select(UserModel).where(
            UserModel.username == username,
            UserModel.active == True,  # noqa: E712
        )

        with store_errors("read user"):
            result = await self._session.execute(stmt)
            model = result.scalars().first()

        if model is None:
            return None

        return StoredCredentials(
            profile=UserProfile(
                id=model.id,
                first_name=model.first_name,
                last_name=model.last_name,
                username=model.username,
                email=model.email,
                role_id=model.role_id,
                area_id=model.area_id
            ),
            password=model.password
        )

    async def update_credentials(
        self,
        user_id: int,
        username: Optional[str] = None,
        password_hash: Optional[str] = None
    ) -> int:
        """
        One of three fixed UPDATE statements, chosen by which fields are set.
        """
        if username is not None and password_hash is not None:
            values = {"username": username, "password": password_hash}
        elif username is not None:
            values = {"username": username}
        elif password_hash is not None:
            values = {"password": password_hash}
        else:
            raise ValidationException("Debe enviar al menos un campo para actualizar")

        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        with store_errors("update user credentials"):
            result = await self._session.execute(stmt)
            await self._session.commit()
            return result.rowcount
