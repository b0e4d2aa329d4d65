"""
Accounts Application Services
==============================

Login and credential updates. Password hashing and verification are
injected so the service stays independent of the hashing library.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from src.accounts.domain import UserProfile, StoredCredentials
from src.core import (
    AuthenticationException, ResourceNotFoundException, ValidationException
)
from src.core.validation import require_fields
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IUserRepository(ABC):
    """Interface for user data access."""

    @abstractmethod
    async def get_active_by_username(self, username: str) -> Optional[StoredCredentials]:
        """Active user with that username, or None."""

    @abstractmethod
    async def update_credentials(
        self,
        user_id: int,
        username: Optional[str] = None,
        password_hash: Optional[str] = None
    ) -> int:
        """Update whichever credential fields are given; returns rows matched."""


# ========== Application Services ==========

class AccountService:
    """
    Authenticates users and updates their credentials.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        verify_password: Callable[[str, str], bool],
        hash_password: Callable[[str], str]
    ):
        self._users = user_repository
        self._verify = verify_password
        self._hash = hash_password

    async def login(self, username: Optional[str], password: Optional[str]) -> UserProfile:
        """
        Check credentials and return the user's profile.

        Raises:
            ValidationException: username or password missing
            ResourceNotFoundException: no active user with that username
            AuthenticationException: wrong password
        """
        require_fields(username, password)

        stored = await self._users.get_active_by_username(username)
        if stored is None:
            raise ResourceNotFoundException("Usuario no encontrado o inactivo")

        matches = await asyncio.to_thread(self._verify, password, stored.password)
        if not matches:
            logger.info("Login rejected", extra={"user_id": stored.profile.id})
            raise AuthenticationException("Contraseña incorrecta")

        return stored.profile

    async def update_credentials(
        self,
        user_id: int,
        new_username: Optional[str] = None,
        new_password: Optional[str] = None
    ) -> None:
        """
        Change the username and/or password; at least one is required.

        The new password is stored as a bcrypt hash.

        Raises:
            ValidationException: neither field supplied
            ResourceNotFoundException: no user with that id
        """
        username = new_username or None
        password = new_password or None
        if username is None and password is None:
            raise ValidationException("Debe enviar al menos un campo para actualizar")

        password_hash = None
        if password is not None:
            password_hash = await asyncio.to_thread(self._hash, password)

        matched = await self._users.update_credentials(
            user_id, username=username, password_hash=password_hash
        )
        if matched == 0:
            raise ResourceNotFoundException("Usuario no encontrado")
