"""
Accounts Infrastructure Layer
=============================

Contains:
- Models: SQLAlchemy ORM model for tbl_usuarios
- Repositories: data access implementations
- Passwords: bcrypt / legacy plaintext credential verifier
"""

from src.accounts.infrastructure.models import UserModel
from src.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from src.accounts.infrastructure.passwords import (
    hash_password,
    verify_credentials,
)

__all__ = [
    "UserModel",
    "SQLAlchemyUserRepository",
    "hash_password",
    "verify_credentials",
]
