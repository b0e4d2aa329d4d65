"""
Accounts Application Layer
==========================

Contains:
- Services: login and credential updates
- DTOs: request/response models
"""

from src.accounts.application.dto import (
    LoginRequest,
    UpdateUserRequest,
    UserInfo,
    LoginResponse,
    MessageResponse,
)
from src.accounts.application.services import AccountService, IUserRepository

__all__ = [
    "LoginRequest",
    "UpdateUserRequest",
    "UserInfo",
    "LoginResponse",
    "MessageResponse",
    "AccountService",
    "IUserRepository",
]
