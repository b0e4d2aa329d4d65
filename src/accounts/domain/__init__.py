"""
Accounts Domain Layer
=====================
"""

from src.accounts.domain.entities import UserProfile, StoredCredentials

__all__ = ["UserProfile", "StoredCredentials"]
