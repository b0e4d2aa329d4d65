"""
Accounts Domain Entities
========================

Users of the mobile app: requesters and technicians.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class UserProfile:
    """
    Public view of a user returned after login.

    Credentials never leave the repository layer inside this object.
    """
    id: int
    first_name: str
    last_name: str
    username: str
    email: Optional[str]
    role_id: Optional[int]
    area_id: Optional[int]


@dataclass
class StoredCredentials:
    """An active user's profile together with the stored password value."""
    profile: UserProfile
    password: str
