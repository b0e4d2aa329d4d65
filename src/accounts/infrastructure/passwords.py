"""
Credential Verifier
===================

bcrypt hashing via passlib, plus the plaintext comparison still needed for
accounts created before passwords were hashed.
"""

from passlib.context import CryptContext

from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=10,
)


def is_hashed(stored: str) -> bool:
    return stored.startswith(BCRYPT_PREFIXES)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_credentials(candidate: str, stored: str | None) -> bool:
    """
    Check a candidate password against the stored value.

    Hashed values go through passlib (constant-time). Anything else is a
    legacy plaintext row and is compared directly. Never raises.
    """
    if not stored:
        logger.info("verify_credentials: missing stored password")
        return False

    if not is_hashed(stored):
        return candidate == stored

    try:
        return pwd_context.verify(candidate, stored)
    except Exception as e:
        logger.warning("verify_credentials error: prefix=%s err=%s", stored[:4], e)
        return False
