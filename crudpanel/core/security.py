"""
Security Utilities

Password hashing for widgets that persist secrets.

Uses pwdlib (modern replacement for unmaintained passlib) for password hashing.
"""

from functools import lru_cache

from pwdlib import PasswordHash
from pwdlib.hashers.bcrypt import BcryptHasher

from crudpanel.config import get_settings


@lru_cache
def _password_hash(rounds: int) -> PasswordHash:
    # BcryptHasher only, so argon2 is not a required dependency
    return PasswordHash((BcryptHasher(rounds=rounds),))


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password string
    """
    return _password_hash(get_settings().password_bcrypt_rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return _password_hash(get_settings().password_bcrypt_rounds).verify(
        plain_password, hashed_password
    )
