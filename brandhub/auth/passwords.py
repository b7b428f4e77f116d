"""Password hashing utilities using bcrypt."""

import os

import bcrypt


DEFAULT_ROUNDS = 12


def _rounds() -> int:
    return int(os.getenv("BCRYPT_ROUNDS", str(DEFAULT_ROUNDS)))


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=_rounds())
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    Args:
        plain_password: Plain text password to check
        hashed_password: Bcrypt hash to check against

    Returns:
        True if password matches hash
    """
    if not plain_password or not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
