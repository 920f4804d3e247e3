"""
Password hashing and strength rules shared by registration and reset.
"""

import re

import bcrypt

from config import ApplicationConfig
from storefront_auth.libs.result import Error, Result, Return
from . import error_codes

_RULES = (
    (re.compile(r"[a-z]"), "one lowercase letter"),
    (re.compile(r"[A-Z]"), "one uppercase letter"),
    (re.compile(r"[0-9]"), "one number"),
    (re.compile(r"[^A-Za-z0-9]"), "one symbol"),
)


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(ApplicationConfig.BCRYPT_ROUNDS)
    )
    return hashed.decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Constant-time bcrypt comparison; a malformed stored hash never matches"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def validate_password(password: str) -> Result[None]:
    """
    Password must be at least 8 characters and contain at least one lowercase
    letter, one uppercase letter, one number and one symbol.
    """
    if len(password) < 8:
        return Return.err(
            Error(
                error_codes.INVALID_PASSWORD,
                "Password must be at least 8 characters long",
            )
        )

    missing = [label for pattern, label in _RULES if not pattern.search(password)]
    if missing:
        return Return.err(
            Error(
                error_codes.INVALID_PASSWORD,
                f"Password must contain at least {', '.join(missing)}",
            )
        )

    return Return.ok(None)
