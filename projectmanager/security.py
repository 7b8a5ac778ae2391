"""Password hashing, verification and the password rules shown on the signup screen."""

import enum
import logging
import re

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

from projectmanager.config import settings

logger = logging.getLogger(__name__)

UPPERCASE = re.compile(r"[A-Z]")
LOWERCASE = re.compile(r"[a-z]")
DIGIT = re.compile(r"\d")
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")

# Older accounts carry jBCrypt hashes; $2a$ and $2y$ verify the same as $2b$
LEGACY_BCRYPT_PREFIXES = ("$2a$", "$2y$")


class PasswordStrength(str, enum.Enum):
    EMPTY = "Empty"
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


def _get_password_hasher() -> PasswordHash:
    if not hasattr(_get_password_hasher, "cached_instance"):
        # Argon2 first: new hashes use it, bcrypt is only checked for verification
        _get_password_hasher.cached_instance = PasswordHash((Argon2Hasher(), BcryptHasher()))
    return _get_password_hasher.cached_instance


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    Hashing the same password twice yields two different strings; both verify.
    """
    return _get_password_hasher().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its stored hash.

    Accepts the Argon2 hashes written by ``hash_password`` and bcrypt hashes of
    older accounts. A malformed or unrecognised hash is treated as a mismatch
    rather than an error.
    """
    if not hashed_password:
        return False
    if hashed_password.startswith(LEGACY_BCRYPT_PREFIXES):
        hashed_password = "$2b$" + hashed_password[4:]
    try:
        return _get_password_hasher().verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError):
        logger.warning("Error verifying password: invalid hash format")
        return False


def is_acceptable_password(password: str) -> bool:
    """Minimum length is the only rule a password must satisfy."""
    return password is not None and len(password) >= settings.PASSWORD_MIN_LENGTH


def password_strength(password: str) -> PasswordStrength:
    """Classify a password for display; the result never affects acceptance."""
    if not password:
        return PasswordStrength.EMPTY
    if len(password) < 6:
        return PasswordStrength.WEAK
    if len(password) < 10:
        return PasswordStrength.MEDIUM

    variety = sum(
        [
            bool(UPPERCASE.search(password)),
            bool(LOWERCASE.search(password)),
            bool(DIGIT.search(password)),
            bool(SPECIAL_CHARACTERS.search(password)),
        ]
    )
    if len(password) >= 12 and variety >= 3:
        return PasswordStrength.STRONG
    return PasswordStrength.MEDIUM


__all__ = [
    "PasswordStrength",
    "hash_password",
    "verify_password",
    "is_acceptable_password",
    "password_strength",
]
