"""
Password Utilities

This module provides secure password hashing and verification. Hashes are
self-describing strings so the salt and work factor travel with the hash:

    pbkdf2_sha256$<iterations>$<salt>$<hex digest>
"""

import hashlib
import secrets
from typing import Optional

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 100000

_iterations = DEFAULT_ITERATIONS


def set_hash_iterations(iterations: int) -> None:
    """
    Set the PBKDF2 iteration count used for new hashes.

    Existing hashes keep verifying with the count recorded inside them.
    """
    global _iterations
    if iterations < 1:
        raise ValueError("iterations must be positive")
    _iterations = iterations


def get_hash_iterations() -> int:
    """The PBKDF2 iteration count used for new hashes."""
    return _iterations


def _derive(password: str, salt: str, iterations: int) -> str:
    key = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
        dklen=32
    )
    return key.hex()


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """
    Hash a password using PBKDF2 with SHA-256 and a random salt.

    Args:
        password: The password to hash
        salt: Optional salt to use (if None, a new salt will be generated)

    Returns:
        The encoded hash string
    """
    if salt is None:
        salt = secrets.token_hex(16)

    iterations = _iterations
    return f"{ALGORITHM}${iterations}${salt}${_derive(password, salt, iterations)}"


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify that a password matches a stored hash.

    The comparison runs in constant time. A malformed stored hash never
    matches.

    Args:
        password: The password to verify
        hashed_password: The stored, encoded hash

    Returns:
        True if the password matches, False otherwise
    """
    try:
        algorithm, iterations, salt, digest = hashed_password.split("$")
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False

    if algorithm != ALGORITHM or rounds < 1:
        return False

    calculated = _derive(password, salt, rounds)
    return secrets.compare_digest(calculated, digest)
