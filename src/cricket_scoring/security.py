"""Passcode hashing and verification for scorer access."""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from typing import Optional

from .config import settings
from .exceptions import ValidationError

logger = logging.getLogger(__name__)

ALGORITHM = "pbkdf2_sha256"


def validate_passcode(passcode: Optional[str]) -> str:
    """Return ``passcode`` if it is 4-6 digits, else raise ValidationError."""
    low = settings.scoring.passcode_min_length
    high = settings.scoring.passcode_max_length
    if not passcode or not passcode.isdigit() or not (low <= len(passcode) <= high):
        raise ValidationError(f"Passcode must be {low}-{high} digits")
    return passcode


def hash_passcode(passcode: str, iterations: Optional[int] = None) -> str:
    """One-way hash for storage: ``pbkdf2_sha256$<iterations>$<salt>$<digest>``."""
    iterations = iterations or settings.scoring.passcode_hash_iterations
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", passcode.encode("utf-8"), bytes.fromhex(salt), iterations)
    return f"{ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_passcode(passcode: Optional[str], stored_hash: str) -> bool:
    """Constant-time check of ``passcode`` against a hash from ``hash_passcode``."""
    if not passcode:
        return False
    try:
        algorithm, iterations, salt, expected = stored_hash.split("$")
        rounds = int(iterations)
        salt_bytes = bytes.fromhex(salt)
    except ValueError:
        logger.warning("Stored passcode hash is malformed")
        return False
    if algorithm != ALGORITHM:
        logger.warning(f"Unsupported passcode hash algorithm: {algorithm}")
        return False

    digest = hashlib.pbkdf2_hmac("sha256", passcode.encode("utf-8"), salt_bytes, rounds)
    return hmac.compare_digest(digest.hex(), expected)
