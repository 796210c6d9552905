"""
Credential primitives
Password hashing (bcrypt via passlib) and HS256 JWT signing (python-jose)
"""

import hashlib
import logging
import os
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt (salted, cost factor 10)"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        # Unrecognized or corrupted hash in the database
        logger.error(f"❌ Password hash could not be checked: {e}")
        return False


# A fixed hash to burn comparable bcrypt time when the account does not exist
_DUMMY_HASH = pwd_context.hash(secrets.token_urlsafe(16))


def burn_password_check(plain_password: str) -> None:
    """Run a throwaway verification so unknown accounts cost the same as wrong passwords"""
    verify_password(plain_password, _DUMMY_HASH)


# ============================================================================
# TOKEN GENERATION & VALIDATION
# ============================================================================


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token"""
    return secrets.token_hex(length)


def hash_token(token: str) -> str:
    """One-way digest for storing emailed tokens"""
    return hashlib.sha256(token.encode()).hexdigest()


def create_jwt_token(data: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
    """
    Create a JWT token

    Args:
        data: Claims to encode in the token
        secret: Signing secret of the principal's scope
        expires_delta: Token lifetime
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jose_jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def verify_jwt_token(token: str, secret: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a JWT token

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


# ============================================================================
# UPLOAD NAMES & LOG MASKING
# ============================================================================

UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\-.]+")
MAX_FILENAME_LENGTH = 120


def sanitize_filename(filename: str) -> str:
    """
    Reduce a client-supplied filename to a safe blob key segment.

    Directory parts are dropped, whitespace and unsafe characters collapse to
    underscores, and long names are shortened with the extension kept.
    """
    name = os.path.basename(filename.replace("\\", "/"))
    name = UNSAFE_FILENAME_CHARS.sub("_", name).strip("._")

    if len(name) > MAX_FILENAME_LENGTH:
        stem, ext = os.path.splitext(name)
        name = stem[: MAX_FILENAME_LENGTH - len(ext)] + ext

    return name or f"plik_{generate_secure_token(4)}"


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """Mask credentials for log lines, keeping the last few characters"""
    hidden = max(len(data) - visible_chars, 0)
    return "*" * len(data) if hidden == 0 else "*" * hidden + data[-visible_chars:]
