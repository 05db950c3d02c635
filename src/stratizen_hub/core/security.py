"""Password hashing and JWT helpers."""
from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from stratizen_hub.core.settings import settings
from stratizen_hub.db.time import utcnow


PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 260_000


def _pbkdf2(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    """Return a salted PBKDF2-SHA256 hash as ``scheme$iterations$salt$digest``."""
    salt = secrets.token_bytes(16)
    digest = _pbkdf2(password, salt, PASSWORD_ITERATIONS)
    return f"{PASSWORD_SCHEME}${PASSWORD_ITERATIONS}${salt.hex()}${digest.hex()}"


def _check_hash(password: str, password_hash: str) -> bool:
    try:
        scheme, iterations, salt_hex, digest_hex = password_hash.split("$")
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    if scheme != PASSWORD_SCHEME:
        return False
    return hmac.compare_digest(_pbkdf2(password, salt, rounds), expected)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored hash or the shared default password.

    Accounts without a stored hash only accept the default password.
    """
    if hmac.compare_digest(password.encode("utf-8"), settings.default_password.encode("utf-8")):
        return True
    if password_hash is None:
        return False
    return _check_hash(password, password_hash)


def create_access_token(user_id: str, session_id: str) -> str:
    """Create a JWT bound to a user and a server-side session."""
    expire = utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {"sub": user_id, "sid": session_id, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> tuple[str, str]:
    """Return ``(user_id, session_id)`` from a token.

    Raises:
        ValueError: If the token is invalid, expired or missing claims.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise ValueError("Could not validate credentials") from err

    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if not user_id or not session_id:
        raise ValueError("Could not validate credentials")
    return user_id, session_id
