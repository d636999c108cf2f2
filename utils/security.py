"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT creation/verification via PyJWT
- JTI generation for token identifiers

Nothing here reads application config; callers pass the secret and algorithm.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

ph = PasswordHasher()


class TokenExpired(Exception):
    pass


class TokenInvalid(Exception):
    pass


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID).
    """
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def encode_token(
    claims: Dict[str, Any],
    secret: str,
    algorithm: str,
    expires_in: timedelta,
    issued_at: datetime | None = None,
) -> tuple[str, datetime]:
    """
    Sign ``claims`` with iat/exp/jti added.
    Returns the token and its expiry instant (whole seconds, as carried in ``exp``).
    """
    iat = (issued_at or utcnow()).replace(microsecond=0)
    exp = iat + expires_in
    payload = {
        **claims,
        "iat": int(iat.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": generate_jti(),
    }
    return jwt.encode(payload, secret, algorithm=algorithm), exp


def decode_token(token: str, secret: str, algorithm: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT signature and expiry.
    Raises TokenExpired or TokenInvalid; the token type is left to the caller.
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise TokenExpired("Token expired")
    except jwt.InvalidTokenError as exc:
        raise TokenInvalid(str(exc))
