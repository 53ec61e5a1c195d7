"""
===============================================================================
CRC CARD: identity/credentials.py
===============================================================================

Module:
    Password hashing and access tokens

Responsibilities:
    - Hash/verify passwords (Argon2id raw hash keyed by SECRET_SALT).
    - Issue signed access tokens with expiry.
    - Decode and validate tokens (signature, exp, minimal claims).

Collaborators:
    - crosscutting.config.get_settings: secrets, TTL, hash parameters.
    - crosscutting.error_responses.forbidden: invalid token.
    - identity.auth_users: resolves the current user from a token.
    - application.usecases: user creation, self-service, login.

Design decisions:
    - The hash is deterministic: the same password and salt give the same
      digest, so verification is a constant-time comparison.
    - Minimal claims: sub, iat, exp.
    - Never log secrets or tokens.
===============================================================================
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from argon2.low_level import Type, hash_secret_raw

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

TOKEN_INVALID_MESSAGE = "Token is invalid or expired!"


@dataclass(frozen=True, slots=True)
class PasswordHashSettings:
    secret_salt: str
    time_cost: int
    memory_cost: int
    parallelism: int
    hash_len: int


def get_password_hash_settings() -> PasswordHashSettings:
    s = get_settings()
    return PasswordHashSettings(
        secret_salt=s.secret_salt,
        time_cost=s.password_hash_time_cost,
        memory_cost=s.password_hash_memory_cost,
        parallelism=s.password_hash_parallelism,
        hash_len=s.password_hash_length,
    )


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str, settings: PasswordHashSettings | None = None) -> str:
    """Deterministic Argon2id digest of password keyed by the secret salt (hex)."""
    hs = settings or get_password_hash_settings()
    digest = hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=hs.secret_salt.encode("utf-8"),
        time_cost=hs.time_cost,
        memory_cost=hs.memory_cost,
        parallelism=hs.parallelism,
        hash_len=hs.hash_len,
        type=Type.ID,
    )
    return digest.hex()


def verify_password(
    password: str, password_hash: str, settings: PasswordHashSettings | None = None
) -> bool:
    candidate = hash_password(password, settings)
    return hmac.compare_digest(candidate, password_hash or "")


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def create_access_token(user_id: UUID) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, object] = {
        CLAIM_SUB: str(user_id),
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int(
            (now + timedelta(minutes=s.jwt_access_ttl_minutes)).timestamp()
        ),
    }
    return jwt.encode(payload, s.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> UUID:
    """
    Validate a token and return the user id it was issued for.

    Errors:
        - 403 on bad signature, expiry, missing claims or malformed subject.
    """
    try:
        payload = jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": [CLAIM_SUB, CLAIM_EXP]},
        )
        return UUID(str(payload[CLAIM_SUB]))
    except (jwt.InvalidTokenError, ValueError) as exc:
        raise forbidden(TOKEN_INVALID_MESSAGE) from exc
