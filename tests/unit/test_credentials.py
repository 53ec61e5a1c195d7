"""Password hashing and access token round trips."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from divelog.crosscutting.config import get_settings
from divelog.crosscutting.error_responses import AppHTTPException
from divelog.identity.credentials import (
    JWT_ALGORITHM,
    PasswordHashSettings,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

pytestmark = pytest.mark.unit


def _hash_settings(salt: str) -> PasswordHashSettings:
    return PasswordHashSettings(
        secret_salt=salt, time_cost=1, memory_cost=1024, parallelism=1, hash_len=32
    )


class TestPasswords:
    def test_hash_is_deterministic_hex(self):
        first = hash_password("correct-horse-battery")
        assert first == hash_password("correct-horse-battery")
        assert first != "correct-horse-battery"
        int(first, 16)

    def test_verify(self):
        digest = hash_password("correct-horse-battery")
        assert verify_password("correct-horse-battery", digest)
        assert not verify_password("wrong-horse-battery", digest)
        assert not verify_password("correct-horse-battery", "")

    def test_salt_changes_digest(self):
        a = hash_password("pw-pw-pw-pw-pw", _hash_settings("salt-one-1234"))
        b = hash_password("pw-pw-pw-pw-pw", _hash_settings("salt-two-1234"))
        assert a != b
        assert len(a) == 64


class TestTokens:
    def test_round_trip(self):
        user_id = uuid4()
        assert decode_access_token(create_access_token(user_id)) == user_id

    def test_expired(self):
        past = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": int(past.timestamp())},
            get_settings().jwt_secret,
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(AppHTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 403

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "exp": 9_999_999_999},
            "another-secret-of-adequate-length",
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(AppHTTPException):
            decode_access_token(token)

    def test_subject_must_be_uuid(self):
        token = jwt.encode(
            {"sub": "admin", "exp": 9_999_999_999},
            get_settings().jwt_secret,
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(AppHTTPException):
            decode_access_token(token)
