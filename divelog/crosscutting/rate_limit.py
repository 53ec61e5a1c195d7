"""
===============================================================================
MODULE: Login rate limiting (Token Bucket) - in-memory
===============================================================================

Goal
----
Basic brute-force protection for the login endpoint, keyed by client IP:
- a short window for bursts (default 5 attempts / 5 minutes)
- a long window for slow attacks (default 15 attempts / hour)

Exceeding either window answers 429 (RFC 7807) with Retry-After.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Components:
  - TokenBucket
  - LoginRateLimiter
  - enforce_login_rate_limit (FastAPI dependency)

Responsibilities:
  - Decide allow/deny per client
  - Keep state thread-safe
  - Emit 429 with Retry-After

Collaborators:
  - crosscutting.config
  - crosscutting.error_responses
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .error_responses import rate_limited
from .logger import logger

SHORT_WINDOW_MESSAGE = (
    "Too many login attempts from this IP, please try again after 5 minutes."
)
LONG_WINDOW_MESSAGE = (
    "Too many login attempts from this IP, please try again after an hour."
)


@dataclass
class Bucket:
    tokens: float
    last_refill: float
    last_seen: float


class TokenBucket:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      TokenBucket

    Responsibilities:
      - Token bucket per key
      - Time based refill
      - TTL cleanup
      - Eviction past max_buckets

    Collaborators:
      - LoginRateLimiter
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        rps: float,
        burst: int,
        *,
        ttl_seconds: int = 3600,
        max_buckets: int = 10_000,
    ):
        if rps <= 0:
            raise ValueError("rps must be > 0")
        if burst <= 0:
            raise ValueError("burst must be > 0")
        self.rps = float(rps)
        self.burst = int(burst)

        self.ttl_seconds = int(ttl_seconds)
        self.max_buckets = int(max_buckets)

        self._buckets: "OrderedDict[str, Bucket]" = OrderedDict()
        self._lock = threading.Lock()
        self._ops = 0

    def consume(self, key: str) -> tuple[bool, float]:
        with self._lock:
            now = time.monotonic()
            self._ops += 1

            self._cleanup_if_needed(now)

            bucket = self._get_or_create_bucket(key, now)
            self._refill(bucket, now)
            bucket.last_seen = now
            self._buckets.move_to_end(key, last=True)

            if bucket.tokens >= 1:
                bucket.tokens -= 1
                return True, 0.0

            tokens_needed = 1 - bucket.tokens
            return False, tokens_needed / self.rps

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()

    # --------------------------- internals ---------------------------

    def _get_or_create_bucket(self, key: str, now: float) -> Bucket:
        b = self._buckets.get(key)
        if b:
            return b

        if len(self._buckets) >= self.max_buckets:
            self._buckets.popitem(last=False)

        b = Bucket(tokens=float(self.burst), last_refill=now, last_seen=now)
        self._buckets[key] = b
        return b

    def _refill(self, bucket: Bucket, now: float) -> None:
        elapsed = now - bucket.last_refill
        if elapsed <= 0:
            return
        bucket.tokens = min(self.burst, bucket.tokens + elapsed * self.rps)
        bucket.last_refill = now

    def _cleanup_if_needed(self, now: float) -> None:
        # Amortized: one sweep every 256 operations
        if (self._ops & 0xFF) != 0:
            return

        ttl = self.ttl_seconds
        if ttl <= 0:
            return

        to_delete = []
        for k, b in self._buckets.items():
            if now - b.last_seen > ttl:
                to_delete.append(k)
            else:
                break

        for k in to_delete:
            self._buckets.pop(k, None)


class LoginRateLimiter:
    """Two token buckets per client: a short burst window and a long window."""

    def __init__(
        self,
        *,
        short_max: int,
        short_window_seconds: int,
        long_max: int,
        long_window_seconds: int,
    ):
        self.short = TokenBucket(
            rps=short_max / short_window_seconds,
            burst=short_max,
            ttl_seconds=short_window_seconds,
        )
        self.long = TokenBucket(
            rps=long_max / long_window_seconds,
            burst=long_max,
            ttl_seconds=long_window_seconds,
        )

    def check(self, client_id: str) -> tuple[bool, int, str]:
        """
        Consume one attempt for client_id.

        Returns (allowed, retry_after_seconds, message). The long window is
        only charged when the short window lets the attempt through.
        """
        allowed, retry_after = self.short.consume(client_id)
        if not allowed:
            return False, max(1, int(retry_after) + 1), SHORT_WINDOW_MESSAGE

        allowed, retry_after = self.long.consume(client_id)
        if not allowed:
            return False, max(1, int(retry_after) + 1), LONG_WINDOW_MESSAGE

        return True, 0, ""

    def clear(self) -> None:
        self.short.clear()
        self.long.clear()


_login_limiter: Optional[LoginRateLimiter] = None
_limiter_lock = threading.Lock()


def get_login_rate_limiter() -> LoginRateLimiter:
    global _login_limiter
    with _limiter_lock:
        if _login_limiter is None:
            from .config import get_settings

            s = get_settings()
            _login_limiter = LoginRateLimiter(
                short_max=s.login_rate_limit_short_max,
                short_window_seconds=s.login_rate_limit_short_window_seconds,
                long_max=s.login_rate_limit_long_max,
                long_window_seconds=s.login_rate_limit_long_window_seconds,
            )
        return _login_limiter


def reset_login_rate_limiter() -> None:
    global _login_limiter
    with _limiter_lock:
        _login_limiter = None


def get_client_identifier(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        return f"ip:{ip}"

    client = request.client
    if client:
        return f"ip:{client.host}"

    return "ip:unknown"


def enforce_login_rate_limit(request: Request) -> None:
    """FastAPI dependency guarding POST /users/login."""
    client_id = get_client_identifier(request)
    allowed, retry_after, message = get_login_rate_limiter().check(client_id)
    if allowed:
        return

    logger.warning(
        "login rate limit exceeded",
        extra={"client_id": client_id, "retry_after": retry_after},
    )
    raise rate_limited(message, retry_after)
