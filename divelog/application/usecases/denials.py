"""Logging of authorization denials (actor, operation, reason tag)."""

from __future__ import annotations

from ...crosscutting.logger import logger
from ...domain.access_policy import AccessDecision, DenyReason, Principal


def log_denial(
    actor: Principal, operation: str, decision: AccessDecision | None = None
) -> None:
    reason = decision.reason if decision is not None else None
    logger.warning(
        "access denied",
        extra={
            "actor_id": str(actor.id),
            "actor_role": actor.role.value,
            "operation": operation,
            "reason": (reason or DenyReason.FORBIDDEN_ROLE).value,
        },
    )
