"""
===============================================================================
USE CASES: Dive logs (create / list / get / update / delete)
===============================================================================

Business Goal:
    Record dives and expose them according to the role hierarchy:
      - super_admin sees and edits every log
      - admin sees logs of basic-level users, orphaned logs and their own
      - basic_user sees only their own logs

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Responsibilities:
    - Validate the payload before touching persistence.
    - Resolve the owner of a new log (delegated creation).
    - Apply the listing strategy: query push-down for basic users, post
      filtering for admins and super admins.
    - Check can_access_log before read, update and delete.

Collaborators:
    - DiveLogRepository, UserRepository
    - domain.access_policy
    - listing.parse_listing_query
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.access_policy import (
    Principal,
    TargetUser,
    can_access_log,
    can_create_log_for,
    is_log_listed,
    plan_log_listing,
    resolve_log_owner,
)
from ....domain.entities import LOG_SORT_FIELDS, DiveLog
from ....domain.repositories import DiveLogRepository, UserRepository
from ....identity.roles import Role
from ..denials import log_denial
from ..identifiers import parse_id
from ..listing import ListingQuery, parse_listing_query
from ..results import (
    DiveLogListResult,
    DiveLogResult,
    MessageResult,
    ServiceError,
    access_denied,
    forbidden,
    not_found,
    user_not_found,
)
from .dive_log_input import DiveLogInput, build_dive_log_data

CREATE_FOR_USER_DENIED_MESSAGE = "You are not allowed to create a log for this user."


def _log_not_found(log_id) -> ServiceError:
    return not_found(f'Dive log with id "{log_id}" not found!')


class CreateDiveLogUseCase:
    def __init__(
        self, dive_log_repository: DiveLogRepository, user_repository: UserRepository
    ) -> None:
        self._logs = dive_log_repository
        self._users = user_repository

    def execute(
        self,
        actor: Principal,
        payload: DiveLogInput,
        *,
        add_user_id: UUID | str | None = None,
    ) -> DiveLogResult:
        data, error = build_dive_log_data(payload)
        if error is not None:
            return DiveLogResult(error=error)

        target = None
        # R: Basic users always log for themselves; addUser is ignored.
        if add_user_id and actor.role != Role.BASIC_USER:
            parsed = parse_id(add_user_id)
            user = self._users.get_user(parsed) if parsed else None
            if user is None or user.role is None:
                return DiveLogResult(error=user_not_found(add_user_id))
            target = TargetUser.of(user)

        decision = can_create_log_for(actor, target)
        if not decision:
            log_denial(actor, "create_log", decision)
            return DiveLogResult(error=forbidden(CREATE_FOR_USER_DENIED_MESSAGE))

        log = self._logs.create_log(
            owner_user_id=resolve_log_owner(actor, target), data=data
        )
        logger.info(
            "dive log created",
            extra={"log_id": str(log.id), "owner_user_id": str(log.owner_user_id)},
        )
        return DiveLogResult(log=log)


class ListDiveLogsUseCase:
    def __init__(self, dive_log_repository: DiveLogRepository) -> None:
        self._logs = dive_log_repository

    def execute(self, actor: Principal, query: ListingQuery) -> DiveLogListResult:
        options, error = parse_listing_query(
            query, LOG_SORT_FIELDS, with_time_bounds=True
        )
        if error is not None:
            return DiveLogListResult(error=error)

        plan = plan_log_listing(actor)
        logs = self._logs.list_logs(
            owner_user_id=plan.owner_user_id,
            start_from=options.start_from,
            start_to=options.start_to,
            sort=options.sort,
        )
        if plan.post_filter:
            logs = [
                log
                for log in logs
                if is_log_listed(
                    actor, log, active_users_only=options.active_users_only
                )
            ]
        return DiveLogListResult(logs=options.truncate(logs))


class _AccessibleLogMixin:
    """Shared lookup + can_access_log check for single-log operations."""

    _logs: DiveLogRepository

    def _load_accessible(
        self, actor: Principal, log_id: UUID | str, operation: str
    ) -> tuple[DiveLog | None, ServiceError | None]:
        parsed = parse_id(log_id)
        log = self._logs.get_log(parsed) if parsed else None
        if log is None:
            return None, _log_not_found(log_id)

        decision = can_access_log(actor, log)
        if not decision:
            log_denial(actor, operation, decision)
            return None, access_denied()
        return log, None


class GetDiveLogUseCase(_AccessibleLogMixin):
    def __init__(self, dive_log_repository: DiveLogRepository) -> None:
        self._logs = dive_log_repository

    def execute(self, actor: Principal, log_id: UUID | str) -> DiveLogResult:
        log, error = self._load_accessible(actor, log_id, "read_log")
        return DiveLogResult(log=log, error=error)


class UpdateDiveLogUseCase(_AccessibleLogMixin):
    """Replaces the whole payload; the owner never changes."""

    def __init__(self, dive_log_repository: DiveLogRepository) -> None:
        self._logs = dive_log_repository

    def execute(
        self, actor: Principal, log_id: UUID | str, payload: DiveLogInput
    ) -> DiveLogResult:
        data, error = build_dive_log_data(payload)
        if error is not None:
            return DiveLogResult(error=error)

        log, error = self._load_accessible(actor, log_id, "update_log")
        if error is not None:
            return DiveLogResult(error=error)

        updated = self._logs.update_log(log.id, data)
        if updated is None:
            return DiveLogResult(error=_log_not_found(log_id))
        return DiveLogResult(log=updated)


class DeleteDiveLogUseCase(_AccessibleLogMixin):
    def __init__(self, dive_log_repository: DiveLogRepository) -> None:
        self._logs = dive_log_repository

    def execute(self, actor: Principal, log_id: UUID | str) -> MessageResult:
        log, error = self._load_accessible(actor, log_id, "delete_log")
        if error is not None:
            return MessageResult(error=error)

        if not self._logs.delete_log(log.id):
            return MessageResult(error=_log_not_found(log_id))
        return MessageResult(message=f'Dive log with id "{log.id}" deleted!')
