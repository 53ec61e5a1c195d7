"""
===============================================================================
CRC CARD: routers/logbooks.py
===============================================================================

Class/Module:
    Logbook Router

Responsibilities:
    - Expose dive log CRUD and listing endpoints.
    - Pass raw listing parameters to the use case (it owns validation).
    - Translate ServiceError into RFC 7807.

Collaborators:
    - application.usecases (dive log use cases)
    - container (DI factories)
    - schemas.logbooks (DTOs)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from divelog.application.usecases import (
    CreateDiveLogUseCase,
    DeleteDiveLogUseCase,
    GetDiveLogUseCase,
    ListDiveLogsUseCase,
    ListingQuery,
    UpdateDiveLogUseCase,
)
from divelog.container import (
    get_create_dive_log_use_case,
    get_delete_dive_log_use_case,
    get_get_dive_log_use_case,
    get_list_dive_logs_use_case,
    get_update_dive_log_use_case,
)
from divelog.domain.access_policy import Principal

from ..dependencies import current_principal, log_listing_query
from ..error_mapping import raise_service_error
from ..schemas import (
    DiveLogEnvelope,
    DiveLogListEnvelope,
    DiveLogReq,
    DiveLogRes,
    MessageRes,
)

router = APIRouter(tags=["logbooks"])


def _log_or_raise(result) -> DiveLogEnvelope:
    if result.error is not None:
        raise_service_error(result.error)
    return DiveLogEnvelope(data=DiveLogRes.of(result.log))


@router.post("/logbooks", response_model=DiveLogEnvelope, status_code=201)
def create_log(
    req: DiveLogReq,
    actor: Principal = Depends(current_principal),
    use_case: CreateDiveLogUseCase = Depends(get_create_dive_log_use_case),
):
    return _log_or_raise(
        use_case.execute(actor, req.to_input(), add_user_id=req.add_user)
    )


@router.get("/logbooks", response_model=DiveLogListEnvelope)
def list_logs(
    query: ListingQuery = Depends(log_listing_query),
    actor: Principal = Depends(current_principal),
    use_case: ListDiveLogsUseCase = Depends(get_list_dive_logs_use_case),
):
    result = use_case.execute(actor, query)
    if result.error is not None:
        raise_service_error(result.error)
    return DiveLogListEnvelope(data=[DiveLogRes.of(log) for log in result.logs])


@router.get("/logbooks/{log_id}", response_model=DiveLogEnvelope)
def get_log(
    log_id: str,
    actor: Principal = Depends(current_principal),
    use_case: GetDiveLogUseCase = Depends(get_get_dive_log_use_case),
):
    return _log_or_raise(use_case.execute(actor, log_id))


@router.patch("/logbooks/{log_id}", response_model=DiveLogEnvelope)
def update_log(
    log_id: str,
    req: DiveLogReq,
    actor: Principal = Depends(current_principal),
    use_case: UpdateDiveLogUseCase = Depends(get_update_dive_log_use_case),
):
    return _log_or_raise(use_case.execute(actor, log_id, req.to_input()))


@router.delete("/logbooks/{log_id}", response_model=MessageRes)
def delete_log(
    log_id: str,
    actor: Principal = Depends(current_principal),
    use_case: DeleteDiveLogUseCase = Depends(get_delete_dive_log_use_case),
):
    result = use_case.execute(actor, log_id)
    if result.error is not None:
        raise_service_error(result.error)
    return MessageRes(message=result.message)
