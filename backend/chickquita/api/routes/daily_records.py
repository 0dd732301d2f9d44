"""Daily Record Routes — list, log, correct and remove a day's egg count.

Invariants:
    - Records are created under their flock: POST /flocks/{flock_id}/daily-records
    - Listing filters by flock and an inclusive record_date range, newest first
    - Update/delete outside the creation day come back as 400 (same-day edit restriction)
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from chickquita.api.dependencies import get_dispatch
from chickquita.api.result_response import to_http
from chickquita.core.commands import (
    CreateDailyRecordCommand, DeleteDailyRecordCommand, UpdateDailyRecordCommand,
)
from chickquita.core.queries import GetDailyRecordsQuery
from chickquita.schemas.requests import DailyRecordCreateRequest, DailyRecordUpdateRequest
from chickquita.services.command_dispatch import CommandDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["daily-records"])


@router.get("/daily-records")
async def list_daily_records(
    flock_id: UUID | None = None, start_date: date | None = None,
    end_date: date | None = None, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(GetDailyRecordsQuery(
        flock_id=flock_id, start_date=start_date, end_date=end_date,
    ))
    return to_http(result)


@router.get("/flocks/{flock_id}/daily-records")
async def list_flock_daily_records(
    flock_id: UUID, start_date: date | None = None, end_date: date | None = None,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(GetDailyRecordsQuery(
        flock_id=flock_id, start_date=start_date, end_date=end_date,
    ))
    return to_http(result)


@router.post("/flocks/{flock_id}/daily-records", status_code=status.HTTP_201_CREATED)
async def create_daily_record(
    flock_id: UUID, body: DailyRecordCreateRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        CreateDailyRecordCommand(flock_id=flock_id, **body.model_dump()),
    )
    return to_http(result, status.HTTP_201_CREATED)


@router.put("/daily-records/{record_id}")
async def update_daily_record(
    record_id: UUID, body: DailyRecordUpdateRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        UpdateDailyRecordCommand(record_id=record_id, **body.model_dump()),
    )
    return to_http(result)


@router.delete(
    "/daily-records/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_daily_record(
    record_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(DeleteDailyRecordCommand(record_id=record_id))
    return to_http(result, status.HTTP_204_NO_CONTENT)
