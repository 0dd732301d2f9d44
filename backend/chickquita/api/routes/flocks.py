"""Flock Routes — flock lifecycle, reads, chick maturation and history notes.

Invariants:
    - Flocks are created under their coop: POST /coops/{coop_id}/flocks
    - PUT /flocks/{id} changes identifier and hatch date only
    - GET /coops/{coop_id}/flocks hides archived flocks unless include_inactive=true
    - History entries are edited through their own resource (notes only)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status

from chickquita.api.dependencies import get_dispatch
from chickquita.api.result_response import to_http
from chickquita.core.commands import (
    ArchiveFlockCommand, CreateFlockCommand, MatureChicksCommand,
    UpdateFlockCommand, UpdateFlockHistoryNotesCommand,
)
from chickquita.core.queries import (
    GetFlockByIdQuery, GetFlockHistoryQuery, GetFlocksQuery,
)
from chickquita.schemas.requests import (
    FlockCreateRequest, FlockUpdateRequest, HistoryNotesRequest, MatureChicksRequest,
)
from chickquita.services.command_dispatch import CommandDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["flocks"])


@router.get("/coops/{coop_id}/flocks")
async def list_flocks(
    coop_id: UUID, include_inactive: bool = False,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        GetFlocksQuery(coop_id=coop_id, include_inactive=include_inactive),
    )
    return to_http(result)


@router.get("/flocks/{flock_id}")
async def get_flock(flock_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch)):
    result = await dispatch.execute(GetFlockByIdQuery(flock_id=flock_id))
    return to_http(result)


@router.get("/flocks/{flock_id}/history")
async def get_flock_history(
    flock_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(GetFlockHistoryQuery(flock_id=flock_id))
    return to_http(result)


@router.post("/coops/{coop_id}/flocks", status_code=status.HTTP_201_CREATED)
async def create_flock(
    coop_id: UUID, body: FlockCreateRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        CreateFlockCommand(coop_id=coop_id, **body.model_dump()),
    )
    return to_http(result, status.HTTP_201_CREATED)


@router.put("/flocks/{flock_id}")
async def update_flock(
    flock_id: UUID, body: FlockUpdateRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        UpdateFlockCommand(flock_id=flock_id, **body.model_dump()),
    )
    return to_http(result)


@router.post("/flocks/{flock_id}/archive")
async def archive_flock(
    flock_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(ArchiveFlockCommand(flock_id=flock_id))
    return to_http(result)


@router.post("/flocks/{flock_id}/mature-chicks")
async def mature_chicks(
    flock_id: UUID, body: MatureChicksRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        MatureChicksCommand(flock_id=flock_id, **body.model_dump()),
    )
    return to_http(result)


@router.patch("/flock-history/{history_id}/notes")
async def update_history_notes(
    history_id: UUID, body: HistoryNotesRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        UpdateFlockHistoryNotesCommand(history_id=history_id, notes=body.notes),
    )
    return to_http(result)
