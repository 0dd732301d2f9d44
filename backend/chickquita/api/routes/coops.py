"""Coop Routes — list, read, create, update, archive and delete coops.

Invariants:
    - Listing hides archived coops unless include_archived=true
    - Every route builds one command or query and dispatches it; no store access here
    - Create -> 201, delete -> 204, everything else -> 200 on success
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from chickquita.api.dependencies import get_dispatch
from chickquita.api.result_response import to_http
from chickquita.core.commands import (
    ArchiveCoopCommand, CreateCoopCommand, DeleteCoopCommand, UpdateCoopCommand,
)
from chickquita.core.queries import GetCoopByIdQuery, GetCoopsQuery
from chickquita.schemas.requests import CoopRequest
from chickquita.services.command_dispatch import CommandDispatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/coops", tags=["coops"])


@router.get("")
async def list_coops(
    include_archived: bool = False, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(GetCoopsQuery(include_archived=include_archived))
    return to_http(result)


@router.get("/{coop_id}")
async def get_coop(coop_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch)):
    result = await dispatch.execute(GetCoopByIdQuery(coop_id=coop_id))
    return to_http(result)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_coop(
    body: CoopRequest, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(CreateCoopCommand(**body.model_dump()))
    return to_http(result, status.HTTP_201_CREATED)


@router.put("/{coop_id}")
async def update_coop(
    coop_id: UUID, body: CoopRequest,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(
        UpdateCoopCommand(coop_id=coop_id, **body.model_dump()),
    )
    return to_http(result)


@router.post("/{coop_id}/archive")
async def archive_coop(
    coop_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(ArchiveCoopCommand(coop_id=coop_id))
    return to_http(result)


@router.delete(
    "/{coop_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
)
async def delete_coop(
    coop_id: UUID, dispatch: CommandDispatch = Depends(get_dispatch),
):
    result = await dispatch.execute(DeleteCoopCommand(coop_id=coop_id))
    return to_http(result, status.HTTP_204_NO_CONTENT)
