"""Command Dispatch — tests for explicit command and query routing.

Tests cover:
    - Known commands route to the matching handler
    - Unknown command types return a Validation failure
    - Every command and query type is registered
    - Queries route through the same entry point
    - Cancellation propagates instead of becoming a Failure
"""

import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from chickquita.core import commands, queries
from chickquita.core.commands import CreateCoopCommand, CreateDailyRecordCommand
from chickquita.core.errors import ErrorCode
from chickquita.core.queries import GetCoopsQuery
from chickquita.services.command_dispatch import CommandDispatch
from tests.services.fake_stores import NOW, fixed_clock


def _dispatch(identity, coops, flocks, history, records, purchases):
    return CommandDispatch(
        identity, coops=coops, flocks=flocks, history=history,
        records=records, purchases=purchases, clock=fixed_clock(),
    )


async def test_dispatch_routes_create_coop(
    identity, coops, flocks, history, records, purchases,
):
    dispatch = _dispatch(identity, coops, flocks, history, records, purchases)
    result = await dispatch.execute(CreateCoopCommand(name="Coop 1"))
    assert result.ok
    assert result.value.name == "Coop 1"


async def test_dispatch_rejects_unknown_command(
    identity, coops, flocks, history, records, purchases,
):
    dispatch = _dispatch(identity, coops, flocks, history, records, purchases)
    result = await dispatch.execute(object())
    assert result.code == ErrorCode.VALIDATION
    assert "not supported" in result.message


async def test_dispatch_registers_every_command_and_query(
    identity, coops, flocks, history, records, purchases,
):
    dispatch = _dispatch(identity, coops, flocks, history, records, purchases)
    expected = [
        getattr(commands, name) for name in dir(commands)
        if name.endswith("Command")
    ] + [
        getattr(queries, name) for name in dir(queries)
        if name.endswith("Query")
    ]
    for command_type in expected:
        assert command_type in dispatch._handlers, f"Missing: {command_type.__name__}"
    assert len(dispatch._handlers) == 15 + 8


async def test_dispatch_routes_queries(
    identity, coops, flocks, history, records, purchases,
):
    dispatch = _dispatch(identity, coops, flocks, history, records, purchases)
    await dispatch.execute(CreateCoopCommand(name="Coop 1"))
    result = await dispatch.execute(GetCoopsQuery())
    assert [c.name for c in result.value] == ["Coop 1"]


async def test_cancellation_is_not_wrapped(identity, coops, history, records, purchases):
    flocks = AsyncMock()
    flocks.get_by_id.side_effect = asyncio.CancelledError()
    dispatch = _dispatch(identity, coops, flocks, history, records, purchases)
    with pytest.raises(asyncio.CancelledError):
        await dispatch.execute(CreateDailyRecordCommand(
            flock_id=uuid4(), record_date=NOW.date(),
        ))
