"""Command Dispatch — explicit routing from command and query types to handler methods.

Invariants:
    - Every command->handler mapping is visible in one dict, no auto-discovery
    - Queries share the dispatch: one entry point per request, same identity gate
    - Unknown command types return a Validation failure (never raises)
    - Handlers are built once per dispatch with the caller's identity and stores

Design Decisions:
    - Explicit dict over getattr: adding a command requires editing this dict
    - Split handlers by aggregate: max ~4 methods per class
"""

import logging

from chickquita.core.commands import (
    ArchiveCoopCommand, ArchiveFlockCommand, CreateCoopCommand,
    CreateDailyRecordCommand, CreateFlockCommand, CreatePurchaseCommand,
    DeleteCoopCommand, DeleteDailyRecordCommand, DeletePurchaseCommand,
    MatureChicksCommand, UpdateCoopCommand, UpdateDailyRecordCommand,
    UpdateFlockCommand, UpdateFlockHistoryNotesCommand, UpdatePurchaseCommand,
)
from chickquita.core.errors import Error, ErrorCode
from chickquita.core.queries import (
    GetCoopByIdQuery, GetCoopsQuery, GetDailyRecordsQuery, GetFlockByIdQuery,
    GetFlockHistoryQuery, GetFlocksQuery, GetPurchaseByIdQuery, GetPurchasesQuery,
)
from chickquita.core.repository_protocols import (
    CoopStore, DailyRecordStore, FlockHistoryStore, FlockStore,
    IdentityContext, PurchaseStore,
)
from chickquita.core.result import Failure, Result
from chickquita.services.handle_coops import CoopHandlers
from chickquita.services.handle_daily_records import DailyRecordHandlers
from chickquita.services.handle_farm_queries import CoopQueries, FlockQueries
from chickquita.services.handle_flock_history import FlockHistoryHandlers
from chickquita.services.handle_flocks import FlockHandlers
from chickquita.services.handle_purchases import PurchaseHandlers
from chickquita.services.handle_record_queries import DailyRecordQueries, PurchaseQueries
from chickquita.services.handler_base import Clock, utc_now

logger = logging.getLogger(__name__)


class CommandDispatch:
    """Routes command or query type -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self,
        identity: IdentityContext,
        *,
        coops: CoopStore,
        flocks: FlockStore,
        history: FlockHistoryStore,
        records: DailyRecordStore,
        purchases: PurchaseStore,
        clock: Clock = utc_now,
    ):
        coop = CoopHandlers(identity, coops, clock)
        flock = FlockHandlers(identity, flocks, coops, clock)
        flock_history = FlockHistoryHandlers(identity, history, clock)
        daily = DailyRecordHandlers(identity, records, flocks, clock)
        purchase = PurchaseHandlers(identity, purchases, coops, clock)
        coop_reads = CoopQueries(identity, coops, clock)
        flock_reads = FlockQueries(identity, flocks, coops, clock)
        record_reads = DailyRecordQueries(identity, records, flocks, clock)
        purchase_reads = PurchaseQueries(identity, purchases, flocks, clock)

        self._handlers = {
            # Coops
            CreateCoopCommand: coop.create,
            UpdateCoopCommand: coop.update,
            ArchiveCoopCommand: coop.archive,
            DeleteCoopCommand: coop.delete,

            # Flocks
            CreateFlockCommand: flock.create,
            UpdateFlockCommand: flock.update,
            ArchiveFlockCommand: flock.archive,
            MatureChicksCommand: flock.mature_chicks,
            UpdateFlockHistoryNotesCommand: flock_history.update_notes,

            # Daily records
            CreateDailyRecordCommand: daily.create,
            UpdateDailyRecordCommand: daily.update,
            DeleteDailyRecordCommand: daily.delete,

            # Purchases
            CreatePurchaseCommand: purchase.create,
            UpdatePurchaseCommand: purchase.update,
            DeletePurchaseCommand: purchase.delete,

            # Queries
            GetCoopsQuery: coop_reads.get_all,
            GetCoopByIdQuery: coop_reads.get_by_id,
            GetFlocksQuery: flock_reads.get_by_coop,
            GetFlockByIdQuery: flock_reads.get_by_id,
            GetFlockHistoryQuery: flock_reads.get_history,
            GetDailyRecordsQuery: record_reads.search,
            GetPurchasesQuery: purchase_reads.search,
            GetPurchaseByIdQuery: purchase_reads.get_by_id,
        }

    async def execute(self, command: object) -> Result:
        """Route a command or query to its handler by exact type."""
        handler = self._handlers.get(type(command))
        if handler is None:
            logger.warning(f"Unknown command type: {type(command).__name__}")
            return Failure(Error(
                ErrorCode.VALIDATION,
                f"Command '{type(command).__name__}' is not supported.",
            ))
        return await handler(command)
