"""FlockHistory ORM — append-only composition snapshots of a flock.

Invariants:
    - Always belongs to a Flock (flock_id FK, cascades on flock delete)
    - Rows are never deleted by the application; only notes are updated
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from chickquita.db.base import Base


class FlockHistory(Base):
    __tablename__ = "flock_history"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    flock_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("flocks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    change_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    hens: Mapped[int] = mapped_column(Integer, nullable=False)
    roosters: Mapped[int] = mapped_column(Integer, nullable=False)
    chicks: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
