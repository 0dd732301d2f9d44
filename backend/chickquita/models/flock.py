"""Flock ORM — persists flocks and their current composition.

Invariants:
    - (coop_id, identifier) is unique: identifiers are exact-match unique per coop
    - current_* counts always equal the latest flock_history row
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from chickquita.db.base import Base


class Flock(Base):
    __tablename__ = "flocks"
    __table_args__ = (UniqueConstraint("coop_id", "identifier"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    coop_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("coops.id", ondelete="RESTRICT"),
        nullable=False,
    )
    identifier: Mapped[str] = mapped_column(String(50), nullable=False)
    hatch_date: Mapped[date] = mapped_column(Date, nullable=False)
    current_hens: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_roosters: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_chicks: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
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
