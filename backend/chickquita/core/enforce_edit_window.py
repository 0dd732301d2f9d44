"""Same-Day Edit Window — decides whether a daily record may still be mutated.

Invariants:
    - is_editable is PURE: a function of (created_at, now) only, nothing cached
    - Editable iff the UTC calendar date of now equals that of created_at
    - Once locked, a record never becomes editable again (now only moves forward)
    - The window follows the creation timestamp, not record_date

Design Decisions:
    - Dates compared in UTC; naive timestamps are treated as UTC (SQLite drops tzinfo)
"""

from datetime import date, datetime, timezone

EDIT_RESTRICTION_UPDATE = (
    "Daily records can only be updated on the same day they were created "
    "(same-day edit restriction)"
)
EDIT_RESTRICTION_DELETE = (
    "Daily records can only be deleted on the same day they were created "
    "(same-day edit restriction)"
)


def utc_date(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def is_editable(created_at: datetime, now: datetime) -> bool:
    return utc_date(created_at) == utc_date(now)
