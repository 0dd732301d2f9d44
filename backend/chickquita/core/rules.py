"""Field Rules — the single-field checks shared by validators and entity invariants.

Invariants:
    - Every check returns a message string on violation, None when the value passes
    - Pure: "today" is always an argument, never read from the clock

Design Decisions:
    - Message-returning functions instead of exceptions so validators can collect all
      violations while entities raise on the first one
"""

from datetime import date
from decimal import Decimal


def check_required_text(value: str | None, label: str, max_length: int) -> str | None:
    """Trimmed value must be non-empty and at most max_length characters."""
    if value is None or not value.strip():
        return f"{label} is required."
    if len(value) > max_length:
        return f"{label} must not exceed {max_length} characters."
    return None


def check_optional_text(value: str | None, label: str, max_length: int) -> str | None:
    if value is not None and len(value) > max_length:
        return f"{label} must not exceed {max_length} characters."
    return None


def check_not_future(value: date | None, label: str, today: date) -> str | None:
    """Date is required and may be today but not after it."""
    if value is None:
        return f"{label} is required."
    if value > today:
        return f"{label} cannot be in the future."
    return None


def check_non_negative(value: int | Decimal | None, message: str) -> str | None:
    if value is None or value < 0:
        return message
    return None


def check_positive(value: int | Decimal | None, message: str) -> str | None:
    if value is None or value <= 0:
        return message
    return None
