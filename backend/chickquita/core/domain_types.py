"""Domain Types — identity wrappers, enums and field limits shared across the codebase.

Invariants:
    - TenantId, CoopId, FlockId, ... wrap UUIDs — never use bare UUID in domain logic
    - PurchaseType / QuantityUnit are the only accepted purchase categories and units
    - Field length limits live here and nowhere else

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TenantId = NewType("TenantId", UUID)
CoopId = NewType("CoopId", UUID)
FlockId = NewType("FlockId", UUID)
FlockHistoryId = NewType("FlockHistoryId", UUID)
DailyRecordId = NewType("DailyRecordId", UUID)
PurchaseId = NewType("PurchaseId", UUID)


# ─── Field Limits ────────────────────────────────────────────────

MAX_COOP_NAME_LENGTH = 100
MAX_LOCATION_LENGTH = 200
MAX_FLOCK_IDENTIFIER_LENGTH = 50
MAX_PURCHASE_NAME_LENGTH = 100
MAX_REASON_LENGTH = 50
MAX_NOTES_LENGTH = 500


# ─── Enums ───────────────────────────────────────────────────────

class PurchaseType(str, Enum):
    """Purchase categories."""
    FEED = "Feed"
    VITAMINS = "Vitamins"
    BEDDING = "Bedding"
    TOYS = "Toys"
    VETERINARY = "Veterinary"
    OTHER = "Other"


class QuantityUnit(str, Enum):
    """Units a purchase quantity is measured in."""
    KG = "Kg"
    PCS = "Pcs"
    L = "L"
    PACKAGE = "Package"
    OTHER = "Other"


class HistoryReason(str, Enum):
    """Reasons recorded on flock composition changes made by the system."""
    INITIAL = "Initial"
    MATURATION = "Maturation"
