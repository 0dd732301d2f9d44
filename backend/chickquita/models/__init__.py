"""ORM Models — SQLAlchemy declarative models for all persisted aggregates.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every row carries tenant_id; stores filter on it
    - Uniqueness rules live here as real constraints, not only as handler probes

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata knows every table before create_all
"""

from chickquita.models.coop import Coop  # noqa: F401
from chickquita.models.flock import Flock  # noqa: F401
from chickquita.models.flock_history import FlockHistory  # noqa: F401
from chickquita.models.daily_record import DailyRecord  # noqa: F401
from chickquita.models.purchase import Purchase  # noqa: F401
