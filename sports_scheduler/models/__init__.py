"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Session is the aggregate root for its roster entries

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from sports_scheduler.models.user import User  # noqa: F401
from sports_scheduler.models.sport import Sport  # noqa: F401
from sports_scheduler.models.session import Session  # noqa: F401
from sports_scheduler.models.roster_entry import RosterEntry  # noqa: F401
