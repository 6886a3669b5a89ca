"""ORM Models — SQLAlchemy declarative models for users and profiles.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; Profile is scoped by user_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from walletreg.models.user import User  # noqa: F401
from walletreg.models.profile import Profile  # noqa: F401
