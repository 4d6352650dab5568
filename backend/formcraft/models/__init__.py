"""ORM Models — SQLAlchemy declarative models for form definitions.

Invariants:
    - All models inherit from Base (db/base.py)
    - Form is the aggregate root; fields and responses are scoped by form_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from formcraft.models.form import Form  # noqa: F401
from formcraft.models.form_field import FormField  # noqa: F401
from formcraft.models.form_response import FormResponse  # noqa: F401
