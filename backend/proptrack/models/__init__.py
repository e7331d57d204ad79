"""ORM Models: SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Property is the only entity; no relationships
"""

from proptrack.models.property import Property  # noqa: F401
