"""Infrastructure Layer: database lifecycle, property store, logging.

Invariants:
    - Only this layer imports SQLAlchemy engine/session machinery
    - Store failures leave this layer as core/errors.py types
"""
