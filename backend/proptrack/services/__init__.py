"""Services Layer: orchestration over the store protocols.

Invariants:
    - Services depend on core/repository_protocols.py, never on SQLAlchemy
"""
