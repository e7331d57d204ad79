"""Boundary Protocols: contracts between services and the store.

Invariants:
    - Services NEVER import the SQLAlchemy store directly; they accept a PropertyRepository
    - insert_unique raises DuplicateKeyError on id collision, StoreError otherwise
    - Lookups return None for absent ids (never raise PropertyNotFoundError)

Design Decisions:
    - Protocol over ABC: structural subtyping, test stubs need no inheritance
"""

from typing import Any, Protocol


class PropertyRepository(Protocol):
    """Contract for property persistence: implemented by infrastructure/property_store.py."""
    async def find_many(self, search_term: str | None = None) -> list[Any]: ...
    async def find_by_id(self, property_id: str) -> Any | None: ...
    async def insert_unique(self, record: dict[str, Any]) -> Any: ...
    async def update_field(
        self, property_id: str, field: str, value: object,
    ) -> Any | None: ...
    async def delete_by_id(self, property_id: str) -> bool: ...
    async def group_by(self, field: str) -> dict[str, list[Any]]: ...
