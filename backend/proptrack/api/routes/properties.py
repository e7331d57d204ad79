"""Property Routes: HTTP surface for listing, grouping, fetching, creating, updating and deleting.

Invariants:
    - Handlers hold no state; each call makes its store calls and awaits them before responding
    - Creation always goes through create_with_retry (ids are never client-supplied)
    - PUT writes only the group field
    - Failures leave as core/errors.py types; error_handlers.py renders {"message": ...}

Design Decisions:
    - Two routers because the public paths are split between /api/properties and /properties
    - /properties/groups registered before /properties/{property_id} so it is not read as an id
    - surface_store_errors pins the route-level message (and, where given, status) on
      StoreError while the store-level message stays in the logs
    - POST keeps CreationExhaustedError's own message; store failures read "Error creating property"
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from proptrack.core.errors import PropertyNotFoundError, StoreError
from proptrack.core.repository_protocols import PropertyRepository
from proptrack.infrastructure.database import get_db
from proptrack.infrastructure.property_store import PropertyStore
from proptrack.schemas.property import (
    MessageResponse, PropertyCreate, PropertyGroupUpdate, PropertyResponse,
)
from proptrack.services.create_property import create_with_retry

logger = logging.getLogger(__name__)
api_router = APIRouter(prefix="/api/properties", tags=["properties"])
router = APIRouter(prefix="/properties", tags=["properties"])


def get_property_store(db: AsyncSession = Depends(get_db)) -> PropertyRepository:
    """FastAPI dependency for the request-scoped property store."""
    return PropertyStore(db)


@contextmanager
def surface_store_errors(
    message: str,
    http_status: int | None = status.HTTP_500_INTERNAL_SERVER_ERROR,
    *,
    property_id: str | None = None,
    search_term: str | None = None,
) -> Iterator[None]:
    """Re-raise StoreError with the message and status this route exposes.

    http_status=None keeps the status the error already carries.
    """
    try:
        yield
    except StoreError as exc:
        if http_status is not None:
            exc.http_status = http_status
        exc.context.user_message = message
        exc.context.property_id = exc.context.property_id or property_id
        exc.context.search_term = exc.context.search_term or search_term
        raise


@api_router.get("", response_model=list[PropertyResponse])
async def list_properties(
    search_term: str | None = Query(None, alias="searchTerm"),
    store: PropertyRepository = Depends(get_property_store),
):
    """List properties, optionally narrowed by a free-text search term."""
    with surface_store_errors(
        "Error retrieving properties", search_term=search_term,
    ):
        properties = await store.find_many(search_term)
    logger.info(
        f"Property query {search_term!r} matched {len(properties)}",
        extra={"search_term": search_term},
    )
    return [PropertyResponse.model_validate(p) for p in properties]


@router.get("/groups", response_model=dict[str, list[PropertyResponse]])
async def list_property_groups(
    store: PropertyRepository = Depends(get_property_store),
):
    """All properties keyed by their status group."""
    with surface_store_errors("Error retrieving grouped properties"):
        groups = await store.group_by("group")
    logger.info(f"Properties retrieved in {len(groups)} groups")
    return {
        group: [PropertyResponse.model_validate(p) for p in members]
        for group, members in groups.items()
    }


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: str, store: PropertyRepository = Depends(get_property_store),
):
    with surface_store_errors(
        "Error retrieving property", property_id=property_id,
    ):
        found = await store.find_by_id(property_id)
    if found is None:
        raise PropertyNotFoundError(property_id)
    return PropertyResponse.model_validate(found)


@router.post(
    "", response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_property(
    body: PropertyCreate, store: PropertyRepository = Depends(get_property_store),
):
    """Create a property under a server-generated id."""
    with surface_store_errors("Error creating property", http_status=None):
        created = await create_with_retry(store, body.model_dump())
    return PropertyResponse.model_validate(created)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property_group(
    property_id: str,
    body: PropertyGroupUpdate,
    store: PropertyRepository = Depends(get_property_store),
):
    """Move a property to another status group. No other field is writable here."""
    with surface_store_errors(
        "Error updating property", status.HTTP_400_BAD_REQUEST,
        property_id=property_id,
    ):
        updated = await store.update_field(property_id, "group", body.group)
    if updated is None:
        raise PropertyNotFoundError(property_id)
    logger.info(
        f"Property group switched to {body.group!r}",
        extra={"property_id": property_id},
    )
    return PropertyResponse.model_validate(updated)


@api_router.delete("/{property_id}", response_model=MessageResponse)
async def delete_property(
    property_id: str, store: PropertyRepository = Depends(get_property_store),
):
    with surface_store_errors(
        "Error deleting property", property_id=property_id,
    ):
        deleted = await store.delete_by_id(property_id)
    if not deleted:
        raise PropertyNotFoundError(property_id)
    logger.info("Property deleted", extra={"property_id": property_id})
    return MessageResponse(message="Property deleted successfully")
