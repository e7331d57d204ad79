"""Retry-Create Coordinator: inserts a new property while tolerating id collisions.

Invariants:
    - At most max_attempts inserts, strictly sequential (no parallel attempts)
    - Each attempt uses a freshly generated id, never a reused one
    - Only DuplicateKeyError is retried; any other error propagates on the spot
    - Exhaustion raises CreationExhaustedError, not chained to the store error

Design Decisions:
    - No read-before-insert: the store's unique key is the only serialization point
    - No backoff: a collision is a statistical accident, not contention
"""

import logging
from collections.abc import Callable
from typing import Any

from proptrack.core.errors import CreationExhaustedError, DuplicateKeyError
from proptrack.core.id_generator import generate_id
from proptrack.core.repository_protocols import PropertyRepository

logger = logging.getLogger(__name__)

MAX_CREATE_ATTEMPTS = 3


async def create_with_retry(
    store: PropertyRepository,
    data: dict[str, Any],
    *,
    max_attempts: int = MAX_CREATE_ATTEMPTS,
    id_factory: Callable[[], str] = generate_id,
) -> Any:
    """Insert data under a generated id, regenerating on collision."""
    for attempt in range(1, max_attempts + 1):
        candidate = {**data, "id": id_factory()}
        try:
            created = await store.insert_unique(candidate)
        except DuplicateKeyError:
            logger.warning(
                f"Duplicate id detected on attempt {attempt}, retrying",
                extra={"attempt": attempt, "property_id": candidate["id"]},
            )
            continue
        logger.info(
            f"Property added with id {created.id}",
            extra={"attempt": attempt, "property_id": created.id},
        )
        return created

    raise CreationExhaustedError(max_attempts)
