"""Property Schemas: Pydantic models for the property HTTP surface.

Invariants:
    - PropertyCreate never carries an id (ids are assigned server-side; a client
      supplied id is ignored with the other unknown keys)
    - group is required on create and on update
    - rentalCost/directCost are opaque JSON values (number, string or object)
    - Input accepts camelCase or snake_case names; output is always camelCase

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one rule for every field
    - Type coercion only (dates, floats); no further business validation
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyFields(_CamelModel):
    """Every property attribute except id."""
    address: str | None = None
    rental_cost: Any = None
    property_name: str | None = None
    tag: str | None = None
    contract_start_date: datetime | None = None
    contract_end_date: datetime | None = None
    direct_cost: Any = None
    group: str
    city: str | None = None
    fixed_cost: float | None = None


class PropertyCreate(PropertyFields):
    """POST /properties body."""


class PropertyGroupUpdate(_CamelModel):
    """PUT /properties/{id} body: only the status group is writable."""
    group: str


class PropertyResponse(PropertyFields):
    """Public-facing property record."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: str


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""
    message: str
