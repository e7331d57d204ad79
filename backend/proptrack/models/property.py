"""Property ORM: one property-management record per row.

Invariants:
    - id is a 32-hex string primary key assigned by the create coordinator (no DB default)
    - group is non-nullable (status bucket: Pending, Exited, Full Property List, ...)
    - created_at is internal: orders listings by insertion, never serialized

Design Decisions:
    - JSON columns for rental_cost/direct_cost: values are schema-less (number,
      string or object) and stored as-is
    - Column "group" quoted by SQLAlchemy automatically (reserved word)
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, Text, Float, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from proptrack.db.base import Base


class Property(Base):
    """Property record: flat, single-collection entity."""
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    rental_cost: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    property_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    tag: Mapped[str | None] = mapped_column(String(200), nullable=True)
    contract_start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    contract_end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    direct_cost: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    group: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    city: Mapped[str | None] = mapped_column(String(200), nullable=True)
    fixed_cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


# Columns a client may write; id and created_at are server-owned
WRITABLE_FIELDS = frozenset({
    "address", "rental_cost", "property_name", "tag",
    "contract_start_date", "contract_end_date", "direct_cost",
    "group", "city", "fixed_cost",
})

# Text columns searched by find_many
SEARCHABLE_FIELDS = ("address", "property_name", "tag", "city", "group")

# Columns whose values can key a group bucket (JSON columns are unhashable)
GROUPABLE_FIELDS = WRITABLE_FIELDS - {"rental_cost", "direct_cost"}
