"""Record Grouping: buckets records by the value of one attribute.

Invariants:
    - Every record lands in exactly one bucket
    - Bucket order follows first appearance; record order is preserved within a bucket
"""

from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def group_by_attribute(records: Iterable[T], attribute: str) -> dict[str, list[T]]:
    """Group records by getattr(record, attribute)."""
    groups: dict[str, list[T]] = {}
    for record in records:
        groups.setdefault(getattr(record, attribute), []).append(record)
    return groups
