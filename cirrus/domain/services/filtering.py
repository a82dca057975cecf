"""
Filtering Service

Architectural Intent:
- Pure functions behind search-as-you-type on the service menu and the
  resource list screens
- Never mutates the authoritative list; returns a new view list
"""

from typing import Sequence, TypeVar

from cirrus.domain.value_objects.resource import Resource

T = TypeVar("T")


def clamp_index(index: int, count: int) -> int:
    """Clamp a selection index into [0, count - 1]; 0 when the list is empty."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


def filter_resources(resources: Sequence[Resource], query: str) -> list[Resource]:
    query = query.strip()
    if not query:
        return list(resources)
    return [r for r in resources if r.matches(query)]


def filter_by_text(items: Sequence[T], query: str, *fields: str) -> list[T]:
    """Case-insensitive substring filter over named string attributes."""
    needle = query.strip().lower()
    if not needle:
        return list(items)
    matched = []
    for item in items:
        for name in fields:
            value = getattr(item, name, None)
            if isinstance(value, str) and needle in value.lower():
                matched.append(item)
                break
    return matched
