"""
Resource Value Object

Architectural Intent:
- Immutable record for one cloud resource as shown in a list screen
- Splits attributes into summary (from the bulk list call) and detail
  (from a per-resource describe) tiers; the provider's sentinel attribute
  marks that the detail tier has been fetched
- Enrichment produces a new instance so other list entries are never touched

Design Decisions:
- name is always populated: it falls back to id, then "unknown"; the id
  itself is never invented, so providers drop rows that carry none
- Attributes live in a plain dict keyed by snake_case attribute name;
  absence of a key (not a falsy value) means "not fetched"
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

UNKNOWN = "unknown"


def resolve_name(name: Optional[str], resource_id: Optional[str]) -> str:
    """Return the display label for a resource."""
    return name or resource_id or UNKNOWN


def normalize_tags(raw: Any) -> list[tuple[str, str]]:
    """
    Normalise provider tag shapes into an ordered list of (key, value) pairs.

    Accepts the list-of-dicts shape used by most AWS APIs
    ([{"Key": "env", "Value": "prod"}]) and the mapping shape used by
    Lambda and SQS ({"env": "prod"}).
    """
    if not raw:
        return []
    if isinstance(raw, Mapping):
        return [(str(k), "" if v is None else str(v)) for k, v in raw.items()]
    pairs = []
    for tag in raw:
        key = tag.get("Key")
        if key is None:
            continue
        value = tag.get("Value")
        pairs.append((str(key), "" if value is None else str(value)))
    return pairs


@dataclass(frozen=True)
class Resource:
    id: str
    name: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)

    __hash__ = None  # attributes dict is mutable

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", self.id or "")
        object.__setattr__(self, "name", resolve_name(self.name, self.id))

    @classmethod
    def create(
        cls,
        resource_id: Optional[str],
        name: Optional[str] = None,
        **attributes: Any,
    ) -> "Resource":
        """Build a resource from a list-call row, dropping None attributes."""
        summary = {k: v for k, v in attributes.items() if v is not None}
        return cls(id=resource_id or "", name=name or "", attributes=summary)

    @property
    def description(self) -> Optional[str]:
        value = self.attributes.get("description")
        return value if isinstance(value, str) else None

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.attributes

    def is_enriched(self, sentinel: Optional[str]) -> bool:
        """A provider without a sentinel has nothing to enrich."""
        if sentinel is None:
            return True
        return sentinel in self.attributes

    def merged(self, detail: Mapping[str, Any]) -> "Resource":
        """Return a copy with non-None detail attributes layered over the summary."""
        combined = dict(self.attributes)
        combined.update((k, v) for k, v in detail.items() if v is not None)
        return replace(self, attributes=combined)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name and description."""
        if not query:
            return True
        needle = query.lower()
        if needle in self.name.lower():
            return True
        description = self.description
        return bool(description) and needle in description.lower()
