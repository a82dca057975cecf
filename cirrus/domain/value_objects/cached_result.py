"""
CachedResult Value Object

Architectural Intent:
- Snapshot of the last list fetch for one service: data, error, loaded flag
- Invariants are enforced at construction so an inconsistent entry can never
  be stored in the session cache
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from cirrus.domain.value_objects.resource import Resource


@dataclass(frozen=True)
class CachedResult:
    data: tuple[Resource, ...] = ()
    error: Optional[str] = None
    loaded: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(self.data))
        if self.error is not None:
            if not self.loaded:
                raise ValueError("A failed result must be marked loaded")
            if self.data:
                raise ValueError("A failed result cannot carry data")

    @classmethod
    def pending(cls) -> "CachedResult":
        return cls()

    @classmethod
    def success(cls, data: Iterable[Resource]) -> "CachedResult":
        return cls(data=tuple(data), error=None, loaded=True)

    @classmethod
    def failure(cls, message: str) -> "CachedResult":
        return cls(data=(), error=message or "Unknown error", loaded=True)

    @property
    def ok(self) -> bool:
        return self.loaded and self.error is None
