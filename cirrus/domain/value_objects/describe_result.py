"""
Describe Result Value Objects

Architectural Intent:
- Tagged outcome per sub-request of a describe_one call, so callers (and
  tests) can see exactly which sub-request failed instead of relying on
  swallowed exceptions
- The primary sub-request carries the structural attributes; auxiliary
  sub-requests (tags, statistics) degrade to absent on failure
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

PRIMARY = "primary"


@dataclass(frozen=True)
class SubrequestResult:
    name: str
    ok: bool
    attributes: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, name: str, attributes: dict[str, Any]) -> "SubrequestResult":
        return cls(name=name, ok=True, attributes=dict(attributes))

    @classmethod
    def failed(cls, name: str, error: BaseException | str) -> "SubrequestResult":
        return cls(name=name, ok=False, error=str(error))


@dataclass(frozen=True)
class DescribeResult:
    """Merged detail attributes plus the outcome of every sub-request."""

    resource_id: str
    outcomes: tuple[SubrequestResult, ...] = ()

    @property
    def attributes(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for outcome in self.outcomes:
            if outcome.ok:
                merged.update(outcome.attributes)
        return merged

    @property
    def failed_subrequests(self) -> list[str]:
        return [o.name for o in self.outcomes if not o.ok]

    @property
    def partial(self) -> bool:
        return bool(self.failed_subrequests)

    def outcome(self, name: str) -> Optional[SubrequestResult]:
        for o in self.outcomes:
            if o.name == name:
                return o
        return None
