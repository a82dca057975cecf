"""
Resource Provider Port

Architectural Intent:
- Port interface for one cloud service's read-only control-plane calls
- One adapter per service type (storage, compute, functions, tables,
  relational-db, cdn, network, pub/sub, queue)

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- list_resources must follow pagination to exhaustion and never return a
  partial page sequence
- describe_one raises only when the primary sub-request fails; auxiliary
  failures are reported in the returned DescribeResult
"""

from typing import Optional, Protocol, runtime_checkable

from cirrus.domain.value_objects.describe_result import DescribeResult
from cirrus.domain.value_objects.resource import Resource


@runtime_checkable
class ResourceProviderPort(Protocol):
    """Port for listing and describing one service's resources."""

    service_name: str
    sentinel: Optional[str]

    async def list_resources(self) -> list[Resource]:
        """Return every resource, all pages concatenated in order."""
        ...

    async def describe_one(self, resource_id: str) -> DescribeResult:
        """Fetch detail attributes for exactly one resource."""
        ...
