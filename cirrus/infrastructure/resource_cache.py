"""
Resource Cache

Architectural Intent:
- Process-lifetime memo of the last list result per service name
- Lets a screen be left and re-entered without another list round trip
- No expiry and no eviction; it is emptied only when the process exits
"""

import logging
from typing import Optional

from cirrus.domain.value_objects.cached_result import CachedResult

logger = logging.getLogger(__name__)


class ResourceCache:
    def __init__(self) -> None:
        self._entries: dict[str, CachedResult] = {}

    def get(self, service_name: str) -> Optional[CachedResult]:
        return self._entries.get(service_name)

    def put(self, service_name: str, result: CachedResult) -> None:
        logger.debug(
            "Cache put %s (loaded=%s, items=%d, error=%s)",
            service_name,
            result.loaded,
            len(result.data),
            result.error,
        )
        self._entries[service_name] = result

    def __contains__(self, service_name: str) -> bool:
        return service_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
