"""
Resource List Controller

Architectural Intent:
- Drives one list screen: initial load (cache or provider), search filtering,
  selection tracking, and lazy per-item enrichment
- Presentation-agnostic: the view receives ListViewState snapshots through
  on_change and calls navigate/set_search_query/select/back
- Provider failures are converted into state here and never escape into the
  UI event loop

State machine:
    INIT -> LOADING -> READY | LOAD_ERROR
    per item in READY: SUMMARY_ONLY -> ENRICHING -> ENRICHED | ENRICH_FAILED

Design Decisions:
- The authoritative list is owned by the controller; the view gets a filtered
  tuple and the cache gets a fresh CachedResult after every change
- Enrichment merges by id, replacing only the matching entry, so every other
  Resource object keeps its identity
- A loaded cache entry is adopted as-is, however stale; failed loads are only
  cached when cache_failures is set
- An in-flight describe cannot be cancelled; its write-back is dropped once
  the screen has been left, and skipped if the item is already enriched
"""

import logging
from typing import Callable, Optional

from cirrus.application.dtos.resource_list_dtos import (
    EnrichmentState,
    ListState,
    ListViewState,
)
from cirrus.application.metadata_scheduler import MetadataScheduler
from cirrus.domain.errors import ProviderError
from cirrus.domain.ports.resource_provider_port import ResourceProviderPort
from cirrus.domain.services.filtering import clamp_index, filter_resources
from cirrus.domain.value_objects.cached_result import CachedResult
from cirrus.domain.value_objects.resource import Resource
from cirrus.infrastructure.resource_cache import ResourceCache

logger = logging.getLogger(__name__)


class ResourceListController:
    def __init__(
        self,
        service_name: str,
        provider: ResourceProviderPort,
        cache: ResourceCache,
        scheduler: Optional[MetadataScheduler] = None,
        on_change: Optional[Callable[[ListViewState], None]] = None,
        cache_failures: bool = False,
    ) -> None:
        self.service_name = service_name
        self.provider = provider
        self.cache = cache
        self.scheduler = scheduler or MetadataScheduler()
        self.on_change = on_change
        self.cache_failures = cache_failures

        self.state = ListState.INIT
        self.error: Optional[str] = None
        self._resources: list[Resource] = []
        self._query = ""
        self._selected_index = 0
        self._hovered_id: Optional[str] = None
        self._enrichment: dict[str, EnrichmentState] = {}
        self._active = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def resources(self) -> tuple[Resource, ...]:
        return tuple(self._resources)

    @property
    def filtered(self) -> list[Resource]:
        return filter_resources(self._resources, self._query)

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def selected(self) -> Optional[Resource]:
        items = self.filtered
        if not items:
            return None
        return items[clamp_index(self._selected_index, len(items))]

    @property
    def sentinel(self) -> Optional[str]:
        return getattr(self.provider, "sentinel", None)

    def view(self) -> ListViewState:
        items = self.filtered
        return ListViewState(
            items=tuple(items),
            loading=self.state in (ListState.INIT, ListState.LOADING),
            error=self.error,
            selected_index=clamp_index(self._selected_index, len(items)),
            total=len(self._resources),
            query=self._query,
        )

    def item_state(self, resource_id: str) -> EnrichmentState:
        resource = self._find(resource_id)
        if resource is not None and resource.is_enriched(self.sentinel):
            return EnrichmentState.ENRICHED
        return self._enrichment.get(resource_id, EnrichmentState.SUMMARY_ONLY)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def mount(self) -> None:
        self._active = True
        cached = self.cache.get(self.service_name)
        if cached is not None and cached.loaded:
            logger.debug("Using cached %s list (%d items)", self.service_name, len(cached.data))
            self._adopt(cached)
            self._notify()
            self._hover_changed()
            return

        self.state = ListState.LOADING
        self._notify()
        try:
            resources = await self.provider.list_resources()
        except ProviderError as e:
            self._load_failed(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error listing %s", self.service_name)
            self._load_failed(str(e) or e.__class__.__name__)
            return

        logger.info("Loaded %d %s resource(s)", len(resources), self.service_name)
        self.cache.put(self.service_name, CachedResult.success(resources))
        if not self._active:
            return
        self._resources = list(resources)
        self.error = None
        self.state = ListState.READY
        self._selected_index = clamp_index(self._selected_index, len(self.filtered))
        self._notify()
        self._hover_changed()

    def back(self) -> None:
        """Leave the screen: drop any pending enrichment and stop write-backs."""
        self.scheduler.cancel()
        self._active = False

    def _adopt(self, cached: CachedResult) -> None:
        self._resources = list(cached.data)
        self.error = cached.error
        self.state = ListState.LOAD_ERROR if cached.error is not None else ListState.READY

    def _load_failed(self, message: str) -> None:
        logger.warning("Failed to list %s: %s", self.service_name, message)
        if self.cache_failures:
            self.cache.put(self.service_name, CachedResult.failure(message))
        if not self._active:
            return
        self._resources = []
        self.error = message or "Unknown error"
        self.state = ListState.LOAD_ERROR
        self._notify()

    # ------------------------------------------------------------------
    # View input
    # ------------------------------------------------------------------

    def navigate(self, direction: int) -> None:
        """Move the selection by direction rows (negative is up)."""
        count = len(self.filtered)
        self._selected_index = clamp_index(self._selected_index + direction, count)
        self._notify()
        self._hover_changed()

    def set_search_query(self, text: str) -> None:
        self._query = text
        self._selected_index = clamp_index(self._selected_index, len(self.filtered))
        self._notify()
        self._hover_changed()

    def select(self) -> Optional[Resource]:
        resource = self.selected
        if resource is not None:
            self.request_enrichment(resource.id)
        return resource

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    def _hover_changed(self) -> None:
        resource = self.selected
        hovered_id = resource.id if resource is not None else None
        if hovered_id == self._hovered_id:
            return
        self._hovered_id = hovered_id
        # the pending describe belongs to the row just left
        if hovered_id is None or not self.request_enrichment(hovered_id):
            self.scheduler.cancel()

    def request_enrichment(self, resource_id: str) -> bool:
        """Schedule a debounced describe for this item if it still needs one."""
        if not self._needs_enrichment(resource_id):
            return False
        self.scheduler.schedule(lambda: self.enrich(resource_id))
        return True

    def _needs_enrichment(self, resource_id: str) -> bool:
        if self.state is not ListState.READY:
            return False
        resource = self._find(resource_id)
        if resource is None or resource.is_enriched(self.sentinel):
            return False
        return self._enrichment.get(resource_id) is not EnrichmentState.ENRICHING

    async def enrich(self, resource_id: str) -> bool:
        """Fetch and merge detail attributes. Returns True if the list changed."""
        if not self._needs_enrichment(resource_id):
            return False

        self._enrichment[resource_id] = EnrichmentState.ENRICHING
        self._notify()
        try:
            result = await self.provider.describe_one(resource_id)
        except ProviderError as e:
            logger.debug("Enrichment of %s/%s failed: %s", self.service_name, resource_id, e)
            self._enrichment[resource_id] = EnrichmentState.ENRICH_FAILED
            self._notify()
            return False
        except Exception:
            logger.exception("Unexpected error enriching %s/%s", self.service_name, resource_id)
            self._enrichment[resource_id] = EnrichmentState.ENRICH_FAILED
            self._notify()
            return False

        if result.partial:
            logger.debug(
                "Partial enrichment of %s/%s, failed sub-requests: %s",
                self.service_name,
                resource_id,
                ", ".join(result.failed_subrequests),
            )
        return self._apply(resource_id, result.attributes)

    def _apply(self, resource_id: str, attributes: dict) -> bool:
        if not self._active:
            logger.debug("Dropping enrichment of %s after leaving the screen", resource_id)
            self._enrichment.pop(resource_id, None)
            return False

        index = self._index_of(resource_id)
        if index is None:
            self._enrichment.pop(resource_id, None)
            return False

        current = self._resources[index]
        if current.is_enriched(self.sentinel):
            self._enrichment[resource_id] = EnrichmentState.ENRICHED
            return False

        updated = current.merged(attributes)
        self._resources[index] = updated
        if updated.is_enriched(self.sentinel):
            self._enrichment[resource_id] = EnrichmentState.ENRICHED
        else:
            self._enrichment[resource_id] = EnrichmentState.ENRICH_FAILED

        self.cache.put(self.service_name, CachedResult.success(self._resources))
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _index_of(self, resource_id: str) -> Optional[int]:
        for i, resource in enumerate(self._resources):
            if resource.id == resource_id:
                return i
        return None

    def _find(self, resource_id: str) -> Optional[Resource]:
        index = self._index_of(resource_id)
        return None if index is None else self._resources[index]

    def _notify(self) -> None:
        if self.on_change is not None and self._active:
            self.on_change(self.view())
