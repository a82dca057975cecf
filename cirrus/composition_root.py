"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the Cirrus application
- Single place where config, the boto3 session, the provider catalog and the
  session cache are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Controllers are per-screen, so the container hands out a factory for them
  rather than instances
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from cirrus.application.dtos.resource_list_dtos import ListViewState
from cirrus.application.metadata_scheduler import MetadataScheduler
from cirrus.application.resource_list_controller import ResourceListController
from cirrus.domain.errors import UnknownServiceError
from cirrus.infrastructure.adapters.aws import create_session
from cirrus.infrastructure.config import CirrusConfig
from cirrus.infrastructure.resource_cache import ResourceCache
from cirrus.infrastructure.service_catalog import ServiceCatalog


@dataclass
class CirrusContainer:
    """DI container holding all wired dependencies."""

    config: CirrusConfig
    catalog: ServiceCatalog
    cache: ResourceCache

    def create_controller(
        self,
        service_name: str,
        on_change: Optional[Callable[[ListViewState], None]] = None,
    ) -> ResourceListController:
        provider = self.catalog.provider(service_name)
        if provider is None:
            raise UnknownServiceError(service_name)
        return ResourceListController(
            service_name=provider.service_name,
            provider=provider,
            cache=self.cache,
            scheduler=MetadataScheduler(debounce_ms=self.config.ui.debounce_ms),
            on_change=on_change,
            cache_failures=self.config.ui.cache_failures,
        )


def create_container(config: CirrusConfig, session: Any = None) -> CirrusContainer:
    """Create and wire all dependencies."""
    if session is None:
        session = create_session(config.aws)
    catalog = ServiceCatalog(config.aws, session=session)
    return CirrusContainer(config=config, catalog=catalog, cache=ResourceCache())
