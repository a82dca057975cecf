"""
Resource List DTOs

Architectural Intent:
- Data handed from the list controller to the presentation layer
- The view renders only what is in ListViewState and reports input back
  through the controller's navigate/set_search_query/select/back methods
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from cirrus.domain.value_objects.resource import Resource


class ListState(Enum):
    INIT = auto()
    LOADING = auto()
    READY = auto()
    LOAD_ERROR = auto()


class EnrichmentState(Enum):
    SUMMARY_ONLY = auto()
    ENRICHING = auto()
    ENRICHED = auto()
    ENRICH_FAILED = auto()


@dataclass(frozen=True)
class ListViewState:
    items: tuple[Resource, ...]
    loading: bool
    error: Optional[str]
    selected_index: int
    total: int = 0
    query: str = ""

    @property
    def selected(self) -> Optional[Resource]:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None
