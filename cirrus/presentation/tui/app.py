"""
Cirrus TUI

Architectural Intent:
- Textual application hosting the service menu and the per-service screens
- Routes a chosen service to its list screen, or to the Coming Soon
  placeholder when the catalog has no provider for it
"""

from typing import Optional
import logging

from textual.app import App

from cirrus.composition_root import CirrusContainer
from cirrus.domain.errors import UnknownServiceError
from cirrus.presentation.tui.screens import (
    ComingSoonScreen,
    ResourceListScreen,
    ServiceMenuScreen,
)

logger = logging.getLogger(__name__)


class CirrusApp(App):
    """Interactive browser for AWS resources."""

    TITLE = "Cirrus"

    CSS = """
    Screen {
        layout: vertical;
    }
    OptionList {
        height: 1fr;
        border: solid green;
    }
    #list_metadata {
        height: auto;
        max-height: 50%;
        border: solid yellow;
        padding: 0 1;
    }
    #menu_title, #list_title {
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, container: CirrusContainer, initial_service: Optional[str] = None):
        super().__init__()
        self.container = container
        self.initial_service = initial_service

    def on_mount(self) -> None:
        self.sub_title = self.container.config.aws.region
        self.push_screen(ServiceMenuScreen(self.container.catalog.entries))
        if self.initial_service:
            self.open_service(self.initial_service)

    def open_service(self, name: str) -> None:
        try:
            entry = self.container.catalog.entry(name)
        except UnknownServiceError:
            logger.warning("Unknown service requested: %s", name)
            self.notify(f"Unknown service: {name}", severity="error")
            return

        logger.info("Opening %s", entry.name)
        if entry.supported:
            self.push_screen(ResourceListScreen(self.container, entry.name))
        else:
            self.push_screen(ComingSoonScreen(entry.name))
