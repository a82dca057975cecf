"""
TUI Screens

Architectural Intent:
- Textual screens for the service menu, the generic resource list and the
  placeholder shown for services without a provider
- Screens are presentation only: the list screen renders ListViewState
  snapshots and forwards navigation, search, select and back to its
  ResourceListController

Key bindings:
- Up/Down move the selection, typing filters, Enter selects
- Esc on the menu exits; Esc (or B on an error panel) on a list goes back
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional
import logging

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, OptionList, Static
from textual.widgets.option_list import Option

from cirrus.application.dtos.resource_list_dtos import ListViewState
from cirrus.domain.services.filtering import clamp_index, filter_by_text
from cirrus.infrastructure.service_catalog import ServiceEntry
from cirrus.presentation.tui.fields import render_metadata, row_label, view_for

if TYPE_CHECKING:
    from cirrus.composition_root import CirrusContainer

logger = logging.getLogger(__name__)


class ServiceMenuScreen(Screen):
    """Searchable picker over every service in the catalog."""

    BINDINGS = [
        ("up", "cursor_up", "Up"),
        ("down", "cursor_down", "Down"),
        ("escape", "exit", "Exit"),
    ]

    def __init__(self, entries: tuple[ServiceEntry, ...]) -> None:
        super().__init__()
        self.entries = entries
        self.filtered: list[ServiceEntry] = list(entries)
        self.selected_index = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static("[bold]AWS Service Selector[/bold]", id="menu_title"),
            Input(placeholder="Search services", id="menu_search"),
            OptionList(id="menu_options"),
            Static("[dim]Up/Down Navigate | Enter: Select | Esc: Exit[/dim]", id="menu_help"),
        )
        yield Footer()

    def on_mount(self) -> None:
        options = self.query_one(OptionList)
        options.can_focus = False
        self._refresh_options()
        self.query_one(Input).focus()

    def _refresh_options(self) -> None:
        options = self.query_one(OptionList)
        options.clear_options()
        if not self.filtered:
            options.add_option(Option("[dim]No services found[/dim]", disabled=True))
            return
        options.add_options(
            Option(
                f"{entry.name} [dim]- {entry.description}[/dim]",
                id=entry.name,
            )
            for entry in self.filtered
        )
        options.highlighted = self.selected_index

    def on_input_changed(self, event: Input.Changed) -> None:
        self.filtered = filter_by_text(self.entries, event.value, "name", "description")
        self.selected_index = clamp_index(self.selected_index, len(self.filtered))
        self._refresh_options()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.filtered:
            self.app.open_service(self.filtered[self.selected_index].name)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_id:
            self.app.open_service(event.option_id)

    def _move(self, delta: int) -> None:
        self.selected_index = clamp_index(self.selected_index + delta, len(self.filtered))
        if self.filtered:
            self.query_one(OptionList).highlighted = self.selected_index

    def action_cursor_up(self) -> None:
        self._move(-1)

    def action_cursor_down(self) -> None:
        self._move(1)

    def action_exit(self) -> None:
        self.app.exit(return_code=0)


class ResourceListScreen(Screen):
    """Generic list screen driven by a ResourceListController."""

    BINDINGS = [
        ("up", "cursor_up", "Up"),
        ("down", "cursor_down", "Down"),
        ("escape", "back", "Back"),
        ("b", "back", "Back"),
    ]

    def __init__(self, container: "CirrusContainer", service_name: str) -> None:
        super().__init__()
        self.view_spec = view_for(service_name)
        self.controller = container.create_controller(service_name, on_change=self.render_state)
        self._rendered_items: Optional[tuple] = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static(f"[bold]{self.view_spec.title}[/bold]", id="list_title"),
            Input(placeholder="Search", id="list_search"),
            Static("", id="list_status"),
            OptionList(id="list_items"),
            Static("", id="list_metadata"),
            Static("[dim]Up/Down Navigate | Enter: Select | Esc: Back[/dim]", id="list_help"),
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(OptionList).can_focus = False
        self.query_one(Input).focus()
        self.run_worker(self.controller.mount(), exclusive=True)

    def render_state(self, state: ListViewState) -> None:
        status = self.query_one("#list_status", Static)
        items = self.query_one(OptionList)
        metadata = self.query_one("#list_metadata", Static)
        search = self.query_one(Input)

        if state.loading:
            status.update(f"Loading {escape(self.view_spec.title)}...")
            items.display = False
            metadata.display = False
            return

        if state.error is not None:
            status.update(
                f"[red]Error: {escape(state.error)}[/red]\n"
                "[dim]Press B to go back | Esc to go back[/dim]"
            )
            items.display = False
            metadata.display = False
            search.disabled = True
            return

        self.query_one("#list_title", Static).update(
            f"[bold]{self.view_spec.title} ({state.total})[/bold]"
        )
        items.display = True
        if state.items != self._rendered_items:
            self._rendered_items = state.items
            items.clear_options()
            if state.items:
                items.add_options(
                    Option(row_label(self.view_spec, r), id=r.id) for r in state.items
                )
        if state.items:
            status.update("")
            items.highlighted = state.selected_index
        elif state.query:
            status.update("[dim]No matching results[/dim]")
        else:
            status.update(f"[dim]No {escape(self.view_spec.title.lower())} found[/dim]")

        selected = state.selected
        if selected is None:
            metadata.display = False
            return
        metadata.display = True
        lines = render_metadata(
            self.view_spec,
            selected,
            self.controller.sentinel,
            self.controller.item_state(selected.id),
        )
        metadata.update("\n".join(lines))

    def on_input_changed(self, event: Input.Changed) -> None:
        self.controller.set_search_query(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        resource = self.controller.select()
        if resource is not None:
            logger.info("Selected %s %s", self.controller.service_name, resource.id)

    def action_cursor_up(self) -> None:
        self.controller.navigate(-1)

    def action_cursor_down(self) -> None:
        self.controller.navigate(1)

    def action_back(self) -> None:
        self.controller.back()
        self.app.pop_screen()


class ComingSoonScreen(Screen):
    BINDINGS = [
        ("escape", "back", "Back"),
        ("b", "back", "Back"),
    ]

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static(f"[bold]{escape(self.service_name)}: Coming Soon[/bold]"),
            Static("This service screen is not yet implemented."),
            Static("[dim]Press B to go back | Esc to go back[/dim]"),
        )
        yield Footer()

    def action_back(self) -> None:
        self.app.pop_screen()
