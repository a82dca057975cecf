"""Tests for the Textual app: menu routing and the generic list screen."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from textual.widgets import OptionList, Static

from cirrus.composition_root import CirrusContainer
from cirrus.domain.errors import ListError
from cirrus.domain.value_objects.describe_result import DescribeResult
from cirrus.domain.value_objects.resource import Resource
from cirrus.infrastructure.config import CirrusConfig
from cirrus.infrastructure.resource_cache import ResourceCache
from cirrus.infrastructure.service_catalog import ServiceCatalog, ServiceEntry
from cirrus.presentation.tui.app import CirrusApp
from cirrus.presentation.tui.screens import (
    ComingSoonScreen,
    ResourceListScreen,
    ServiceMenuScreen,
)


def _make_provider(resources=None, list_error=None):
    provider = MagicMock()
    provider.service_name = "EC2"
    provider.sentinel = "availability_zone"
    if list_error is not None:
        provider.list_resources = AsyncMock(side_effect=list_error)
    else:
        provider.list_resources = AsyncMock(return_value=resources or [])
    provider.describe_one = AsyncMock(return_value=DescribeResult(resource_id="i-1"))
    return provider


def _make_container(provider):
    config = CirrusConfig()
    entries = (
        ServiceEntry("EC2", "Elastic Compute Cloud", lambda **kwargs: provider),
        ServiceEntry("IAM", "Identity and Access Management"),
    )
    catalog = ServiceCatalog(config.aws, session=MagicMock(), entries=entries)
    return CirrusContainer(config=config, catalog=catalog, cache=ResourceCache())


class TestRouting:
    @pytest.mark.asyncio
    async def test_starts_on_menu(self):
        app = CirrusApp(_make_container(_make_provider()))
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, ServiceMenuScreen)
            assert app.screen.query_one(OptionList).option_count == 2

    @pytest.mark.asyncio
    async def test_placeholder_service_opens_coming_soon(self):
        app = CirrusApp(_make_container(_make_provider()))
        async with app.run_test() as pilot:
            await pilot.pause()
            app.open_service("IAM")
            await pilot.pause()
            assert isinstance(app.screen, ComingSoonScreen)

            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, ServiceMenuScreen)

    @pytest.mark.asyncio
    async def test_menu_search_and_enter(self):
        app = CirrusApp(_make_container(_make_provider()))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("i", "a", "m")
            await pilot.pause()
            assert [e.name for e in app.screen.filtered] == ["IAM"]
            await pilot.press("enter")
            await pilot.pause()
            assert isinstance(app.screen, ComingSoonScreen)

    @pytest.mark.asyncio
    async def test_escape_on_menu_exits_with_zero(self):
        app = CirrusApp(_make_container(_make_provider()))
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("escape")
        assert app.return_code == 0


class TestResourceListScreen:
    @pytest.mark.asyncio
    async def test_lists_resources(self):
        provider = _make_provider([
            Resource.create("i-1", name="web", state="running"),
            Resource.create("i-2", name="db", state="stopped"),
        ])
        app = CirrusApp(_make_container(provider), initial_service="EC2")
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.pause()
            screen = app.screen
            assert isinstance(screen, ResourceListScreen)
            assert screen.query_one("#list_items", OptionList).option_count == 2

            await pilot.press("down")
            await pilot.pause()
            assert screen.controller.selected.id == "i-2"

            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, ServiceMenuScreen)

        provider.list_resources.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reentry_uses_cache(self):
        provider = _make_provider([Resource.create("i-1", name="web")])
        app = CirrusApp(_make_container(provider))
        async with app.run_test() as pilot:
            await pilot.pause()
            app.open_service("EC2")
            await pilot.pause()
            await pilot.press("escape")
            await pilot.pause()
            app.open_service("EC2")
            await pilot.pause()
            assert app.screen.query_one("#list_items", OptionList).option_count == 1

        provider.list_resources.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_error_shown(self):
        provider = _make_provider(list_error=ListError("EC2", "describe_instances", "AccessDenied: no"))
        app = CirrusApp(_make_container(provider), initial_service="EC2")
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.pause()
            screen = app.screen
            assert screen.controller.error == "AccessDenied: no"
            assert screen.query_one("#list_items", OptionList).display is False
            assert isinstance(screen.query_one("#list_status"), Static)
