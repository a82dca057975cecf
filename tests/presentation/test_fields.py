"""Tests for the declarative field tables and value formatters."""

from datetime import datetime, UTC
import pytest

from cirrus.application.dtos.resource_list_dtos import EnrichmentState
from cirrus.domain.value_objects.resource import Resource
from cirrus.infrastructure.service_catalog import DEFAULT_SERVICES
from cirrus.presentation.tui.fields import (
    SERVICE_VIEWS,
    format_bool,
    format_bytes,
    format_datetime,
    format_gib,
    format_list,
    format_seconds,
    render_key_values,
    render_metadata,
    row_label,
    truncate,
    view_for,
)


class TestFormatters:
    @pytest.mark.parametrize("size,expected", [
        (0, "0 Bytes"),
        (None, "0 Bytes"),
        (512, "512.00 Bytes"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (1024 ** 3, "1.00 GB"),
        (1024 ** 5, "1024.00 TB"),
    ])
    def test_format_bytes(self, size, expected):
        assert format_bytes(size) == expected

    def test_format_gib(self):
        assert format_gib(20) == "20.00 GB"

    def test_format_bool(self):
        assert format_bool(True) == "Yes"
        assert format_bool(False) == "No"

    def test_format_datetime(self):
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert format_datetime(value) == "2024-01-02 03:04:05 UTC"
        assert format_datetime("2024-05-01") == "2024-05-01"

    def test_format_list(self):
        assert format_list(["a", "b"]) == "a, b"
        assert format_list("x") == "x"

    def test_format_seconds(self):
        assert format_seconds(30) == "30s"
        assert format_seconds(300) == "5m"
        assert format_seconds(345600) == "4d"
        assert format_seconds(90) == "90s"

    def test_truncate(self):
        assert truncate("x" * 50) == "x" * 50
        assert truncate("x" * 51) == "x" * 50 + "..."


class TestRenderKeyValues:
    def test_caps_at_ten_with_remainder_line(self):
        tags = [(f"k{i}", "v") for i in range(13)]
        lines = render_key_values("Tags", tags)
        assert lines[1] == "[dim]Tags:[/dim]"
        assert sum(1 for line in lines if line.startswith("  [bold cyan]")) == 10
        assert lines[-1] == "[dim]  ... and 3 more[/dim]"

    def test_accepts_mapping_and_escapes_markup(self):
        lines = render_key_values("Environment", {"KEY": "[red]"})
        assert "\\[red]" in lines[-1]

    def test_long_values_truncated(self):
        lines = render_key_values("Tags", [("k", "v" * 80)])
        assert lines[-1].endswith("v" * 50 + "...")


class TestRowLabel:
    def test_status_color(self):
        view = view_for("EC2")
        running = Resource.create("i-1", name="web", state="running")
        stopped = Resource.create("i-2", name="db", state="stopped")
        pending = Resource.create("i-3", name="job", state="pending")
        assert row_label(view, running) == "web [green](running)[/green]"
        assert row_label(view, stopped) == "db [red](stopped)[/red]"
        assert row_label(view, pending) == "job [yellow](pending)[/yellow]"

    def test_no_status_key(self):
        assert row_label(view_for("S3"), Resource.create("logs")) == "logs"


class TestRenderMetadata:
    def test_summary_only_shows_loading_line(self):
        view = view_for("EC2")
        resource = Resource.create("i-1", name="web", state="running", instance_type="t3.micro")
        lines = render_metadata(view, resource, "availability_zone")
        assert "[dim]Instance ID:[/dim] i-1" in lines
        assert "[dim]Type:[/dim] t3.micro" in lines
        assert lines[-1] == "[dim italic]Loading details...[/dim italic]"
        assert not any("Availability Zone" in line for line in lines)

    def test_failed_enrichment_line(self):
        lines = render_metadata(
            view_for("EC2"), Resource.create("i-1"), "availability_zone",
            EnrichmentState.ENRICH_FAILED,
        )
        assert lines[-1] == "[dim italic]Details unavailable[/dim italic]"

    def test_enriched_shows_detail_mappings_and_tags(self):
        view = view_for("Lambda")
        resource = Resource.create(
            "arn:fn", name="resize", runtime="python3.12",
            last_modified="2024-05-01", memory_size=256,
            environment={"STAGE": "prod"}, tags=[("team", "media")],
        )
        lines = render_metadata(view, resource, "last_modified")
        assert "[dim]Memory (MB):[/dim] 256" in lines
        assert "[dim]Environment:[/dim]" in lines
        assert "  [bold cyan]STAGE[/bold cyan]: prod" in lines
        assert lines[-2] == "[dim]Tags:[/dim]"
        assert not any("Loading" in line for line in lines)

    def test_absent_values_skipped(self):
        resource = Resource.create("i-1", name="web", public_ip="")
        lines = render_metadata(view_for("EC2"), resource, "availability_zone")
        assert not any("Public IP" in line for line in lines)

    def test_zero_values_shown(self):
        resource = Resource.create("orders", status="ACTIVE", item_count=0, table_size=0)
        lines = render_metadata(view_for("DynamoDB"), resource, "status")
        assert "[dim]Item Count:[/dim] 0" in lines
        assert "[dim]Table Size:[/dim] 0 Bytes" in lines


class TestServiceViews:
    def test_every_supported_service_has_a_view(self):
        for entry in DEFAULT_SERVICES:
            if entry.supported:
                assert entry.name in SERVICE_VIEWS

    def test_unknown_service_gets_generic_view(self):
        view = view_for("Mystery")
        assert view.title == "Mystery"
        assert [f.key for f in view.fields] == ["name", "id"]
