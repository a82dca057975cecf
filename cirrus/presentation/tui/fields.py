"""
Field Tables

Architectural Intent:
- Declarative description of what each service's list row and metadata panel
  show, so one generic list screen serves every service
- Summary fields render as soon as the list loads; detail fields only once
  the provider's sentinel attribute is present

Design Decisions:
- Output is Rich markup strings; every value is escaped before insertion
- Absent values (None, "", []) are skipped rather than shown as blanks
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

from rich.markup import escape

from cirrus.application.dtos.resource_list_dtos import EnrichmentState
from cirrus.domain.value_objects.resource import Resource

MAX_TAGS = 10
MAX_VALUE_LENGTH = 50


def format_bytes(size: Any) -> str:
    """Format a byte count with a base-1024 unit, two decimals."""
    size = float(size or 0)
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    i = 0
    while size >= 1024 and i < len(units) - 1:
        size /= 1024
        i += 1
    return f"{size:.2f} {units[i]}"


def format_gib(size: Any) -> str:
    return format_bytes(float(size) * 1024 ** 3)


def format_bool(value: Any) -> str:
    return "Yes" if value else "No"


def format_datetime(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    return str(value)


def format_list(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def format_seconds(value: Any) -> str:
    seconds = int(value)
    for unit, size in (("d", 86400), ("h", 3600), ("m", 60)):
        if seconds >= size and seconds % size == 0:
            return f"{seconds // size}{unit}"
    return f"{seconds}s"


def truncate(value: Any, limit: int = MAX_VALUE_LENGTH) -> str:
    text = str(value)
    return f"{text[:limit]}..." if len(text) > limit else text


@dataclass(frozen=True)
class FieldSpec:
    label: str
    key: str
    formatter: Optional[Callable[[Any], str]] = None
    detail: bool = False

    def value(self, resource: Resource) -> Any:
        if self.key == "id":
            return resource.id
        if self.key == "name":
            return resource.name
        return resource.get(self.key)

    def render(self, value: Any) -> str:
        return self.formatter(value) if self.formatter else str(value)


def _summary(label: str, key: str, formatter: Optional[Callable[[Any], str]] = None) -> FieldSpec:
    return FieldSpec(label, key, formatter)


def _detail(label: str, key: str, formatter: Optional[Callable[[Any], str]] = None) -> FieldSpec:
    return FieldSpec(label, key, formatter, detail=True)


@dataclass(frozen=True)
class ServiceView:
    title: str
    fields: tuple[FieldSpec, ...]
    status_key: Optional[str] = None
    status_colors: Mapping[str, str] = field(default_factory=dict)
    default_status_color: str = "yellow"
    mappings: tuple[tuple[str, str], ...] = ()

    def status_color(self, status: str) -> str:
        return self.status_colors.get(status, self.default_status_color)


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, tuple, dict)) and len(value) == 0)


def render_key_values(
    label: str,
    items: Iterable[tuple[str, Any]] | Mapping[str, Any],
    max_display: int = MAX_TAGS,
) -> list[str]:
    """Render key/value pairs, truncating long values and long lists."""
    pairs = list(items.items()) if isinstance(items, Mapping) else list(items)
    lines = ["", f"[dim]{escape(label)}:[/dim]"]
    for key, value in pairs[:max_display]:
        lines.append(f"  [bold cyan]{escape(str(key))}[/bold cyan]: {escape(truncate(value))}")
    remaining = len(pairs) - max_display
    if remaining > 0:
        lines.append(f"[dim]  ... and {remaining} more[/dim]")
    return lines


def row_label(view: ServiceView, resource: Resource) -> str:
    label = escape(resource.name)
    if view.status_key:
        status = resource.get(view.status_key)
        if status:
            color = view.status_color(str(status))
            label += f" [{color}]({escape(str(status))})[/{color}]"
    return label


def render_metadata(
    view: ServiceView,
    resource: Resource,
    sentinel: Optional[str],
    state: Optional[EnrichmentState] = None,
) -> list[str]:
    enriched = resource.is_enriched(sentinel)
    lines = []
    for spec in view.fields:
        if spec.detail and not enriched:
            continue
        value = spec.value(resource)
        if _is_absent(value):
            continue
        lines.append(f"[dim]{escape(spec.label)}:[/dim] {escape(spec.render(value))}")

    if not enriched:
        if state is EnrichmentState.ENRICH_FAILED:
            lines.append("[dim italic]Details unavailable[/dim italic]")
        else:
            lines.append("[dim italic]Loading details...[/dim italic]")
        return lines

    for label, key in view.mappings:
        value = resource.get(key)
        if value:
            lines.extend(render_key_values(label, value))

    tags = resource.get("tags")
    if tags:
        lines.extend(render_key_values("Tags", tags))
    return lines


SERVICE_VIEWS: dict[str, ServiceView] = {
    "S3": ServiceView(
        title="S3 Buckets",
        fields=(
            _summary("Name", "name"),
            _summary("Created", "creation_date", format_datetime),
            _detail("Region", "location"),
            _detail("Versioning", "versioning"),
            _detail("Objects", "object_count"),
            _detail("Total Size", "total_size", format_bytes),
        ),
    ),
    "EC2": ServiceView(
        title="EC2 Instances",
        fields=(
            _summary("Instance ID", "id"),
            _summary("Name", "name"),
            _summary("State", "state"),
            _summary("Type", "instance_type"),
            _summary("Public IP", "public_ip"),
            _summary("Private IP", "private_ip"),
            _detail("Availability Zone", "availability_zone"),
            _detail("VPC", "vpc_id"),
            _detail("Subnet", "subnet_id"),
            _detail("Platform", "platform"),
            _detail("Launch Time", "launch_time", format_datetime),
        ),
        status_key="state",
        status_colors={"running": "green", "stopped": "red"},
    ),
    "Lambda": ServiceView(
        title="Lambda Functions",
        fields=(
            _summary("Function", "name"),
            _summary("ARN", "id"),
            _summary("Description", "description"),
            _summary("Runtime", "runtime"),
            _detail("Handler", "handler"),
            _detail("Memory (MB)", "memory_size"),
            _detail("Timeout (s)", "timeout"),
            _detail("Code Size", "code_size", format_bytes),
            _detail("Architectures", "architectures", format_list),
            _detail("Last Modified", "last_modified"),
        ),
        status_key="runtime",
        default_status_color="cyan",
        mappings=(("Environment", "environment"),),
    ),
    "DynamoDB": ServiceView(
        title="DynamoDB Tables",
        fields=(
            _summary("Table Name", "name"),
            _detail("Status", "status"),
            _detail("Billing Mode", "billing_mode"),
            _detail("Item Count", "item_count"),
            _detail("Table Size", "table_size", format_bytes),
            _detail("Read Capacity", "read_capacity"),
            _detail("Write Capacity", "write_capacity"),
            _detail("Created", "creation_date", format_datetime),
        ),
        status_key="status",
        status_colors={"ACTIVE": "green", "DELETING": "red"},
    ),
    "RDS": ServiceView(
        title="RDS Instances",
        fields=(
            _summary("DB Instance", "name"),
            _summary("Status", "status"),
            _summary("Engine", "engine"),
            _summary("Engine Version", "engine_version"),
            _summary("Instance Class", "db_instance_class"),
            _summary("Storage", "allocated_storage", format_gib),
            _summary("Availability Zone", "availability_zone"),
            _summary("Multi-AZ", "multi_az", format_bool),
            _summary("Endpoint", "endpoint"),
            _detail("Port", "port"),
            _detail("Storage Type", "storage_type"),
            _detail("Encrypted", "storage_encrypted", format_bool),
            _detail("Publicly Accessible", "publicly_accessible", format_bool),
            _detail("Backup Retention (days)", "backup_retention_period"),
            _detail("VPC", "vpc_id"),
        ),
        status_key="status",
        status_colors={"available": "green", "deleting": "red"},
    ),
    "CloudFront": ServiceView(
        title="CloudFront Distributions",
        fields=(
            _summary("Distribution ID", "id"),
            _summary("Domain Name", "domain_name"),
            _summary("Aliases", "aliases", format_list),
            _summary("Comment", "description"),
            _summary("Status", "status"),
            _summary("Enabled", "enabled", format_bool),
            _summary("Price Class", "price_class"),
            _detail("Last Modified", "last_modified_time", format_datetime),
            _detail("HTTP Version", "http_version"),
            _detail("Default Root Object", "default_root_object"),
            _detail("Origins", "origins", format_list),
            _detail("Invalidations In Progress", "in_progress_invalidations"),
        ),
        status_key="status",
        status_colors={"Deployed": "green", "InProgress": "yellow"},
        default_status_color="red",
    ),
    "VPC": ServiceView(
        title="VPCs",
        fields=(
            _summary("VPC ID", "id"),
            _summary("Name", "name"),
            _summary("State", "state"),
            _summary("CIDR Block", "cidr_block"),
            _summary("Default VPC", "is_default", format_bool),
            _summary("Tenancy", "instance_tenancy"),
            _summary("DHCP Options", "dhcp_options_id"),
            _detail("Subnets", "subnet_count"),
            _detail("Availability Zones", "availability_zones", format_list),
            _detail("Available IPs", "available_ips"),
            _detail("DNS Support", "dns_support", format_bool),
            _detail("DNS Hostnames", "dns_hostnames", format_bool),
        ),
        status_key="state",
        status_colors={"available": "green"},
    ),
    "SNS": ServiceView(
        title="SNS Topics",
        fields=(
            _summary("Topic Name", "name"),
            _summary("ARN", "arn"),
            _detail("Display Name", "display_name"),
            _detail("Owner", "owner"),
            _detail("Subscriptions Confirmed", "subscriptions_confirmed"),
            _detail("Subscriptions Pending", "subscriptions_pending"),
            _detail("Subscriptions Deleted", "subscriptions_deleted"),
        ),
    ),
    "SQS": ServiceView(
        title="SQS Queues",
        fields=(
            _summary("Queue Name", "name"),
            _summary("URL", "id"),
            _detail("ARN", "queue_arn"),
            _detail("Messages Available", "approximate_messages"),
            _detail("Messages In Flight", "approximate_messages_not_visible"),
            _detail("Messages Delayed", "approximate_messages_delayed"),
            _detail("Visibility Timeout", "visibility_timeout", format_seconds),
            _detail("Retention Period", "message_retention_period", format_seconds),
            _detail("Delivery Delay", "delay_seconds", format_seconds),
            _detail("Max Message Size", "max_message_size", format_bytes),
            _detail("Created", "created_timestamp", format_datetime),
            _detail("Last Modified", "last_modified_timestamp", format_datetime),
        ),
    ),
}


def view_for(service_name: str) -> ServiceView:
    """Field table for a service; unknown services get a name-only view."""
    return SERVICE_VIEWS.get(
        service_name,
        ServiceView(title=service_name, fields=(_summary("Name", "name"), _summary("ID", "id"))),
    )
