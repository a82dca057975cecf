"""
VPC Provider

Virtual networks. DescribeVpcs pages with NextToken; detail covers subnet
placement plus the DNS attributes, each attribute being its own call.
"""

from typing import Any

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider
from cirrus.infrastructure.adapters.aws.ec2 import name_tag


class VPCProvider(AWSResourceProvider):
    service_name = "VPC"
    client_name = "ec2"
    sentinel = "subnet_count"
    list_operation = "describe_vpcs"
    describe_operation = "describe_subnets"
    request_token = "NextToken"
    response_token = "NextToken"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        return [
            Resource.create(
                vpc.get("VpcId"),
                name_tag(vpc.get("Tags")) or vpc.get("VpcId"),
                cidr_block=vpc.get("CidrBlock"),
                dhcp_options_id=vpc.get("DhcpOptionsId"),
                instance_tenancy=vpc.get("InstanceTenancy"),
                is_default=vpc.get("IsDefault"),
                state=vpc.get("State"),
                tags=normalize_tags(vpc.get("Tags")),
            )
            for vpc in response.get("Vpcs", [])
        ]

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call(
            "describe_subnets",
            Filters=[{"Name": "vpc-id", "Values": [resource_id]}],
        )
        subnets = response.get("Subnets", [])
        return {
            "subnet_count": len(subnets),
            "availability_zones": sorted({s.get("AvailabilityZone", "") for s in subnets} - {""}),
            "available_ips": sum(s.get("AvailableIpAddressCount", 0) for s in subnets),
        }

    def _auxiliaries(self):
        return {
            "dns_support": self._dns_support,
            "dns_hostnames": self._dns_hostnames,
        }

    async def _vpc_attribute(self, resource_id: str, attribute: str, key: str) -> bool:
        response = await self._call(
            "describe_vpc_attribute", VpcId=resource_id, Attribute=attribute
        )
        return bool(response.get(key, {}).get("Value"))

    async def _dns_support(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        value = await self._vpc_attribute(resource_id, "enableDnsSupport", "EnableDnsSupport")
        return {"dns_support": value}

    async def _dns_hostnames(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        value = await self._vpc_attribute(resource_id, "enableDnsHostnames", "EnableDnsHostnames")
        return {"dns_hostnames": value}
