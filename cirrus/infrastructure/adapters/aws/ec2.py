"""
EC2 Provider

Compute instances. DescribeInstances pages with NextToken; the display name
comes from the Name tag.
"""

from typing import Any, Optional

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider


def name_tag(tags: Optional[list[dict[str, Any]]]) -> Optional[str]:
    for tag in tags or []:
        if tag.get("Key") == "Name" and tag.get("Value"):
            return tag["Value"]
    return None


class EC2Provider(AWSResourceProvider):
    service_name = "EC2"
    client_name = "ec2"
    sentinel = "availability_zone"
    list_operation = "describe_instances"
    describe_operation = "describe_instances"
    request_token = "NextToken"
    response_token = "NextToken"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        instances = []
        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                instance_id = instance.get("InstanceId")
                instances.append(
                    Resource.create(
                        instance_id,
                        name_tag(instance.get("Tags")),
                        instance_type=instance.get("InstanceType"),
                        private_ip=instance.get("PrivateIpAddress"),
                        public_ip=instance.get("PublicIpAddress"),
                        state=instance.get("State", {}).get("Name"),
                    )
                )
        return instances

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("describe_instances", InstanceIds=[resource_id])
        for reservation in response.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                return {
                    "availability_zone": instance.get("Placement", {}).get("AvailabilityZone", ""),
                    "launch_time": instance.get("LaunchTime"),
                    "platform": instance.get("PlatformDetails") or instance.get("Platform") or "Linux/Unix",
                    "vpc_id": instance.get("VpcId"),
                    "subnet_id": instance.get("SubnetId"),
                }
        return {}

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        response = await self._call(
            "describe_tags",
            Filters=[{"Name": "resource-id", "Values": [resource_id]}],
        )
        return {"tags": normalize_tags(response.get("Tags"))}
