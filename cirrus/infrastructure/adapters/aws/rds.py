"""
RDS Provider

Relational database instances. DescribeDBInstances pages with Marker in both
directions and already carries most summary fields.
"""

from typing import Any

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider


class RDSProvider(AWSResourceProvider):
    service_name = "RDS"
    client_name = "rds"
    sentinel = "storage_type"
    list_operation = "describe_db_instances"
    describe_operation = "describe_db_instances"
    request_token = "Marker"
    response_token = "Marker"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        resources = []
        for db in response.get("DBInstances", []):
            identifier = db.get("DBInstanceIdentifier")
            resources.append(
                Resource.create(
                    identifier,
                    identifier,
                    status=db.get("DBInstanceStatus"),
                    engine=db.get("Engine"),
                    engine_version=db.get("EngineVersion"),
                    db_instance_class=db.get("DBInstanceClass"),
                    allocated_storage=db.get("AllocatedStorage"),
                    availability_zone=db.get("AvailabilityZone"),
                    multi_az=db.get("MultiAZ"),
                    endpoint=db.get("Endpoint", {}).get("Address"),
                )
            )
        return resources

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("describe_db_instances", DBInstanceIdentifier=resource_id)
        for db in response.get("DBInstances", []):
            return {
                "storage_type": db.get("StorageType") or "standard",
                "port": db.get("Endpoint", {}).get("Port"),
                "backup_retention_period": db.get("BackupRetentionPeriod"),
                "publicly_accessible": db.get("PubliclyAccessible"),
                "storage_encrypted": db.get("StorageEncrypted"),
                "instance_create_time": db.get("InstanceCreateTime"),
                "vpc_id": db.get("DBSubnetGroup", {}).get("VpcId"),
                "db_instance_arn": db.get("DBInstanceArn"),
            }
        return {}

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        arn = primary.get("db_instance_arn")
        if not arn:
            return {}
        response = await self._call("list_tags_for_resource", ResourceName=arn)
        return {"tags": normalize_tags(response.get("TagList"))}
