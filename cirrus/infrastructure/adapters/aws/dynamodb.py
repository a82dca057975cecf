"""
DynamoDB Provider

NoSQL tables. ListTables pages with ExclusiveStartTableName /
LastEvaluatedTableName. The tag lookup needs the table ARN, which only the
DescribeTable response carries.
"""

from typing import Any

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider


class DynamoDBProvider(AWSResourceProvider):
    service_name = "DynamoDB"
    client_name = "dynamodb"
    sentinel = "status"
    list_operation = "list_tables"
    describe_operation = "describe_table"
    request_token = "ExclusiveStartTableName"
    response_token = "LastEvaluatedTableName"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        return [Resource.create(name, name) for name in response.get("TableNames", [])]

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("describe_table", TableName=resource_id)
        table = response.get("Table", {})
        throughput = table.get("ProvisionedThroughput", {})
        return {
            "status": table.get("TableStatus", "UNKNOWN"),
            "billing_mode": table.get("BillingModeSummary", {}).get("BillingMode", "PROVISIONED"),
            "creation_date": table.get("CreationDateTime"),
            "item_count": table.get("ItemCount"),
            "table_size": table.get("TableSizeBytes"),
            "read_capacity": throughput.get("ReadCapacityUnits"),
            "write_capacity": throughput.get("WriteCapacityUnits"),
            "table_arn": table.get("TableArn"),
        }

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        arn = primary.get("table_arn")
        if not arn:
            return {}
        response = await self._call("list_tags_of_resource", ResourceArn=arn)
        return {"tags": normalize_tags(response.get("Tags"))}
