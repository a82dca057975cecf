"""
SQS Provider

Message queues. ListQueues only returns a NextToken when MaxResults is set,
so every page request carries it. Queues are keyed by URL.
"""

from datetime import datetime, UTC
from typing import Any, Optional

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider

PAGE_SIZE = 1000


def _int(attributes: dict[str, str], key: str) -> int:
    try:
        return int(attributes.get(key) or 0)
    except ValueError:
        return 0


def _timestamp(attributes: dict[str, str], key: str) -> Optional[datetime]:
    raw = attributes.get(key)
    if not raw:
        return None
    try:
        return datetime.fromtimestamp(int(raw), UTC)
    except (ValueError, OverflowError):
        return None


class SQSProvider(AWSResourceProvider):
    service_name = "SQS"
    client_name = "sqs"
    sentinel = "queue_arn"
    list_operation = "list_queues"
    describe_operation = "get_queue_attributes"
    request_token = "NextToken"
    response_token = "NextToken"

    async def _list_page(self, token):
        params: dict[str, Any] = {"MaxResults": PAGE_SIZE}
        if token:
            params["NextToken"] = token
        response = await self._call(self.list_operation, **params)
        return self._parse_page(response), self._next_token(response)

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        return [
            Resource.create(url, url.rstrip("/").split("/")[-1])
            for url in response.get("QueueUrls", [])
        ]

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call(
            "get_queue_attributes", QueueUrl=resource_id, AttributeNames=["All"]
        )
        attributes = response.get("Attributes", {})
        return {
            "queue_arn": attributes.get("QueueArn", ""),
            "approximate_messages": _int(attributes, "ApproximateNumberOfMessages"),
            "approximate_messages_delayed": _int(attributes, "ApproximateNumberOfMessagesDelayed"),
            "approximate_messages_not_visible": _int(
                attributes, "ApproximateNumberOfMessagesNotVisible"
            ),
            "created_timestamp": _timestamp(attributes, "CreatedTimestamp"),
            "last_modified_timestamp": _timestamp(attributes, "LastModifiedTimestamp"),
            "delay_seconds": _int(attributes, "DelaySeconds"),
            "max_message_size": _int(attributes, "MaximumMessageSize"),
            "message_retention_period": _int(attributes, "MessageRetentionPeriod"),
            "visibility_timeout": _int(attributes, "VisibilityTimeout"),
        }

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        response = await self._call("list_queue_tags", QueueUrl=resource_id)
        return {"tags": normalize_tags(response.get("Tags"))}
