"""
SNS Provider

Pub/sub topics. ListTopics pages with NextToken and returns bare ARNs; the
topic name is the last ARN segment.
"""

from typing import Any

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider


def _count(attributes: dict[str, str], key: str) -> int:
    try:
        return int(attributes.get(key) or 0)
    except ValueError:
        return 0


class SNSProvider(AWSResourceProvider):
    service_name = "SNS"
    client_name = "sns"
    sentinel = "owner"
    list_operation = "list_topics"
    describe_operation = "get_topic_attributes"
    request_token = "NextToken"
    response_token = "NextToken"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        resources = []
        for topic in response.get("Topics", []):
            arn = topic.get("TopicArn", "")
            resources.append(Resource.create(arn, arn.split(":")[-1], arn=arn or None))
        return resources

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("get_topic_attributes", TopicArn=resource_id)
        attributes = response.get("Attributes", {})
        return {
            "owner": attributes.get("Owner", ""),
            "display_name": attributes.get("DisplayName", ""),
            "policy": attributes.get("Policy"),
            "subscriptions_confirmed": _count(attributes, "SubscriptionsConfirmed"),
            "subscriptions_deleted": _count(attributes, "SubscriptionsDeleted"),
            "subscriptions_pending": _count(attributes, "SubscriptionsPending"),
        }

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        response = await self._call("list_tags_for_resource", ResourceArn=resource_id)
        return {"tags": normalize_tags(response.get("Tags"))}
