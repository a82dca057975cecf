"""
CloudFront Provider

CDN distributions. ListDistributions nests its items and NextMarker inside
DistributionList, so page parsing and token lookup are overridden.
"""

from typing import Any, Optional

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider


class CloudFrontProvider(AWSResourceProvider):
    service_name = "CloudFront"
    client_name = "cloudfront"
    sentinel = "last_modified_time"
    list_operation = "list_distributions"
    describe_operation = "get_distribution"
    request_token = "Marker"
    response_token = "NextMarker"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        resources = []
        for dist in response.get("DistributionList", {}).get("Items", []):
            aliases = dist.get("Aliases", {}).get("Items", [])
            resources.append(
                Resource.create(
                    dist.get("Id"),
                    (aliases[0] if aliases else None) or dist.get("DomainName") or dist.get("Id"),
                    aliases=aliases or None,
                    description=dist.get("Comment") or None,
                    domain_name=dist.get("DomainName"),
                    enabled=dist.get("Enabled"),
                    status=dist.get("Status"),
                    price_class=dist.get("PriceClass"),
                    arn=dist.get("ARN"),
                )
            )
        return resources

    def _next_token(self, response: dict[str, Any]) -> Optional[str]:
        listing = response.get("DistributionList", {})
        if not listing.get("IsTruncated"):
            return None
        return listing.get("NextMarker") or None

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("get_distribution", Id=resource_id)
        dist = response.get("Distribution", {})
        config = dist.get("DistributionConfig", {})
        origins = config.get("Origins", {}).get("Items", [])
        return {
            "last_modified_time": dist.get("LastModifiedTime", ""),
            "arn": dist.get("ARN"),
            "in_progress_invalidations": dist.get("InProgressInvalidationBatches"),
            "http_version": config.get("HttpVersion"),
            "default_root_object": config.get("DefaultRootObject") or None,
            "origins": [o.get("DomainName", "") for o in origins],
        }

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        arn = primary.get("arn")
        if not arn:
            return {}
        response = await self._call("list_tags_for_resource", Resource=arn)
        return {"tags": normalize_tags(response.get("Tags", {}).get("Items"))}
