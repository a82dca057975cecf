"""
S3 Provider

Object storage buckets. ListBuckets carries a ContinuationToken once an
account has more buckets than one page holds; detail comes from four
sub-requests (location, versioning, object stats, tagging).
"""

from typing import Any

from botocore.exceptions import ClientError

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider

OBJECT_SAMPLE_SIZE = 1000


class S3Provider(AWSResourceProvider):
    service_name = "S3"
    client_name = "s3"
    sentinel = "location"
    list_operation = "list_buckets"
    describe_operation = "get_bucket_location"
    request_token = "ContinuationToken"
    response_token = "ContinuationToken"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        return [
            Resource.create(
                bucket.get("Name"),
                bucket.get("Name"),
                creation_date=bucket.get("CreationDate"),
                bucket_region=bucket.get("BucketRegion"),
            )
            for bucket in response.get("Buckets", [])
        ]

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("get_bucket_location", Bucket=resource_id)
        # us-east-1 buckets report a null LocationConstraint
        return {"location": response.get("LocationConstraint") or "us-east-1"}

    def _auxiliaries(self):
        return {
            "versioning": self._versioning,
            "objects": self._object_stats,
            "tags": self._tags,
        }

    async def _versioning(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        response = await self._call("get_bucket_versioning", Bucket=resource_id)
        return {"versioning": response.get("Status") or "Disabled"}

    async def _object_stats(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        response = await self._call(
            "list_objects_v2", Bucket=resource_id, MaxKeys=OBJECT_SAMPLE_SIZE
        )
        contents = response.get("Contents", [])
        return {
            "object_count": response.get("KeyCount") or len(contents),
            "total_size": sum(obj.get("Size", 0) for obj in contents),
            "object_count_truncated": bool(response.get("IsTruncated")),
        }

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._call("get_bucket_tagging", Bucket=resource_id)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "NoSuchTagSet":
                return {"tags": []}
            raise
        return {"tags": normalize_tags(response.get("TagSet"))}
