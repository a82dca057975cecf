"""
Lambda Provider

Serverless functions. ListFunctions pages with Marker/NextMarker; resources
are keyed by function ARN.
"""

from typing import Any

from cirrus.domain.value_objects.resource import Resource, normalize_tags
from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider


class LambdaProvider(AWSResourceProvider):
    service_name = "Lambda"
    client_name = "lambda"
    sentinel = "last_modified"
    list_operation = "list_functions"
    describe_operation = "get_function"
    request_token = "Marker"
    response_token = "NextMarker"

    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        return [
            Resource.create(
                fn.get("FunctionArn"),
                fn.get("FunctionName"),
                description=fn.get("Description") or None,
                runtime=fn.get("Runtime"),
            )
            for fn in response.get("Functions", [])
        ]

    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        response = await self._call("get_function", FunctionName=resource_id)
        config = response.get("Configuration", {})
        return {
            "architectures": config.get("Architectures", []),
            "code_size": config.get("CodeSize"),
            "environment": config.get("Environment", {}).get("Variables", {}),
            "handler": config.get("Handler"),
            "last_modified": config.get("LastModified", ""),
            "memory_size": config.get("MemorySize"),
            "timeout": config.get("Timeout"),
        }

    def _auxiliaries(self):
        return {"tags": self._tags}

    async def _tags(self, resource_id: str, primary: dict[str, Any]) -> dict[str, Any]:
        response = await self._call("list_tags", Resource=resource_id)
        return {"tags": normalize_tags(response.get("Tags"))}
