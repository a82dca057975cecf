"""
AWS Provider Base

Architectural Intent:
- Shared plumbing for the per-service AWS adapters that implement
  ResourceProviderPort
- Owns the boto3 client, runs blocking SDK calls in the loop's default
  executor, follows continuation tokens, and isolates sub-request failures

Design Decisions:
- __init__ accepts an explicit AWSConfig (and optionally a prepared
  boto3.Session or client) so nothing reads the process environment
- list pagination is an explicit token loop rather than a boto3 paginator:
  every service names its request and response token keys, and a stub
  client can drive it page by page in tests
- describe_one runs the primary sub-request first; auxiliaries run
  concurrently afterwards and each yields a tagged SubrequestResult
- botocore ClientError/BotoCoreError are translated into ListError or
  EnrichmentError at this boundary
- a repeated continuation token fails the list instead of returning the
  pages gathered so far
"""

import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cirrus.domain.errors import EnrichmentError, ListError
from cirrus.domain.value_objects.describe_result import (
    PRIMARY,
    DescribeResult,
    SubrequestResult,
)
from cirrus.domain.value_objects.resource import Resource
from cirrus.infrastructure.config import AWSConfig

logger = logging.getLogger(__name__)

AWS_ERRORS = (ClientError, BotoCoreError)

Auxiliary = Callable[[str, dict[str, Any]], Awaitable[dict[str, Any]]]


def error_message(exc: BaseException) -> str:
    """Human-readable message for a botocore exception."""
    if isinstance(exc, ClientError):
        err = exc.response.get("Error", {})
        code = err.get("Code", "")
        message = err.get("Message", "") or str(exc)
        return f"{code}: {message}" if code else message
    return str(exc) or exc.__class__.__name__


def create_session(config: AWSConfig) -> boto3.Session:
    """Build the boto3 session every provider shares."""
    kwargs: dict[str, Any] = {"region_name": config.region}
    if config.profile:
        kwargs["profile_name"] = config.profile
    return boto3.Session(**kwargs)


class AWSResourceProvider(ABC):
    """
    Base class for AWS resource providers.

    Subclasses set the class attributes below, must implement _parse_page
    and _describe_primary, and may add _auxiliaries.

    Sub-request isolation covers AWS failures only: a ClientError or
    BotoCoreError from an auxiliary becomes a failed SubrequestResult, while
    any other exception from an auxiliary is a bug in the provider and fails
    the whole describe_one call.

    Class attributes
    ----------------
    service_name : str
        Menu name of the service (e.g. "EC2").
    client_name : str
        boto3 client name (e.g. "ec2").
    sentinel : str | None
        Detail attribute whose presence marks a resource as enriched.
    list_operation : str
        SDK operation name used in log lines and error messages.
    request_token : str | None
        Request parameter carrying the continuation token.
    response_token : str | None
        Response key holding the next continuation token.
    """

    service_name: str = ""
    client_name: str = ""
    sentinel: Optional[str] = None
    list_operation: str = ""
    describe_operation: str = ""
    request_token: Optional[str] = None
    response_token: Optional[str] = None

    def __init__(
        self,
        config: Optional[AWSConfig] = None,
        session: Optional[boto3.Session] = None,
        client: Any = None,
    ) -> None:
        self.config = config or AWSConfig()
        self._session = session
        self._client = client

        logger.debug(
            "%s initialised (region=%s, profile=%s, endpoint=%s)",
            self.__class__.__name__,
            self.config.region,
            self.config.profile or "default",
            self.config.endpoint_url or "default",
        )

    @property
    def client(self) -> Any:
        if self._client is None:
            session = self._session or create_session(self.config)
            kwargs: dict[str, Any] = {"region_name": self.config.region}
            if self.config.endpoint_url:
                kwargs["endpoint_url"] = self.config.endpoint_url
            self._client = session.client(self.client_name, **kwargs)
        return self._client

    async def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        """Invoke one SDK operation off the event loop."""
        logger.debug("AWS %s.%s %s", self.client_name, operation, params)
        method = getattr(self.client, operation)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(method, **params))

    # ------------------------------------------------------------------
    # list
    # ------------------------------------------------------------------

    async def _list_page(self, token: Optional[str]) -> tuple[list[Resource], Optional[str]]:
        """Fetch one page. Returns (resources, next_token)."""
        params = {self.request_token: token} if token and self.request_token else {}
        response = await self._call(self.list_operation, **params)
        return self._parse_page(response), self._next_token(response)

    @abstractmethod
    def _parse_page(self, response: dict[str, Any]) -> list[Resource]:
        ...

    def _next_token(self, response: dict[str, Any]) -> Optional[str]:
        if not self.response_token:
            return None
        return response.get(self.response_token) or None

    async def list_resources(self) -> list[Resource]:
        logger.info("AWS %s list (region=%s)", self.service_name, self.config.region)
        resources: list[Resource] = []
        seen_tokens: set[str] = set()
        token: Optional[str] = None
        pages = 0
        try:
            while True:
                page, token = await self._list_page(token)
                pages += 1
                # rows without an identifier can be neither described nor merged
                resources.extend(r for r in page if r.id)
                if not token:
                    break
                if token in seen_tokens:
                    raise ListError(
                        self.service_name, self.list_operation, "repeated continuation token"
                    )
                seen_tokens.add(token)
        except AWS_ERRORS as e:
            raise ListError(self.service_name, self.list_operation, error_message(e), e) from e

        logger.debug("%s list: %d item(s) in %d page(s)", self.service_name, len(resources), pages)
        return resources

    # ------------------------------------------------------------------
    # describe
    # ------------------------------------------------------------------

    @abstractmethod
    async def _describe_primary(self, resource_id: str) -> dict[str, Any]:
        ...

    def _auxiliaries(self) -> dict[str, Auxiliary]:
        """Named auxiliary sub-requests; each receives (id, primary attributes)."""
        return {}

    async def _run_auxiliary(
        self, name: str, fn: Auxiliary, resource_id: str, primary: dict[str, Any]
    ) -> SubrequestResult:
        try:
            return SubrequestResult.succeeded(name, await fn(resource_id, primary))
        except AWS_ERRORS as e:
            logger.debug(
                "%s %s sub-request for %s failed: %s",
                self.service_name,
                name,
                resource_id,
                error_message(e),
            )
            return SubrequestResult.failed(name, error_message(e))

    async def describe_one(self, resource_id: str) -> DescribeResult:
        try:
            primary = await self._describe_primary(resource_id)
        except AWS_ERRORS as e:
            raise EnrichmentError(
                self.service_name,
                self.describe_operation,
                error_message(e),
                resource_id=resource_id,
                cause=e,
            ) from e

        outcomes = [SubrequestResult.succeeded(PRIMARY, primary)]
        auxiliaries = self._auxiliaries()
        if auxiliaries:
            outcomes.extend(
                await asyncio.gather(
                    *(
                        self._run_auxiliary(name, fn, resource_id, primary)
                        for name, fn in auxiliaries.items()
                    )
                )
            )
        return DescribeResult(resource_id=resource_id, outcomes=tuple(outcomes))
