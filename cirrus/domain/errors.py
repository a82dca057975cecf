"""
Domain Errors

Architectural Intent:
- One exception hierarchy for provider failures so the controller can catch
  them at a single boundary and turn them into screen state
- Auxiliary sub-request failures are not exceptions; see DescribeResult
"""

from typing import Optional


class CirrusError(Exception):
    pass


class ProviderError(CirrusError):
    """A cloud API call failed."""

    def __init__(
        self,
        service: str,
        operation: str,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.service = service
        self.operation = operation
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ListError(ProviderError):
    """The bulk list call for a service failed."""


class EnrichmentError(ProviderError):
    """The primary describe sub-request for one resource failed."""

    def __init__(
        self,
        service: str,
        operation: str,
        message: str,
        resource_id: str = "",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(service, operation, message, cause)
        self.resource_id = resource_id


class UnknownServiceError(CirrusError, KeyError):
    """No provider is registered for the requested service name."""

    def __str__(self) -> str:
        return f"Unknown service: {self.args[0]!r}" if self.args else "Unknown service"
