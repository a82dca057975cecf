"""
Service Catalog

Architectural Intent:
- The list of services shown in the menu, and the router from a service
  name to the provider that backs its list screen
- Services without a provider stay in the menu and open a placeholder

Design Decisions:
- Providers are built lazily, once per service, from the explicit AWSConfig
  and the shared boto3 session handed in at startup
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional
import logging

from cirrus.domain.errors import UnknownServiceError
from cirrus.domain.ports.resource_provider_port import ResourceProviderPort
from cirrus.infrastructure.adapters.aws import (
    CloudFrontProvider,
    DynamoDBProvider,
    EC2Provider,
    LambdaProvider,
    RDSProvider,
    S3Provider,
    SNSProvider,
    SQSProvider,
    VPCProvider,
)
from cirrus.infrastructure.config import AWSConfig

logger = logging.getLogger(__name__)

ProviderFactory = Callable[..., ResourceProviderPort]


@dataclass(frozen=True)
class ServiceEntry:
    name: str
    description: str
    factory: Optional[ProviderFactory] = None

    @property
    def supported(self) -> bool:
        return self.factory is not None


DEFAULT_SERVICES: tuple[ServiceEntry, ...] = (
    ServiceEntry("S3", "Simple Storage Service - Object storage", S3Provider),
    ServiceEntry("EC2", "Elastic Compute Cloud - Virtual servers", EC2Provider),
    ServiceEntry("Lambda", "Serverless compute service", LambdaProvider),
    ServiceEntry("DynamoDB", "NoSQL database service", DynamoDBProvider),
    ServiceEntry("RDS", "Relational Database Service", RDSProvider),
    ServiceEntry("CloudFront", "Content delivery network", CloudFrontProvider),
    ServiceEntry("VPC", "Virtual Private Cloud - Network isolation", VPCProvider),
    ServiceEntry("IAM", "Identity and Access Management"),
    ServiceEntry("CloudWatch", "Monitoring and observability"),
    ServiceEntry("SNS", "Simple Notification Service", SNSProvider),
    ServiceEntry("SQS", "Simple Queue Service", SQSProvider),
    ServiceEntry("API Gateway", "Build and manage APIs"),
    ServiceEntry("ECS", "Elastic Container Service"),
    ServiceEntry("EKS", "Elastic Kubernetes Service"),
    ServiceEntry("Route 53", "DNS and domain management"),
)


class ServiceCatalog:
    def __init__(
        self,
        aws_config: AWSConfig,
        session: Any = None,
        entries: tuple[ServiceEntry, ...] = DEFAULT_SERVICES,
    ) -> None:
        self.aws_config = aws_config
        self.session = session
        self.entries = entries
        self._providers: dict[str, ResourceProviderPort] = {}

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.entries]

    def entry(self, name: str) -> ServiceEntry:
        for e in self.entries:
            if e.name.lower() == name.lower():
                return e
        raise UnknownServiceError(name)

    def provider(self, name: str) -> Optional[ResourceProviderPort]:
        """Return the provider for a service, or None for placeholder services."""
        entry = self.entry(name)
        if entry.factory is None:
            return None
        if entry.name not in self._providers:
            logger.debug("Creating provider for %s", entry.name)
            self._providers[entry.name] = entry.factory(
                config=self.aws_config, session=self.session
            )
        return self._providers[entry.name]
