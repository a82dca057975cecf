"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
"""

from cirrus.domain.ports.resource_provider_port import ResourceProviderPort

__all__ = [
    "ResourceProviderPort",
]
