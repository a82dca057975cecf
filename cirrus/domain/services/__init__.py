"""
Domain Services Package

Architectural Intent:
- Contains stateless domain logic shared by the menu and list screens
"""

from cirrus.domain.services.filtering import (
    clamp_index,
    filter_by_text,
    filter_resources,
)

__all__ = [
    "clamp_index",
    "filter_by_text",
    "filter_resources",
]
