"""
Service providers.

Provides application-scoped provider functions for shared infrastructure.
"""

from infrastructure.services.providers import (
    get_settings,
    get_bundle_resolver,
)

__all__ = [
    "get_settings",
    "get_bundle_resolver",
]
