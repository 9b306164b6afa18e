"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.logging import configure_logging
from localize.factory import create_bundle_resolver
from localize.resolver import BundleResolver


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the process.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Usage:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_bundle_resolver() -> BundleResolver:
    """
    Get application-scoped bundle resolver.

    Configures logging from the same settings on first call. Hosts that
    need several independent configurations, or manage logging themselves,
    should build their own resolvers with
    localize.factory.create_bundle_resolver instead.

    Returns:
        BundleResolver: Cached resolver configured from the NLS_CONFIG environment.
    """
    settings = get_settings()
    configure_logging(settings=settings)
    return create_bundle_resolver(settings=settings)
