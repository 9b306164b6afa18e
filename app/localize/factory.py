"""Factory functions for creating bundle resolvers.

Provides convenience functions for initializing resolvers from the process
environment.
"""

from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.logging import get_module_logger
from localize.environment import configuration_from_settings
from localize.loader import BundleFileLoader
from localize.models import ConfigurationPatch
from localize.resolver import BundleResolver

logger = get_module_logger()


def create_bundle_resolver(
    settings: Optional[Settings] = None,
    loader: Optional[BundleFileLoader] = None,
    overrides: Optional[ConfigurationPatch] = None,
) -> BundleResolver:
    """Create a BundleResolver configured from the environment.

    Args:
        settings: Settings to read NLS_CONFIG from (default: load from environment)
        loader: File loader to use (default: BundleFileLoader)
        overrides: Patch applied on top of the environment configuration

    Returns:
        BundleResolver: Configured resolver

    Usage:
        # Use the NLS_CONFIG environment variable
        resolver = create_bundle_resolver()

        # Force a locale regardless of the environment
        resolver = create_bundle_resolver(overrides=ConfigurationPatch(locale="de"))
    """
    if settings is None:
        settings = Settings()

    configuration = configuration_from_settings(settings.localize).apply(overrides)
    resolver = BundleResolver(configuration=configuration, loader=loader)

    logger.info(
        "bundle_resolver_created",
        locale=configuration.locale,
        language_pack=resolver.supports_language_pack,
    )
    return resolver
