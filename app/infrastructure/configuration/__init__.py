"""Infrastructure configuration module - public API.

This module provides centralized configuration management using Pydantic
BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    LocalizeSettings: Localization feature settings class
    NlsEnvironmentConfig: Parsed NLS_CONFIG payload

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    locale = settings.localize.nls_config.locale
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import (
    LocalizeSettings,
    NlsEnvironmentConfig,
)

__all__ = ["Settings", "LocalizeSettings", "NlsEnvironmentConfig"]
