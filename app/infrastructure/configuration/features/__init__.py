"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.localize import (
    LocalizeSettings,
    NlsEnvironmentConfig,
)

__all__ = [
    "LocalizeSettings",
    "NlsEnvironmentConfig",
]
