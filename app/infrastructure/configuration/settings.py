"""Localization library configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Feature settings
from infrastructure.configuration.features import LocalizeSettings


class Settings(BaseSettings):
    """Configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.

    Environment Variables:
        ENVIRONMENT: Deployment environment name (default: development)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.localize.nls_config.locale:
            ...

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Feature settings
    localize: LocalizeSettings

    @property
    def is_production(self) -> bool:
        """Check if the library is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Features
            "localize": LocalizeSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
