"""Message bundle localization feature settings."""

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class NlsEnvironmentConfig(BaseModel):
    """Structured payload carried by the ``NLS_CONFIG`` environment variable.

    The host process serializes this object as JSON. Fields with an
    unexpected type are dropped instead of failing the whole payload so a
    partially broken configuration still yields sensible defaults.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    locale: Optional[str] = None
    available_languages: Optional[Dict[str, str]] = Field(
        default=None, alias="availableLanguages"
    )
    language_pack_support: Optional[bool] = Field(
        default=None, alias="_languagePackSupport"
    )
    language_pack_id: Optional[str] = Field(default=None, alias="_languagePackId")
    translations_config_file: Optional[str] = Field(
        default=None, alias="_translationsConfigFile"
    )
    cache_root: Optional[str] = Field(default=None, alias="_cacheRoot")
    corrupted_file: Optional[str] = Field(default=None, alias="_corruptedFile")

    @field_validator(
        "locale",
        "language_pack_id",
        "translations_config_file",
        "cache_root",
        "corrupted_file",
        mode="before",
    )
    @classmethod
    def drop_non_strings(cls, v: Any) -> Optional[str]:
        """Ignore values that are not strings."""
        return v if isinstance(v, str) else None

    @field_validator("language_pack_support", mode="before")
    @classmethod
    def drop_non_booleans(cls, v: Any) -> Optional[bool]:
        """Ignore values that are not real booleans."""
        return v if isinstance(v, bool) else None

    @field_validator("available_languages", mode="before")
    @classmethod
    def drop_non_mappings(cls, v: Any) -> Optional[Dict[str, str]]:
        """Keep only string entries of the available languages mapping."""
        if not isinstance(v, dict):
            return None
        return {k: lang for k, lang in v.items() if isinstance(lang, str)}

    @property
    def ui_language(self) -> Optional[str]:
        """Language explicitly selected for the UI (``availableLanguages['*']``)."""
        if not self.available_languages:
            return None
        return self.available_languages.get("*")


class LocalizeSettings(FeatureSettings):
    """Message bundle localization configuration.

    Environment Variables:
        NLS_CONFIG: JSON object describing locale and language pack setup
        NLS_DEFAULT_MESSAGE_FORMAT: Message format used when none is configured
            (file, bundle or both; default: bundle)
        NLS_CACHE_LANGUAGE_RESOLUTION: Memoize locale fallback resolution
            (default: True)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        nls = settings.localize.nls_config
        if nls.locale:
            print(nls.locale)
        ```
    """

    NLS_CONFIG: Optional[str] = Field(default=None, alias="NLS_CONFIG")
    NLS_DEFAULT_MESSAGE_FORMAT: str = Field(
        default="bundle", alias="NLS_DEFAULT_MESSAGE_FORMAT"
    )
    NLS_CACHE_LANGUAGE_RESOLUTION: bool = Field(
        default=True, alias="NLS_CACHE_LANGUAGE_RESOLUTION"
    )

    @property
    def nls_config(self) -> NlsEnvironmentConfig:
        """Parse NLS_CONFIG, falling back to an empty payload when malformed.

        Returns:
            NlsEnvironmentConfig with every field that could be read.
        """
        if not self.NLS_CONFIG:
            return NlsEnvironmentConfig()
        try:
            payload = json.loads(self.NLS_CONFIG)
        except ValueError:
            return NlsEnvironmentConfig()
        if not isinstance(payload, dict):
            return NlsEnvironmentConfig()
        return NlsEnvironmentConfig.model_validate(payload)
