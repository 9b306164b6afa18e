"""Translate the host environment into a resolver Configuration."""

from pathlib import Path
from typing import Optional

from infrastructure.configuration import LocalizeSettings, NlsEnvironmentConfig
from infrastructure.logging import get_module_logger
from localize.models import Configuration, MessageFormat

logger = get_module_logger()

CORRUPTED_MARKER = "corrupted"


def derive_language(locale: Optional[str], ui_language: Optional[str]) -> Optional[str]:
    """Pick the tag used for fallback search.

    Without an explicit UI language the locale is used. An explicit English
    UI means no localized bundle is wanted at all.
    """
    if ui_language is None:
        return locale
    if ui_language == "en":
        return None
    return ui_language


def parse_message_format(value: Optional[str]) -> MessageFormat:
    try:
        return MessageFormat(value)
    except ValueError:
        logger.warning("invalid_message_format", value=value, default="bundle")
        return MessageFormat.BUNDLE


def configuration_from_environment(
    nls: NlsEnvironmentConfig,
    message_format: MessageFormat = MessageFormat.BUNDLE,
    cache_language_resolution: bool = True,
) -> Configuration:
    """Build the initial Configuration from the NLS_CONFIG payload.

    Args:
        nls: Parsed NLS_CONFIG payload.
        message_format: Message format to start with.
        cache_language_resolution: Memoize locale fallback results.

    Returns:
        Configuration for a new resolver.
    """
    locale = nls.locale.lower() if nls.locale else None
    return Configuration(
        locale=locale,
        language=derive_language(locale, nls.ui_language),
        cache_language_resolution=cache_language_resolution,
        message_format=message_format,
        language_pack_support=bool(nls.language_pack_support),
        language_pack_id=nls.language_pack_id,
        cache_root=nls.cache_root,
        translations_config_file=nls.translations_config_file,
        corrupted_file=nls.corrupted_file,
    )


def configuration_from_settings(settings: LocalizeSettings) -> Configuration:
    return configuration_from_environment(
        settings.nls_config,
        message_format=parse_message_format(settings.NLS_DEFAULT_MESSAGE_FORMAT),
        cache_language_resolution=settings.NLS_CACHE_LANGUAGE_RESOLUTION,
    )


def mark_language_pack_corrupted(marker: Optional[str]) -> bool:
    """Write the corruption marker so the host rebuilds its language pack cache.

    Nothing is written when no marker is configured or its directory is gone.

    Args:
        marker: Path of the marker file.

    Returns:
        True if the marker was written.
    """
    if not marker:
        return False
    marker_path = Path(marker)
    if not marker_path.parent.is_dir():
        return False
    try:
        marker_path.write_text(CORRUPTED_MARKER, encoding="utf-8")
    except OSError as e:
        logger.error("corrupted_marker_write_failed", path=marker, error=str(e))
        return False
    logger.warning("language_pack_marked_corrupted", path=marker)
    return True
