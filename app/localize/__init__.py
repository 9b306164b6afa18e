"""Localized message bundle resolution.

Resolves the message bundle of a module for the configured locale and hands
back a lookup function that formats positional arguments into the messages.

Main components:
- formatter: MessageFormatter with pseudo-localization
- locale_resolver: LocaleResolver walking the locale fallback chain
- assembler: BundleAssembler merging translation packs with extraction metadata
- cache: BundleCache persisting assembled bundles on disk
- strategies: ordered resolution strategies
- resolver: BundleResolver orchestrating the above
- factory: create_bundle_resolver building a resolver from the environment

Example:
    from localize import BundleResolver

    resolver = BundleResolver()
    localize = resolver.configure(locale="de-CH")(__file__)
    localize(0, None, "World")
"""

from localize.assembler import BundleAssembler
from localize.cache import BundleCache
from localize.errors import CorruptedCacheError, LocalizeError, MalformedBundleError
from localize.factory import create_bundle_resolver
from localize.formatter import MessageFormatter, format_message, pseudo_localize
from localize.loader import BundleFileLoader
from localize.locale_resolver import LocaleResolver
from localize.lookup import (
    DevLocalizer,
    FixedMessageLocalizer,
    Localizer,
    ScopedLocalizer,
    localize,
)
from localize.models import (
    BundleContext,
    BundleFormat,
    Configuration,
    ConfigurationPatch,
    MessageFormat,
    MessageKey,
    NamedKey,
    PositionalKey,
)
from localize.resolver import BundleResolver

__all__ = [
    "BundleAssembler",
    "BundleCache",
    "BundleContext",
    "BundleFileLoader",
    "BundleFormat",
    "BundleResolver",
    "Configuration",
    "ConfigurationPatch",
    "CorruptedCacheError",
    "DevLocalizer",
    "FixedMessageLocalizer",
    "LocaleResolver",
    "LocalizeError",
    "Localizer",
    "MalformedBundleError",
    "MessageFormat",
    "MessageFormatter",
    "MessageKey",
    "NamedKey",
    "PositionalKey",
    "ScopedLocalizer",
    "create_bundle_resolver",
    "format_message",
    "localize",
    "pseudo_localize",
]
