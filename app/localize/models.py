"""Localization models.

Defines the data structures flowing through bundle resolution: configuration,
extraction metadata, translation packs and message keys.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from localize.errors import MalformedBundleError

PSEUDO_LOCALE = "pseudo"

# module key -> ordered messages
ResolvedBundle = Dict[str, List[str]]

# bundle identity -> translation pack location
TranslationsConfig = Dict[str, str]


def is_message_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(m, str) for m in value)


def bundle_shape_error(data: Any) -> Optional[str]:
    """Describe why data is not a module -> messages bundle.

    Returns:
        None when data is an object whose values are lists of strings.
    """
    if not isinstance(data, dict):
        return "bundle must be an object"
    for module, messages in data.items():
        if not is_message_list(messages):
            return f"messages of {module} must be a list of strings"
    return None


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class MessageFormat(str, Enum):
    """Where messages are looked up.

    FILE uses per-module sibling files, BUNDLE uses aggregated bundles next to
    the extraction metadata, BOTH tries bundles first and files second.
    """

    FILE = "file"
    BUNDLE = "bundle"
    BOTH = "both"

    @property
    def uses_bundles(self) -> bool:
        return self in (MessageFormat.BUNDLE, MessageFormat.BOTH)

    @property
    def uses_files(self) -> bool:
        return self in (MessageFormat.FILE, MessageFormat.BOTH)


class BundleFormat(str, Enum):
    """Preferred aggregated bundle flavour."""

    STANDALONE = "standalone"
    LANGUAGE_PACK = "languagePack"


class MessageKey:
    """Key passed to a lookup function.

    Either a PositionalKey (index into a resolved message list) or a NamedKey
    (source key with translator comments, used before messages are extracted).
    """

    @staticmethod
    def of(value: Any) -> "MessageKey":
        """Convert a raw key into its variant.

        Args:
            value: int index, str key, ``{"key", "comment"}`` dict or a MessageKey.

        Returns:
            PositionalKey or NamedKey.

        Raises:
            TypeError: If value cannot be interpreted as a key.
        """
        if isinstance(value, MessageKey):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return PositionalKey(index=value)
        if isinstance(value, str):
            return NamedKey(key=value)
        if isinstance(value, dict) and isinstance(value.get("key"), str):
            return NamedKey.from_dict(value)
        raise TypeError(f"Unsupported message key: {value!r}")


@dataclass(frozen=True)
class PositionalKey(MessageKey):
    """Index of a message inside a resolved message list."""

    index: int


@dataclass(frozen=True)
class NamedKey(MessageKey):
    """Source-level message key with optional translator comments.

    Attributes:
        key: Message key as written in the source module.
        comment: Translator comments attached to the key.
    """

    key: str
    comment: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NamedKey":
        comment = data.get("comment") or ()
        if isinstance(comment, str):
            comment = (comment,)
        return cls(key=data["key"], comment=tuple(comment))

    def __str__(self) -> str:
        return self.key


KeyInfo = Union[str, NamedKey]


@dataclass
class MetadataEntry:
    """Extracted messages of one source module.

    ``messages[i]`` is the source-language text of ``keys[i]``.

    Attributes:
        messages: Source-language messages in extraction order.
        keys: Message keys, plain strings or NamedKey with comments.
    """

    messages: List[str]
    keys: List[KeyInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "MetadataEntry":
        """Build an entry from its JSON form.

        Raises:
            MalformedBundleError: If the entry shape is invalid or messages
                and keys differ in length.
        """
        if not isinstance(data, dict):
            raise MalformedBundleError("metadata entry must be an object")
        messages = data.get("messages")
        raw_keys = data.get("keys")
        if not isinstance(messages, list) or not isinstance(raw_keys, list):
            raise MalformedBundleError("metadata entry needs messages and keys lists")
        if not is_message_list(messages):
            raise MalformedBundleError("metadata messages must be strings")
        if len(messages) != len(raw_keys):
            raise MalformedBundleError(
                f"messages and keys differ in length ({len(messages)} != {len(raw_keys)})"
            )
        keys: List[KeyInfo] = []
        for raw_key in raw_keys:
            if isinstance(raw_key, str):
                keys.append(raw_key)
            elif isinstance(raw_key, dict) and isinstance(raw_key.get("key"), str):
                keys.append(NamedKey.from_dict(raw_key))
            else:
                raise MalformedBundleError(f"invalid metadata key: {raw_key!r}")
        return cls(messages=list(messages), keys=keys)

    def key_at(self, index: int) -> str:
        key = self.keys[index]
        return key if isinstance(key, str) else key.key


# module key -> extracted messages
ExtractionMetadata = Dict[str, MetadataEntry]


@dataclass(frozen=True)
class MetadataHeader:
    """Content of ``nls.metadata.header.json``.

    Attributes:
        id: Stable bundle identity used to find the translation pack.
        hash: Hash of the extraction metadata, part of the cache entry name.
        out_dir: Prefix of module keys inside translation packs.
        type: Producer type recorded by the extraction step.
    """

    id: Optional[str] = None
    hash: Optional[str] = None
    out_dir: str = ""
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "MetadataHeader":
        if not isinstance(data, dict):
            raise MalformedBundleError("metadata header must be an object")
        return cls(
            id=_string_or_none(data.get("id")),
            hash=_string_or_none(data.get("hash")),
            out_dir=_string_or_none(data.get("outDir")) or "",
            type=_string_or_none(data.get("type")),
        )

    @property
    def has_identity(self) -> bool:
        return bool(self.id) and bool(self.hash)


@dataclass
class TranslationPack:
    """One language's translations for a whole application.

    Attributes:
        contents: module key -> {message key -> translated text}.
        version: Pack version, carried but not interpreted.
    """

    contents: Dict[str, Dict[str, str]]
    version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "TranslationPack":
        if not isinstance(data, dict) or not isinstance(data.get("contents"), dict):
            raise MalformedBundleError("translation pack needs a contents object")
        contents = {}
        for module, translations in data["contents"].items():
            if not isinstance(translations, dict) or not all(
                isinstance(text, str) for text in translations.values()
            ):
                raise MalformedBundleError(
                    f"translations of {module} must map keys to strings"
                )
            contents[module] = translations
        return cls(contents=contents, version=data.get("version"))


@dataclass(frozen=True)
class BundleContext:
    """Bundle coordinates injected by a build step instead of a source path.

    Attributes:
        bundle_key: Module key inside the bundle.
        id: Bundle identity, overrides the metadata header.
        metadata_hash: Metadata hash, overrides the metadata header.
    """

    bundle_key: str
    id: Optional[str] = None
    metadata_hash: Optional[str] = None


@dataclass(frozen=True)
class BundleRequest:
    """Everything the strategies need to resolve one module.

    Attributes:
        module: Module key inside the bundle.
        bundle_root: Directory holding nls.metadata.json (None when unknown).
        header: Metadata header of the bundle, if any.
        file_base: Path without extension used for single-file bundles.
        memo_key: Key of the in-memory resolution cache entry.
    """

    module: str
    bundle_root: Optional[Path] = None
    header: Optional[MetadataHeader] = None
    file_base: Optional[Path] = None
    memo_key: Optional[str] = None


@dataclass(frozen=True)
class Configuration:
    """Active resolver configuration.

    Replaced as a whole on every change; the resolver starts a new cache
    epoch whenever the value differs from the previous one.

    Attributes:
        locale: Lower-cased locale tag, ``pseudo`` enables pseudo-localization.
        language: Tag used for fallback search, usually equal to locale.
        cache_language_resolution: Memoize the winning locale suffix.
        message_format: Bundle, file or both.
        bundle_format: Standalone disables language packs.
        language_pack_support: Host runs with installed language packs.
        language_pack_id: Identity of the active language pack.
        cache_root: Directory for assembled bundle cache entries.
        translations_config_file: bundle identity -> translation pack mapping file.
        dir_name_hint: Bundle root used with injected BundleContext.
        corrupted_file: Marker written when the translations config is unreadable.
    """

    locale: Optional[str] = None
    language: Optional[str] = None
    cache_language_resolution: bool = True
    message_format: MessageFormat = MessageFormat.BUNDLE
    bundle_format: Optional[BundleFormat] = None
    language_pack_support: bool = False
    language_pack_id: Optional[str] = None
    cache_root: Optional[str] = None
    translations_config_file: Optional[str] = None
    dir_name_hint: Optional[str] = None
    corrupted_file: Optional[str] = None

    @property
    def is_pseudo(self) -> bool:
        return self.locale == PSEUDO_LOCALE

    @property
    def language_pack_enabled(self) -> bool:
        """Language packs are on and not overridden by a standalone bundle format."""
        return (
            self.language_pack_support
            and self.bundle_format != BundleFormat.STANDALONE
        )

    @property
    def language_pack_configured(self) -> bool:
        """Language packs are enabled and every path they need is known."""
        return (
            self.language_pack_enabled
            and self.language_pack_id is not None
            and self.cache_root is not None
            and self.translations_config_file is not None
        )

    def apply(self, patch: Optional["ConfigurationPatch"]) -> "Configuration":
        """Return a copy with the patch applied."""
        if patch is None:
            return self
        return patch.apply_to(self)


@dataclass(frozen=True)
class ConfigurationPatch:
    """Partial configuration update.

    A field overrides the current value only when it is not None. Setting
    ``locale`` lower-cases it and resets ``language`` to the same tag.
    """

    locale: Optional[str] = None
    cache_language_resolution: Optional[bool] = None
    message_format: Optional[MessageFormat] = None
    bundle_format: Optional[BundleFormat] = None
    language_pack_support: Optional[bool] = None
    language_pack_id: Optional[str] = None
    cache_root: Optional[str] = None
    translations_config_file: Optional[str] = None
    dir_name_hint: Optional[str] = None
    corrupted_file: Optional[str] = None

    def apply_to(self, configuration: Configuration) -> Configuration:
        changes: Dict[str, Any] = {}
        for patch_field in fields(self):
            value = getattr(self, patch_field.name)
            if value is not None:
                changes[patch_field.name] = value

        if "locale" in changes:
            changes["locale"] = changes["locale"].lower()
            changes["language"] = changes["locale"]
        if "message_format" in changes:
            changes["message_format"] = MessageFormat(changes["message_format"])
        if "bundle_format" in changes:
            changes["bundle_format"] = BundleFormat(changes["bundle_format"])
        for path_field in ("cache_root", "translations_config_file", "dir_name_hint"):
            if path_field in changes:
                changes[path_field] = str(changes[path_field])

        return replace(configuration, **changes)
