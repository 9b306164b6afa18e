"""Bundle resolution strategies.

Each strategy answers one question: can this request be served from my kind
of bundle? The resolver walks them in priority order and keeps the first
resolved outcome:

1. LanguagePackStrategy - installed language pack, assembled and cached on disk
2. InTheBoxBundleStrategy - pre-built ``nls.bundle[.<tag>].json`` next to the metadata
3. DefaultBundleStrategy - untranslated messages from ``nls.metadata.json``
4. SingleFileStrategy - per-module ``<base>.nls[.<tag>].json`` sibling file
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from infrastructure.logging import get_module_logger
from localize.assembler import BundleAssembler
from localize.cache import BundleCache
from localize.errors import LocalizeError
from localize.loader import BundleFileLoader
from localize.locale_resolver import LocaleResolver
from localize.models import (
    BundleRequest,
    Configuration,
    ResolvedBundle,
    TranslationsConfig,
    is_message_list,
)

logger = get_module_logger()

# Failures that mean "this strategy has nothing to offer"; any other OSError
# is unexpected and propagates to the caller.
RECOVERABLE_ERRORS = (FileNotFoundError, ValueError, LocalizeError)


class OutcomeStatus(Enum):
    """Status of a strategy attempt.

    Attributes:
        RESOLVED: Messages were found
        MISS: Nothing usable, try the next strategy
        UNSUPPORTED: A file was found but has an unsupported shape
    """

    RESOLVED = "resolved"
    MISS = "miss"
    UNSUPPORTED = "unsupported"


@dataclass
class ResolutionOutcome:
    """Result of a single strategy attempt.

    Attributes:
        status: OutcomeStatus -- high-level outcome
        strategy: Name of the strategy that produced the outcome
        bundle: Resolved bundle for bundle strategies
        messages: Resolved messages for the single-file strategy
        reason: Human-friendly explanation for misses
    """

    status: OutcomeStatus
    strategy: str
    bundle: Optional[ResolvedBundle] = None
    messages: Optional[List[str]] = None
    reason: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.status == OutcomeStatus.RESOLVED

    @classmethod
    def resolved(
        cls,
        strategy: str,
        bundle: Optional[ResolvedBundle] = None,
        messages: Optional[List[str]] = None,
    ) -> "ResolutionOutcome":
        return cls(
            status=OutcomeStatus.RESOLVED,
            strategy=strategy,
            bundle=bundle,
            messages=messages,
        )

    @classmethod
    def miss(cls, strategy: str, reason: str) -> "ResolutionOutcome":
        return cls(status=OutcomeStatus.MISS, strategy=strategy, reason=reason)

    @classmethod
    def unsupported(cls, strategy: str, reason: str) -> "ResolutionOutcome":
        return cls(status=OutcomeStatus.UNSUPPORTED, strategy=strategy, reason=reason)


class BundleStrategy(ABC):
    """Abstract base for resolution strategies.

    Implementations decide whether they apply to a request and then try to
    resolve it, converting expected failures into a MISS outcome.
    """

    name: str = "strategy"

    @abstractmethod
    def applies(self, request: BundleRequest) -> bool:
        """Whether this strategy should be attempted for the request."""
        pass

    @abstractmethod
    def resolve(self, request: BundleRequest) -> ResolutionOutcome:
        """Resolve the request, raising on failure.

        Raises:
            FileNotFoundError, ValueError, LocalizeError: Converted into a MISS.
            OSError: Other I/O errors propagate.
        """
        pass

    def attempt(self, request: BundleRequest) -> ResolutionOutcome:
        """Resolve the request, converting expected failures into a MISS."""
        if not self.applies(request):
            return ResolutionOutcome.miss(self.name, "not applicable")
        try:
            outcome = self.resolve(request)
        except RECOVERABLE_ERRORS as e:
            logger.info(
                "bundle_strategy_failed",
                strategy=self.name,
                error_type=type(e).__name__,
                error=str(e),
            )
            return ResolutionOutcome.miss(self.name, str(e))

        logger.debug(
            "bundle_strategy_attempted",
            strategy=self.name,
            status=outcome.status.value,
            reason=outcome.reason or None,
        )
        return outcome


class LanguagePackStrategy(BundleStrategy):
    """Assembles the bundle from the installed language pack, cached on disk."""

    name = "language_pack"

    def __init__(
        self,
        configuration: Configuration,
        translations_config: Optional[TranslationsConfig],
        assembler: BundleAssembler,
    ):
        self.configuration = configuration
        self.translations_config = translations_config
        self.assembler = assembler

    def applies(self, request: BundleRequest) -> bool:
        return (
            self.configuration.language_pack_configured
            and self.translations_config is not None
            and request.bundle_root is not None
            and request.header is not None
            and request.header.has_identity
        )

    def resolve(self, request: BundleRequest) -> ResolutionOutcome:
        header = request.header
        cache = BundleCache(Path(self.configuration.cache_root))
        bundle = cache.read_or_build(
            header.id,
            header.hash,
            lambda: self.assembler.build_from_language_pack(
                header, request.bundle_root, self.translations_config
            ),
        )
        if bundle is None:
            return ResolutionOutcome.miss(self.name, f"no translations for {header.id}")
        return ResolutionOutcome.resolved(self.name, bundle=bundle)


class InTheBoxBundleStrategy(BundleStrategy):
    """Reads a pre-built aggregated bundle shipped next to the metadata.

    Not used while language packs are enabled: shipped bundles may be older
    than the installed pack, so the default bundle is preferred instead.
    """

    name = "in_the_box_bundle"

    def __init__(
        self,
        configuration: Configuration,
        locale_resolver: LocaleResolver,
        loader: BundleFileLoader,
    ):
        self.configuration = configuration
        self.locale_resolver = locale_resolver
        self.loader = loader

    def applies(self, request: BundleRequest) -> bool:
        return (
            request.bundle_root is not None
            and not self.configuration.language_pack_enabled
        )

    def resolve(self, request: BundleRequest) -> ResolutionOutcome:
        candidate = self.locale_resolver.find_in_the_box_bundle(request.bundle_root)
        if candidate is None:
            return ResolutionOutcome.miss(self.name, "no shipped bundle")
        bundle = self.loader.load_message_list(candidate)
        logger.debug("loaded_in_the_box_bundle", path=str(candidate))
        return ResolutionOutcome.resolved(self.name, bundle=bundle)


class DefaultBundleStrategy(BundleStrategy):
    """Serves the untranslated source messages from the extraction metadata."""

    name = "default_bundle"

    def __init__(self, assembler: BundleAssembler):
        self.assembler = assembler

    def applies(self, request: BundleRequest) -> bool:
        return request.bundle_root is not None

    def resolve(self, request: BundleRequest) -> ResolutionOutcome:
        bundle = self.assembler.load_default_bundle(request.bundle_root)
        return ResolutionOutcome.resolved(self.name, bundle=bundle)


class SingleFileStrategy(BundleStrategy):
    """Reads the per-module sibling message file.

    The file is either a flat list of messages or an object holding
    ``messages`` and ``keys``.
    """

    name = "single_file"

    def __init__(self, locale_resolver: LocaleResolver, loader: BundleFileLoader):
        self.locale_resolver = locale_resolver
        self.loader = loader

    def applies(self, request: BundleRequest) -> bool:
        return request.file_base is not None

    def resolve(self, request: BundleRequest) -> ResolutionOutcome:
        path = self.locale_resolver.resolve_file(request.file_base)
        data = self.loader.read_json(path)
        if is_message_list(data):
            return ResolutionOutcome.resolved(self.name, messages=data)
        if (
            isinstance(data, dict)
            and is_message_list(data.get("messages"))
            and "keys" in data
        ):
            return ResolutionOutcome.resolved(self.name, messages=data["messages"])
        return ResolutionOutcome.unsupported(
            self.name, f"{path} is neither a message list nor a messages/keys object"
        )
