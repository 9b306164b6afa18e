"""Bundle resolution orchestrator.

BundleResolver owns the active configuration, the in-memory resolution cache
and the ordered strategy list. ``configure()`` returns ``load_message_bundle``,
which turns a source file path or an injected BundleContext into a lookup
function.
"""

import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from infrastructure.logging import bind_resolution_context, get_module_logger
from localize.assembler import BundleAssembler
from localize.environment import mark_language_pack_corrupted
from localize.errors import LocalizeError
from localize.formatter import MessageFormatter
from localize.loader import HEADER_FILE, BundleFileLoader
from localize.locale_resolver import LocaleResolver
from localize.lookup import (
    BUNDLE_NOT_FOUND,
    MESSAGES_NOT_FOUND,
    UNSUPPORTED_FILE_FORMAT,
    DevLocalizer,
    FixedMessageLocalizer,
    Localizer,
    ScopedLocalizer,
)
from localize.models import (
    BundleContext,
    BundleRequest,
    Configuration,
    ConfigurationPatch,
    MetadataHeader,
    ResolvedBundle,
    TranslationsConfig,
)
from localize.strategies import (
    RECOVERABLE_ERRORS,
    BundleStrategy,
    DefaultBundleStrategy,
    InTheBoxBundleStrategy,
    LanguagePackStrategy,
    OutcomeStatus,
    SingleFileStrategy,
)

logger = get_module_logger()

BundleSource = Union[None, str, Path, BundleContext]
LoadFunc = Callable[..., Localizer]


class BundleResolver:
    """Resolves message bundles for one configuration.

    Resolved bundles are memoized per bundle root until the configuration
    changes; a root whose resolution failed stays failed for the same period.

    Usage:
        resolver = BundleResolver()
        load = resolver.configure(locale="de-CH")
        localize = load("/ext/out/main.js")
        localize(0, None)

    Attributes:
        loader: BundleFileLoader used for all file access.
        assembler: BundleAssembler used by the language pack and default strategies.
    """

    def __init__(
        self,
        configuration: Optional[Configuration] = None,
        loader: Optional[BundleFileLoader] = None,
    ):
        self.loader = loader or BundleFileLoader()
        self.assembler = BundleAssembler(self.loader)
        self._lock = threading.RLock()
        self._epoch = 0
        self._translations_config: Optional[TranslationsConfig] = None
        self._resolved_bundles: Dict[str, Optional[ResolvedBundle]] = {}
        self._start_epoch(configuration or Configuration(), reload_translations=True)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def epoch(self) -> int:
        """Counter incremented every time memoized state is discarded."""
        return self._epoch

    @property
    def translations_config(self) -> Optional[TranslationsConfig]:
        return self._translations_config

    @property
    def supports_language_pack(self) -> bool:
        return (
            self._configuration.language_pack_configured
            and self._translations_config is not None
        )

    def configure(
        self, patch: Optional[ConfigurationPatch] = None, **fields: Any
    ) -> LoadFunc:
        """Apply a configuration patch.

        Unspecified fields keep their value. Any effective change starts a new
        cache epoch.

        Args:
            patch: Partial configuration.
            **fields: ConfigurationPatch fields, merged over patch.

        Returns:
            The load_message_bundle function of this resolver.
        """
        if fields:
            patch = replace(patch or ConfigurationPatch(), **fields)

        with self._lock:
            previous = self._configuration
            updated = previous.apply(patch)
            if updated != previous:
                self._start_epoch(
                    updated,
                    reload_translations=(
                        updated.translations_config_file
                        != previous.translations_config_file
                    ),
                )
        return self.load_message_bundle

    def invalidate(self) -> None:
        """Discard memoized bundles and re-read the translations config."""
        with self._lock:
            self._start_epoch(self._configuration, reload_translations=True)

    def load_message_bundle(self, source: BundleSource = None) -> Localizer:
        """Create the lookup function for a module.

        Args:
            source: Source file of the module, an injected BundleContext, or
                None for dev mode (default messages are formatted directly).

        Returns:
            A lookup function. Resolution failures yield a function returning
            a fixed diagnostic message.

        Raises:
            OSError: For unexpected file system errors (not for missing files).
        """
        with self._lock:
            if source is None:
                return DevLocalizer(self._formatter)

            request = self._build_request(source)
            with bind_resolution_context(
                bundle_root=str(request.bundle_root) if request.bundle_root else None,
                module=request.module,
                locale=self._configuration.locale,
            ):
                return self._resolve(request)

    def _start_epoch(self, configuration: Configuration, reload_translations: bool) -> None:
        self._configuration = configuration
        if reload_translations:
            self._translations_config = self._load_translations_config(configuration)

        self._formatter = MessageFormatter(pseudo=configuration.is_pseudo)
        self._locale_resolver = LocaleResolver(
            configuration.language,
            pseudo=configuration.is_pseudo,
            cache_resolution=configuration.cache_language_resolution,
            exists=self.loader.exists,
        )
        self._bundle_strategies: List[BundleStrategy] = [
            LanguagePackStrategy(
                configuration, self._translations_config, self.assembler
            ),
            InTheBoxBundleStrategy(configuration, self._locale_resolver, self.loader),
            DefaultBundleStrategy(self.assembler),
        ]
        self._file_strategies: List[BundleStrategy] = [
            SingleFileStrategy(self._locale_resolver, self.loader),
        ]
        self._resolved_bundles = {}
        self._epoch += 1

        logger.info(
            "resolver_epoch_started",
            epoch=self._epoch,
            locale=configuration.locale,
            language=configuration.language,
            message_format=configuration.message_format.value,
            language_pack=self.supports_language_pack,
        )

    def _load_translations_config(
        self, configuration: Configuration
    ) -> Optional[TranslationsConfig]:
        if configuration.translations_config_file is None:
            return None
        try:
            return self.loader.load_translations_config(
                Path(configuration.translations_config_file)
            )
        except (OSError, ValueError, LocalizeError) as e:
            logger.error(
                "translations_config_unreadable",
                path=configuration.translations_config_file,
                error=str(e),
            )
            mark_language_pack_corrupted(configuration.corrupted_file)
            return None

    def _build_request(self, source: Union[str, Path, BundleContext]) -> BundleRequest:
        if isinstance(source, BundleContext):
            return self._request_from_context(source)
        return self._request_from_file(Path(source))

    def _request_from_file(self, file: Path) -> BundleRequest:
        base = file.with_suffix("") if file.suffix else file
        header_path = None
        if self._configuration.message_format.uses_bundles:
            header_path = self.loader.find_header(base.parent)
        if header_path is None:
            return BundleRequest(module=base.name, file_base=base)

        root = header_path.parent
        module = base.relative_to(root).as_posix()
        memo_key = str(root)
        if memo_key in self._resolved_bundles:
            return BundleRequest(
                module=module, bundle_root=root, file_base=base, memo_key=memo_key
            )

        try:
            header = self.loader.load_header(header_path)
        except RECOVERABLE_ERRORS as e:
            logger.error("metadata_header_unreadable", path=str(header_path), error=str(e))
            self._resolved_bundles[memo_key] = None
            return BundleRequest(
                module=module, bundle_root=root, file_base=base, memo_key=memo_key
            )

        return BundleRequest(
            module=module,
            bundle_root=root,
            header=header,
            file_base=base,
            memo_key=memo_key,
        )

    def _request_from_context(self, context: BundleContext) -> BundleRequest:
        hint = self._configuration.dir_name_hint
        if hint is None:
            logger.warning("bundle_context_without_dir_name_hint", module=context.bundle_key)
            return BundleRequest(module=context.bundle_key)

        root = Path(hint)
        header = None
        header_path = root / HEADER_FILE
        if self.loader.exists(header_path):
            try:
                header = self.loader.load_header(header_path)
            except RECOVERABLE_ERRORS as e:
                logger.warning(
                    "metadata_header_unreadable", path=str(header_path), error=str(e)
                )
        if context.id or context.metadata_hash:
            base_header = header or MetadataHeader()
            header = replace(
                base_header,
                id=context.id or base_header.id,
                hash=context.metadata_hash or base_header.hash,
            )

        return BundleRequest(
            module=context.bundle_key,
            bundle_root=root,
            header=header,
            file_base=root / context.bundle_key,
            memo_key=f"{root}|{context.id or ''}|{context.metadata_hash or ''}",
        )

    def _resolve(self, request: BundleRequest) -> Localizer:
        configuration = self._configuration

        if configuration.message_format.uses_bundles and request.bundle_root is not None:
            bundle = self._resolve_bundle(request)
            if bundle is not None:
                messages = bundle.get(request.module)
                if messages is None:
                    logger.error("module_messages_not_found")
                    return FixedMessageLocalizer(MESSAGES_NOT_FOUND)
                return ScopedLocalizer(messages, self._formatter)

        if configuration.message_format.uses_files:
            for strategy in self._file_strategies:
                outcome = strategy.attempt(request)
                if outcome.is_resolved:
                    return ScopedLocalizer(outcome.messages, self._formatter)
                if outcome.status == OutcomeStatus.UNSUPPORTED:
                    logger.error("unsupported_file_bundle", reason=outcome.reason)
                    return FixedMessageLocalizer(UNSUPPORTED_FILE_FORMAT)

        logger.error("message_bundle_not_found")
        return FixedMessageLocalizer(BUNDLE_NOT_FOUND)

    def _resolve_bundle(self, request: BundleRequest) -> Optional[ResolvedBundle]:
        memo_key = request.memo_key or str(request.bundle_root)
        if memo_key in self._resolved_bundles:
            return self._resolved_bundles[memo_key]

        bundle = None
        for strategy in self._bundle_strategies:
            outcome = strategy.attempt(request)
            if outcome.is_resolved:
                bundle = outcome.bundle
                logger.info(
                    "bundle_resolved",
                    strategy=outcome.strategy,
                    module_count=len(bundle),
                )
                break
        else:
            logger.error("bundle_resolution_failed")

        self._resolved_bundles[memo_key] = bundle
        return bundle
