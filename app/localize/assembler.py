"""Bundle assembly from extraction metadata and translation packs."""

from pathlib import Path
from typing import Dict, Optional

from infrastructure.logging import get_module_logger
from localize.loader import BundleFileLoader
from localize.models import (
    ExtractionMetadata,
    MetadataHeader,
    ResolvedBundle,
    TranslationsConfig,
)

logger = get_module_logger()


def pack_module_key(module: str, module_key_prefix: str) -> str:
    """Key of a module inside a translation pack (``<outDir>/<module>``)."""
    if not module_key_prefix:
        return module
    return f"{module_key_prefix.rstrip('/')}/{module}"


class BundleAssembler:
    """Rebuilds module -> messages bundles.

    Translated text is taken from the pack by message key; keys without a
    translation keep the extracted source message, so message positions always
    match the metadata.
    """

    def __init__(self, loader: Optional[BundleFileLoader] = None):
        self.loader = loader or BundleFileLoader()

    def assemble(
        self,
        metadata: ExtractionMetadata,
        translations: Optional[Dict[str, Dict[str, str]]],
        module_key_prefix: str = "",
    ) -> ResolvedBundle:
        """Merge a translation pack against extraction metadata.

        Args:
            metadata: Extracted messages per module.
            translations: Pack contents (module key -> message key -> text), or None.
            module_key_prefix: Prefix of module keys inside the pack.

        Returns:
            Bundle holding every module of the metadata.
        """
        result: ResolvedBundle = {}
        translated_modules = 0
        for module, entry in metadata.items():
            module_translations = (
                translations.get(pack_module_key(module, module_key_prefix))
                if translations
                else None
            )
            if not module_translations:
                result[module] = list(entry.messages)
                continue

            translated_modules += 1
            messages = []
            for index, message in enumerate(entry.messages):
                translated = module_translations.get(entry.key_at(index))
                messages.append(message if translated is None else translated)
            result[module] = messages

        logger.debug(
            "assembled_bundle",
            module_count=len(result),
            translated_module_count=translated_modules,
        )
        return result

    def default_bundle(self, metadata: ExtractionMetadata) -> ResolvedBundle:
        """Untranslated bundle straight from the metadata."""
        return self.assemble(metadata, None)

    def load_default_bundle(self, root: Path) -> ResolvedBundle:
        return self.default_bundle(self.loader.load_metadata(root))

    def build_from_language_pack(
        self,
        header: MetadataHeader,
        root: Path,
        translations_config: TranslationsConfig,
    ) -> Optional[ResolvedBundle]:
        """Assemble the bundle of root from the installed language pack.

        Args:
            header: Metadata header naming the bundle identity.
            root: Bundle root holding nls.metadata.json.
            translations_config: bundle identity -> pack location.

        Returns:
            Assembled bundle, or None when the pack has no entry for the identity.

        Raises:
            FileNotFoundError: If the pack or the metadata file is missing.
            MalformedBundleError: If either file has the wrong shape.
        """
        location = translations_config.get(header.id) if header.id else None
        if not location:
            logger.info("no_language_pack_for_bundle", bundle_id=header.id)
            return None

        pack = self.loader.load_translation_pack(Path(location))
        metadata = self.loader.load_metadata(root)
        return self.assemble(metadata, pack.contents, header.out_dir)
