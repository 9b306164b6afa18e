"""Bundle file loading.

Thin layer over the file system and JSON parsing. Missing files surface as
FileNotFoundError, invalid JSON as ValueError (json.JSONDecodeError), and
well-formed JSON with the wrong shape as MalformedBundleError.
"""

import json
from pathlib import Path
from typing import Any, Optional

from infrastructure.logging import get_module_logger
from localize.errors import MalformedBundleError
from localize.models import (
    ExtractionMetadata,
    MetadataEntry,
    MetadataHeader,
    TranslationPack,
    TranslationsConfig,
    bundle_shape_error,
)

logger = get_module_logger()

METADATA_FILE = "nls.metadata.json"
HEADER_FILE = "nls.metadata.header.json"


class BundleFileLoader:
    """Reads the JSON files that make up message bundles."""

    def read_json(self, path: Path) -> Any:
        """Read and parse a UTF-8 JSON file.

        Args:
            path: File to read.

        Returns:
            Parsed JSON value.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the content is not valid UTF-8 JSON.
        """
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def load_metadata(self, root: Path) -> ExtractionMetadata:
        """Load ``nls.metadata.json`` from a bundle root.

        Raises:
            FileNotFoundError: If the metadata file is missing.
            MalformedBundleError: If an entry is invalid.
        """
        data = self.read_json(Path(root) / METADATA_FILE)
        if not isinstance(data, dict):
            raise MalformedBundleError(f"{METADATA_FILE} must be an object")
        metadata = {
            module: MetadataEntry.from_dict(entry) for module, entry in data.items()
        }
        logger.debug("loaded_metadata", root=str(root), module_count=len(metadata))
        return metadata

    def load_header(self, path: Path) -> MetadataHeader:
        return MetadataHeader.from_dict(self.read_json(path))

    def load_translation_pack(self, path: Path) -> TranslationPack:
        pack = TranslationPack.from_dict(self.read_json(path))
        logger.debug(
            "loaded_translation_pack",
            path=str(path),
            module_count=len(pack.contents),
        )
        return pack

    def load_translations_config(self, path: Path) -> TranslationsConfig:
        """Load the bundle identity -> translation pack mapping.

        Raises:
            MalformedBundleError: If the file is not an object of strings.
        """
        data = self.read_json(path)
        if not isinstance(data, dict) or not all(
            isinstance(location, str) for location in data.values()
        ):
            raise MalformedBundleError(
                "translations config must map bundle ids to paths"
            )
        return data

    def load_message_list(self, path: Path) -> Any:
        """Read a bundle whose top level is module key -> messages."""
        data = self.read_json(path)
        problem = bundle_shape_error(data)
        if problem:
            raise MalformedBundleError(f"{path}: {problem}")
        return data

    def find_header(self, start: Path) -> Optional[Path]:
        """Walk up from start looking for ``nls.metadata.header.json``.

        Args:
            start: Directory to start from.

        Returns:
            Path of the nearest header file, or None.
        """
        directory = Path(start)
        while True:
            candidate = directory / HEADER_FILE
            if self.exists(candidate):
                return candidate
            if directory.parent == directory:
                return None
            directory = directory.parent
