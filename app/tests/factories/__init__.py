"""Test data factories for deterministic test data generation."""

from tests.factories.localize import (
    make_bundle_tree,
    make_configuration,
    make_header,
    make_language_pack_setup,
    make_metadata,
    make_metadata_header,
    make_translation_pack,
    write_json,
)

__all__ = [
    "make_bundle_tree",
    "make_configuration",
    "make_header",
    "make_language_pack_setup",
    "make_metadata",
    "make_metadata_header",
    "make_translation_pack",
    "write_json",
]
