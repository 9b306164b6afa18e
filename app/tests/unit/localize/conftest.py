"""Feature-level fixtures for message bundle resolution tests.

Provides bundle trees, language pack setups and resolvers written to a
temporary directory.
"""

import pytest

from localize.resolver import BundleResolver
from tests.factories.localize import make_bundle_tree, make_language_pack_setup

GERMAN_BUNDLE = {
    "main": ["Guten Tag Welt", "Auf Wiedersehen {0}"],
    "util/helper": ["Helfer bereit"],
}
DEFAULT_BUNDLE = {
    "main": ["Good day world", "Goodbye {0}"],
    "util/helper": ["Helper ready"],
}


@pytest.fixture
def bundle_root(tmp_path):
    """Bundle root shipping a German and a default in-the-box bundle.

    Layout:
    - ext/out/nls.metadata.json
    - ext/out/nls.metadata.header.json
    - ext/out/nls.bundle.de.json
    - ext/out/nls.bundle.json
    """
    return make_bundle_tree(
        tmp_path / "ext" / "out",
        bundles={
            "nls.bundle.de.json": GERMAN_BUNDLE,
            "nls.bundle.json": DEFAULT_BUNDLE,
        },
    )


@pytest.fixture
def bare_bundle_root(tmp_path):
    """Bundle root with metadata and header but no shipped bundles."""
    return make_bundle_tree(tmp_path / "bare" / "out")


@pytest.fixture
def language_pack(tmp_path):
    """Installed German language pack for publisher.extension."""
    return make_language_pack_setup(tmp_path / "lp")


@pytest.fixture
def resolver():
    """Resolver with the default configuration (dev mode, no locale)."""
    return BundleResolver()
