"""
Unit tests for application-scoped providers.

Tests cover:
- get_settings() caching behavior
- get_bundle_resolver() caching behavior
"""

import json
from unittest.mock import patch

import pytest

from infrastructure.configuration import Settings
from infrastructure.services.providers import get_bundle_resolver, get_settings
from localize.resolver import BundleResolver


@pytest.fixture(autouse=True)
def clear_provider_caches():
    get_settings.cache_clear()
    get_bundle_resolver.cache_clear()
    yield
    get_settings.cache_clear()
    get_bundle_resolver.cache_clear()


class TestGetSettings:
    """Tests for get_settings() provider function."""

    def test_get_settings_returns_settings_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_get_settings_returns_cached_instance(self):
        assert get_settings() is get_settings()

    def test_get_settings_cache_can_be_cleared(self):
        instance1 = get_settings()
        get_settings.cache_clear()
        instance2 = get_settings()
        assert instance1 is not instance2


class TestGetBundleResolver:
    """Tests for get_bundle_resolver() provider function."""

    def test_returns_resolver(self):
        assert isinstance(get_bundle_resolver(), BundleResolver)

    def test_returns_cached_instance(self):
        assert get_bundle_resolver() is get_bundle_resolver()

    def test_configured_from_environment(self, monkeypatch):
        monkeypatch.setenv("NLS_CONFIG", json.dumps({"locale": "pt-BR"}))

        resolver = get_bundle_resolver()

        assert resolver.configuration.locale == "pt-br"
        assert resolver.configuration.language == "pt-br"

    @patch("infrastructure.services.providers.configure_logging")
    def test_configures_logging_once(self, mock_configure_logging):
        get_bundle_resolver()
        get_bundle_resolver()

        mock_configure_logging.assert_called_once_with(settings=get_settings())
