"""Tests for localize.cache module."""

import json
import os
from unittest.mock import Mock, patch

import pytest

from localize.cache import BundleCache
from localize.errors import CorruptedCacheError

BUNDLE = {"main": ["Guten Tag Welt", "Auf Wiedersehen {0}"]}


@pytest.fixture
def cache(tmp_path):
    return BundleCache(tmp_path / "cache")


@pytest.mark.unit
class TestBundleCacheRead:
    """Tests for reading cache entries."""

    def test_path_for(self, cache, tmp_path):
        assert cache.path_for("pub.ext", "abc") == tmp_path / "cache" / "pub.ext-abc.json"

    def test_missing_entry(self, cache):
        with pytest.raises(FileNotFoundError):
            cache.read("pub.ext", "abc")

    def test_hit_touches_entry(self, cache):
        cache.write("pub.ext", "abc", BUNDLE)
        path = cache.path_for("pub.ext", "abc")
        os.utime(path, (0, 0))

        assert cache.read("pub.ext", "abc") == BUNDLE
        assert path.stat().st_mtime > 0

    def test_invalid_json_is_corrupted(self, cache):
        cache.cache_root.mkdir(parents=True)
        cache.path_for("pub.ext", "abc").write_text("{not json")

        with pytest.raises(CorruptedCacheError) as exc_info:
            cache.read("pub.ext", "abc")
        assert exc_info.value.path == cache.path_for("pub.ext", "abc")

    def test_non_object_is_corrupted(self, cache):
        cache.cache_root.mkdir(parents=True)
        cache.path_for("pub.ext", "abc").write_text("[1, 2]")

        with pytest.raises(CorruptedCacheError):
            cache.read("pub.ext", "abc")

    @pytest.mark.parametrize(
        "entry", [{"main": 5}, {"main": "Hallo"}, {"main": [1, "Hallo"]}]
    )
    def test_wrongly_typed_messages_are_corrupted(self, cache, entry):
        cache.cache_root.mkdir(parents=True)
        cache.path_for("pub.ext", "abc").write_text(json.dumps(entry))

        with pytest.raises(CorruptedCacheError) as exc_info:
            cache.read("pub.ext", "abc")
        assert "main" in exc_info.value.reason


@pytest.mark.unit
class TestBundleCacheReadOrBuild:
    """Tests for BundleCache.read_or_build."""

    def test_miss_builds_and_writes(self, cache):
        builder = Mock(return_value=BUNDLE)

        bundle = cache.read_or_build("pub.ext", "abc", builder)

        assert bundle == BUNDLE
        builder.assert_called_once()
        stored = json.loads(cache.path_for("pub.ext", "abc").read_text(encoding="utf-8"))
        assert stored == BUNDLE

    def test_hit_skips_builder(self, cache):
        cache.write("pub.ext", "abc", BUNDLE)
        builder = Mock(return_value={"main": ["other"]})

        assert cache.read_or_build("pub.ext", "abc", builder) == BUNDLE
        builder.assert_not_called()

    @patch("localize.cache.logger")
    def test_corrupted_entry_is_deleted_and_not_rewritten(self, mock_logger, cache):
        cache.cache_root.mkdir(parents=True)
        path = cache.path_for("pub.ext", "abc")
        path.write_text("{{")

        bundle = cache.read_or_build("pub.ext", "abc", Mock(return_value=BUNDLE))

        assert bundle == BUNDLE
        assert not path.exists()
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "bundle_cache_corrupted"

    def test_builder_without_bundle_is_not_cached(self, cache):
        assert cache.read_or_build("pub.ext", "abc", Mock(return_value=None)) is None
        assert not cache.path_for("pub.ext", "abc").exists()

    def test_other_io_errors_propagate(self, cache):
        cache.path_for("pub.ext", "abc").mkdir(parents=True)
        builder = Mock(return_value=BUNDLE)

        with pytest.raises(OSError):
            cache.read_or_build("pub.ext", "abc", builder)
        builder.assert_not_called()


@pytest.mark.unit
class TestBundleCacheWrite:
    """Tests for exclusive cache writes."""

    def test_creates_cache_root(self, tmp_path):
        cache = BundleCache(tmp_path / "a" / "b")
        assert cache.write("pub.ext", "abc", BUNDLE) is True
        assert cache.path_for("pub.ext", "abc").exists()

    def test_first_writer_wins(self, cache):
        assert cache.write("pub.ext", "abc", BUNDLE) is True
        assert cache.write("pub.ext", "abc", {"main": ["second"]}) is False

        assert cache.read("pub.ext", "abc") == BUNDLE

    def test_no_temporary_files_left(self, cache):
        cache.write("pub.ext", "abc", BUNDLE)
        cache.write("pub.ext", "abc", BUNDLE)

        assert [p.name for p in cache.cache_root.iterdir()] == ["pub.ext-abc.json"]

    def test_non_ascii_is_preserved(self, cache):
        cache.write("pub.ext", "abc", {"main": ["Tschüss"]})
        assert cache.read("pub.ext", "abc") == {"main": ["Tschüss"]}

    def test_failed_write_leaves_nothing_behind(self, cache):
        with patch("localize.cache.json.dump", side_effect=RuntimeError("disk full")):
            with pytest.raises(RuntimeError):
                cache.write("pub.ext", "abc", BUNDLE)

        assert not cache.path_for("pub.ext", "abc").exists()
        assert list(cache.cache_root.iterdir()) == []


@pytest.mark.unit
class TestBundleCacheMaintenance:
    """Tests for touch and discard."""

    @patch("localize.cache.logger")
    def test_discard_missing_entry_logs(self, mock_logger, cache):
        cache.discard(cache.path_for("pub.ext", "abc"))
        mock_logger.error.assert_called_once()

    @patch("localize.cache.logger")
    def test_touch_missing_entry_is_ignored(self, mock_logger, cache):
        cache.touch(cache.path_for("pub.ext", "abc"))
        mock_logger.debug.assert_called_once()
