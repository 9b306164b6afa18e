"""On-disk cache of assembled bundles.

Entries are named ``{identity}-{metadataHash}.json`` under the cache root.
A hit refreshes the entry's modification time so an external reaper can
evict entries that have not been used for a while.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from infrastructure.logging import get_module_logger
from localize.errors import CorruptedCacheError
from localize.models import ResolvedBundle, bundle_shape_error

logger = get_module_logger()

BundleBuilder = Callable[[], Optional[ResolvedBundle]]


class BundleCache:
    """File-system cache for assembled bundles.

    Concurrent writers are not coordinated; entries are published with an
    exclusive hard link, so the first complete entry wins and readers never
    observe a partially written file.

    Attributes:
        cache_root: Directory holding cache entries.
    """

    def __init__(self, cache_root: Path):
        self.cache_root = Path(cache_root)

    def path_for(self, identity: str, metadata_hash: str) -> Path:
        return self.cache_root / f"{identity}-{metadata_hash}.json"

    def read(self, identity: str, metadata_hash: str) -> ResolvedBundle:
        """Read a cache entry.

        Raises:
            FileNotFoundError: If there is no entry.
            CorruptedCacheError: If the entry cannot be decoded.
            OSError: For any other I/O failure.
        """
        path = self.path_for(identity, metadata_hash)
        with open(path, "r", encoding="utf-8") as f:
            try:
                bundle = json.load(f)
            except ValueError as e:
                raise CorruptedCacheError(path, str(e)) from e
        problem = bundle_shape_error(bundle)
        if problem:
            raise CorruptedCacheError(path, problem)
        self.touch(path)
        return bundle

    def read_or_build(
        self,
        identity: str,
        metadata_hash: str,
        builder: BundleBuilder,
    ) -> Optional[ResolvedBundle]:
        """Return the cached bundle or build (and usually store) a new one.

        A missing entry is built and written. A corrupted entry is deleted and
        the rebuilt bundle is kept in memory only. A builder returning None
        means there is nothing to cache.

        Args:
            identity: Bundle identity.
            metadata_hash: Hash of the extraction metadata.
            builder: Produces the bundle on a cache miss.

        Returns:
            The bundle, or None when the builder has none.

        Raises:
            OSError: For I/O failures other than a missing entry.
        """
        write_entry = False
        try:
            bundle = self.read(identity, metadata_hash)
            logger.debug("bundle_cache_hit", bundle_id=identity, hash=metadata_hash)
            return bundle
        except FileNotFoundError:
            write_entry = True
        except CorruptedCacheError as e:
            logger.warning(
                "bundle_cache_corrupted",
                path=str(e.path),
                reason=e.reason,
            )
            self.discard(e.path)

        bundle = builder()
        if bundle is None or not write_entry:
            return bundle

        self.write(identity, metadata_hash, bundle)
        return bundle

    def write(self, identity: str, metadata_hash: str, bundle: ResolvedBundle) -> bool:
        """Store a bundle unless another writer already stored it.

        Args:
            identity: Bundle identity.
            metadata_hash: Hash of the extraction metadata.
            bundle: Bundle to store.

        Returns:
            True if this call created the entry, False if it already existed.

        Raises:
            OSError: If the cache root cannot be created or written.
        """
        self.cache_root.mkdir(parents=True, exist_ok=True)
        target = self.path_for(identity, metadata_hash)

        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=self.cache_root
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(bundle, f, ensure_ascii=False)
            try:
                os.link(temp_name, target)
            except FileExistsError:
                logger.info("bundle_cache_entry_exists", path=str(target))
                return False
        finally:
            os.unlink(temp_name)

        logger.info("bundle_cache_written", path=str(target), module_count=len(bundle))
        return True

    def touch(self, path: Path) -> None:
        """Refresh the modification time of an entry, ignoring failures."""
        try:
            os.utime(path, None)
        except OSError as e:
            logger.debug("bundle_cache_touch_failed", path=str(path), error=str(e))

    def discard(self, path: Path) -> None:
        """Delete an entry, logging instead of raising on failure."""
        try:
            os.unlink(path)
        except OSError as e:
            logger.error("bundle_cache_delete_failed", path=str(path), error=str(e))
