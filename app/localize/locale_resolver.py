"""Locale fallback resolution.

Finds the most specific localized file for a language tag by walking the
fallback chain (``de-ch`` -> ``de``) before settling on the unlocalized
default. The same search backs per-module sibling files
(``<base>.nls.<tag>.json``) and aggregated bundles (``nls.bundle.<tag>.json``).
"""

from pathlib import Path
from typing import Callable, Dict, Iterator, Optional, TypeVar

from infrastructure.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")

DEFAULT_FILE_SUFFIX = ".nls.json"
DEFAULT_BUNDLE_NAME = "nls.bundle.json"


def candidates(language: Optional[str]) -> Iterator[str]:
    """Yield the fallback chain of a language tag, most specific first.

    Args:
        language: Tag such as "de-ch".

    Yields:
        "de-ch", then "de".
    """
    tag = language
    while tag:
        yield tag
        index = tag.rfind("-")
        tag = tag[:index] if index > 0 else None


class LocaleResolver:
    """Resolves localized file candidates for one configuration epoch.

    Attributes:
        language: Tag searched first; None means only defaults are used.
        pseudo: Pseudo-localization active, always use defaults.
        cache_resolution: Memoize winners per memo key.
    """

    def __init__(
        self,
        language: Optional[str],
        pseudo: bool = False,
        cache_resolution: bool = True,
        exists: Callable[[Path], bool] = Path.exists,
    ):
        self.language = language
        self.pseudo = pseudo
        self.cache_resolution = cache_resolution
        self._exists = exists
        self._memo: Dict[str, object] = {}

    def resolve_candidate(
        self,
        probe: Callable[[T], bool],
        build: Callable[[str], T],
        default: T,
        memo_key: Optional[str] = None,
    ) -> T:
        """Return the first candidate accepted by probe, else default.

        Args:
            probe: Returns True when a candidate is available.
            build: Turns a language tag into a candidate.
            default: Unlocalized candidate, returned without probing.
            memo_key: Key under which the winner is memoized.

        Returns:
            The matched candidate or default.
        """
        if self.cache_resolution and memo_key is not None and memo_key in self._memo:
            return self._memo[memo_key]  # type: ignore[return-value]

        result = default
        if not self.pseudo and self.language:
            for tag in candidates(self.language):
                candidate = build(tag)
                if probe(candidate):
                    result = candidate
                    break

        if self.cache_resolution and memo_key is not None:
            self._memo[memo_key] = result
        return result

    def resolve_file(self, base: Path) -> Path:
        """Resolve the sibling message file of a module.

        Args:
            base: Module path without extension.

        Returns:
            ``<base>.nls.<tag>.json`` for the best tag, or ``<base>.nls.json``.
        """
        base_str = str(base)
        resolved = self.resolve_candidate(
            probe=self._exists,
            build=lambda tag: Path(f"{base_str}.nls.{tag}.json"),
            default=Path(base_str + DEFAULT_FILE_SUFFIX),
            memo_key=f"file:{base_str}",
        )
        logger.debug("resolved_file_candidate", base=base_str, candidate=str(resolved))
        return resolved

    def find_in_the_box_bundle(self, root: Path) -> Optional[Path]:
        """Find a pre-built aggregated bundle under root.

        Args:
            root: Bundle root directory.

        Returns:
            Best ``nls.bundle.<tag>.json``, else ``nls.bundle.json`` when it
            exists, else None.
        """
        candidate = self.resolve_candidate(
            probe=self._exists,
            build=lambda tag: root / f"nls.bundle.{tag}.json",
            default=root / DEFAULT_BUNDLE_NAME,
            memo_key=f"bundle:{root}",
        )
        if candidate.name == DEFAULT_BUNDLE_NAME and not self._exists(candidate):
            return None
        return candidate
