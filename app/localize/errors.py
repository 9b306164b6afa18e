"""Custom exceptions for message bundle resolution.

Missing files are reported with the built-in FileNotFoundError and drive
fallthrough to the next resolution strategy. The exceptions below cover data
that exists but cannot be used.
"""


class LocalizeError(Exception):
    """Base exception for all localization errors.

    Example:
        try:
            loader.load_metadata(root)
        except LocalizeError as e:
            logger.error("bundle_error", error=str(e))
    """

    pass


class MalformedBundleError(LocalizeError):
    """Raised when a metadata, header, translation pack or config file has the wrong shape.

    Example:
        >>> MetadataEntry.from_dict({"messages": ["a"], "keys": []})
        Traceback (most recent call last):
        ...
        MalformedBundleError: messages and keys differ in length (1 != 0)
    """

    pass


class CorruptedCacheError(LocalizeError):
    """Raised when an on-disk cache entry cannot be decoded.

    Attributes:
        path: Location of the corrupted cache entry.
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupted cache entry {path}: {reason}")
