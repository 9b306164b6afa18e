"""Lookup functions handed to callers.

Every localizer is called as ``localize(key, message, *args)`` and always
returns a string; failures are logged, never raised.
"""

from typing import Any, List, Optional, Sequence

from infrastructure.logging import get_module_logger
from localize.formatter import MessageFormatter
from localize.models import MessageKey, NamedKey, PositionalKey

logger = get_module_logger()

MESSAGES_NOT_FOUND = "Messages not found."
UNSUPPORTED_FILE_FORMAT = "File bundle has unsupported format. See log for details."
BUNDLE_NOT_FOUND = "Failed to load message bundle. See log for details."


class Localizer:
    """Base class of lookup functions."""

    def __call__(self, key: Any, message: Optional[str] = None, *args: Any) -> str:
        raise NotImplementedError


class ScopedLocalizer(Localizer):
    """Looks up messages of one module by position.

    Attributes:
        messages: Resolved messages of the module.
        formatter: Formatter applying arguments and pseudo-localization.
    """

    def __init__(self, messages: Sequence[str], formatter: MessageFormatter):
        self.messages: List[str] = list(messages)
        self.formatter = formatter

    def __call__(self, key: Any, message: Optional[str] = None, *args: Any) -> str:
        try:
            message_key = MessageKey.of(key)
        except TypeError:
            logger.error("broken_localize_call", key=repr(key), stack_info=True)
            return ""

        if isinstance(message_key, PositionalKey):
            return self._lookup(message_key, args)
        return self._fallback(message_key, message, args)

    def _lookup(self, key: PositionalKey, args: Sequence[Any]) -> str:
        if not 0 <= key.index < len(self.messages):
            logger.error(
                "localize_index_out_of_bounds",
                index=key.index,
                message_count=len(self.messages),
                stack_info=True,
            )
            return ""
        return self.formatter.format(self.messages[key.index], args)

    def _fallback(
        self, key: NamedKey, message: Optional[str], args: Sequence[Any]
    ) -> str:
        if isinstance(message, str):
            logger.warning("message_not_externalized", key=key.key, message=message)
            return self.formatter.format(message, args)
        logger.error("broken_localize_call", key=key.key, stack_info=True)
        return ""


class DevLocalizer(Localizer):
    """Formats the default message directly; used before messages are extracted."""

    def __init__(self, formatter: MessageFormatter):
        self.formatter = formatter

    def __call__(self, key: Any, message: Optional[str] = None, *args: Any) -> str:
        if not isinstance(message, str):
            logger.error("broken_localize_call", key=repr(key), stack_info=True)
            return ""
        return self.formatter.format(message, args)


class FixedMessageLocalizer(Localizer):
    """Returns the same diagnostic text for every call."""

    def __init__(self, text: str):
        self.text = text

    def __call__(self, key: Any = None, message: Optional[str] = None, *args: Any) -> str:
        return self.text


def localize(key: Any, message: str, *args: Any) -> str:
    """Dev-mode lookup: format the default message, ignore the key."""
    return MessageFormatter().format(message, args)
