"""Message formatting with positional arguments and pseudo-localization."""

import re
from typing import Any, Sequence

# Full-width brackets mark pseudo-localized text
PSEUDO_OPEN = "\uff3b"
PSEUDO_CLOSE = "\uff3d"

_PLACEHOLDER = re.compile(r"\{(\d+)\}")
_VOWEL = re.compile(r"[aouei]")


def pseudo_localize(template: str) -> str:
    """Double every lowercase vowel and wrap the text in full-width brackets.

    Args:
        template: Message template before argument substitution.

    Returns:
        Pseudo-localized template, e.g. "Hello" -> "\\uff3bHeelloo\\uff3d".
    """
    return PSEUDO_OPEN + _VOWEL.sub(r"\g<0>\g<0>", template) + PSEUDO_CLOSE


def _stringify(arg: Any):
    # JSON spellings for null, booleans and integral floats
    if isinstance(arg, str):
        return arg
    if arg is None:
        return "null"
    if isinstance(arg, bool):
        return "true" if arg else "false"
    if isinstance(arg, float) and arg.is_integer():
        return str(int(arg))
    if isinstance(arg, (int, float)):
        return str(arg)
    return None


class MessageFormatter:
    """Substitutes ``{N}`` placeholders with positional arguments.

    Attributes:
        pseudo: Apply the pseudo-localization transform before substitution.
    """

    def __init__(self, pseudo: bool = False):
        self.pseudo = pseudo

    def format(self, template: str, args: Sequence[Any] = ()) -> str:
        """Format a message template.

        Placeholders whose index is out of range, or whose argument is not a
        string, number, boolean or None, are left as they are.

        Args:
            template: Message with ``{0}``, ``{1}``... placeholders.
            args: Positional arguments.

        Returns:
            Formatted message.
        """
        if self.pseudo:
            template = pseudo_localize(template)
        if not args:
            return template

        def replace(match: "re.Match[str]") -> str:
            index = int(match.group(1))
            if index >= len(args):
                return match.group(0)
            replacement = _stringify(args[index])
            return match.group(0) if replacement is None else replacement

        return _PLACEHOLDER.sub(replace, template)


def format_message(template: str, args: Sequence[Any] = (), pseudo: bool = False) -> str:
    """Format a template without keeping a formatter around."""
    return MessageFormatter(pseudo=pseudo).format(template, args)
