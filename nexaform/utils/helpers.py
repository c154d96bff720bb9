"""
NexaForm Helpers
================

Conversions shared by binding, rules and rendering.

Submitted values are strings, nested maps or lists of strings. These
helpers give one answer to "what text is this?" and "is this on?" for
all of them.
"""

from __future__ import annotations

from typing import Any

from nexaform.core.paths import ABSENT

# Values an HTML control sends for "off"
FALSY_STRINGS = frozenset({"", "0"})


def as_text(value: Any) -> str:
    """
    Convert a bound value to text.

    Example:
        >>> as_text(None), as_text(True), as_text(False), as_text(12)
        ('', '1', '', '12')
    """
    if value is None or value is ABSENT:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, str):
        return value
    return str(value)


def is_truthy(value: Any) -> bool:
    """
    Whether a submitted value means "on".

    "0", empty strings, whitespace and empty collections are off; a
    checkbox companion field posts "0" when unticked.

    Example:
        >>> is_truthy("1"), is_truthy("0"), is_truthy(" "), is_truthy(["a"])
        (True, False, False, True)
    """
    if value is None or value is ABSENT:
        return False
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return as_text(value).strip() not in FALSY_STRINGS
