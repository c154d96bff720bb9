"""
NexaForm XSS Protection
=======================

HTML entity encoding for submitted data.

Submitted payloads are escaped once, as a whole, before any field reads
them. Bound values are then safe to place back into markup, and the
identity token comparison works on the same escaped form.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping


@dataclass
class XSSConfig:
    """XSS protection configuration."""

    # Escape single and double quotes as well as <, > and &
    quote: bool = True

    # Escape mapping keys, not just values
    escape_keys: bool = False


class XSSProtection:
    """
    HTML escaping for strings and nested payloads.

    Example:
        xss = XSSProtection()

        xss.escape("<b>\"hi\"</b>")
        # '&lt;b&gt;&quot;hi&quot;&lt;/b&gt;'

        xss.escape_payload({"user": {"name": "<script>"}})
        # {'user': {'name': '&lt;script&gt;'}}
    """

    def __init__(self, config: XSSConfig = None) -> None:
        self.config = config or XSSConfig()

    def escape(self, text: Any) -> str:
        """
        Escape HTML entities.

        None becomes an empty string; other non-strings are converted
        with str() first.
        """
        if text is None:
            return ""
        return html.escape(str(text), quote=self.config.quote)

    def escape_payload(self, data: Any) -> Any:
        """
        Escape every string inside a nested payload.

        Mappings and lists are copied, never modified in place. Numbers,
        booleans and None pass through unchanged.
        """
        if isinstance(data, Mapping):
            escaped: Dict[Any, Any] = {}
            for key, value in data.items():
                if self.config.escape_keys and isinstance(key, str):
                    key = self.escape(key)
                escaped[key] = self.escape_payload(value)
            return escaped

        if isinstance(data, (list, tuple)):
            items: List[Any] = [self.escape_payload(item) for item in data]
            return items

        if isinstance(data, str):
            return self.escape(data)

        return data


_xss = XSSProtection()


def get_xss_protection() -> XSSProtection:
    """Get default XSS protection instance."""
    return _xss


def escape_html(text: Any) -> str:
    """Escape HTML entities."""
    return _xss.escape(text)


def escape_payload(data: Any) -> Any:
    """Escape all strings of a nested payload."""
    return _xss.escape_payload(data)
