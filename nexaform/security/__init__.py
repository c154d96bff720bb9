"""
NexaForm Security Module
========================

HTML escaping of submitted payloads. Every value a form shows or
validates passes through here first.
"""

from nexaform.security.xss import XSSConfig, XSSProtection, escape_html, escape_payload, get_xss_protection

__all__ = [
    "XSSConfig",
    "XSSProtection",
    "escape_html",
    "escape_payload",
    "get_xss_protection",
]
