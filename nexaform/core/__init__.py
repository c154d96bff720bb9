"""
NexaForm Core Module
====================

Collaborators forms rely on:
- Paths: slash paths to HTML names, ids and payload lookups
- Request/Response: HTTP message abstractions
- Middleware: ShortCircuit handling for partial renders and redirects
- ServiceContainer: explicit services for form builders
- Config: Configuration management
"""

from nexaform.core.config import Config, get_config
from nexaform.core.container import ServiceContainer, ServiceNotFoundError
from nexaform.core.middleware import Middleware, ShortCircuitMiddleware, run_handler
from nexaform.core.paths import ABSENT, resolve, split_path, to_element_id, to_field_name
from nexaform.core.request import Request
from nexaform.core.response import (
    HTMLResponse,
    JSONResponse,
    RedirectResponse,
    Response,
    ShortCircuit,
    redirect_instruction,
)

__all__ = [
    "ABSENT",
    "resolve",
    "split_path",
    "to_element_id",
    "to_field_name",
    "Request",
    "Response",
    "HTMLResponse",
    "JSONResponse",
    "RedirectResponse",
    "ShortCircuit",
    "redirect_instruction",
    "Middleware",
    "ShortCircuitMiddleware",
    "run_handler",
    "ServiceContainer",
    "ServiceNotFoundError",
    "Config",
    "get_config",
]
